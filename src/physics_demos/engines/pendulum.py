# MIT License (see LICENSE)
"""
Damped simple pendulum integrator.

Integrates the full nonlinear equation of motion

    θ'' = -(g/L)·sin θ - (b/m)·θ'

with semi-implicit Euler. The small-angle period T = 2π·sqrt(L/g) is
exposed as a reference readout only; the integrator itself makes no
small-angle assumption, so large release angles run slower than T.

With b = 0 the integrator is symplectic: total energy oscillates slightly
around its initial value (O(dt) amplitude) but does not drift.

The angle is never wrapped. After the pendulum is driven over the top it
may exceed ±π; use util.wrap_angle for display.
"""
from __future__ import annotations
import math

from loguru import logger

from ..config import ClampedParameter, PendulumConfig, clamp_config
from ..constants import PENDULUM_PIVOT_PX, PENDULUM_SCALE
from ..core.forces import pendulum_angular_acceleration
from ..core.integrators import clamp_dt, semi_implicit_euler
from ..core.invariants import energy_readout, kinetic_energy, potential_energy
from ..observers.adapter import StepObserver
from ..types import Derived, PendulumState
from ..util import deg_to_rad
from .base import ObserverHub


class PendulumEngine:
    """
    Stepper for the pendulum demo.

    Usage:
        engine = PendulumEngine(PendulumConfig(length=2.0))
        engine.step(frame_delta)
        x, y = engine.bob_position()
        print(engine.get_derived().period)
    """

    def __init__(self, config: PendulumConfig | None = None):
        self._observers = ObserverHub()
        self._state = PendulumState()
        self._config = PendulumConfig()
        self._clamped: tuple[ClampedParameter, ...] = ()
        self.theoretical_period = 0.0
        self.configure(config or PendulumConfig())

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def config(self) -> PendulumConfig:
        return self._config

    @property
    def state(self) -> PendulumState:
        return self._state

    @property
    def clamped(self) -> tuple[ClampedParameter, ...]:
        return self._clamped

    def configure(self, config: PendulumConfig) -> None:
        """Replace the configuration (clamped into range) and reset."""
        self._config, self._clamped = clamp_config(config)
        self.reset()

    def reset(self) -> PendulumState:
        """Release the bob from rest at the initial angle."""
        c = self._config
        self._state = PendulumState(
            angle=deg_to_rad(c.initial_angle_deg),
            angular_velocity=0.0,
            time=0.0,
        )
        self.theoretical_period = 2.0 * math.pi * math.sqrt(c.length / c.gravity)
        logger.debug("pendulum reset: θ0={:.4f} rad, T0={:.4f} s", self._state.angle, self.theoretical_period)
        snapshot = self._state.copy()
        self._observers.reset(snapshot)
        return snapshot

    def attach(self, observer: StepObserver) -> None:
        self._observers.attach(observer)

    def detach(self, observer: StepObserver) -> None:
        self._observers.detach(observer)

    # -------------------------------------------------------------------------
    # Dynamics
    # -------------------------------------------------------------------------

    def step(self, dt: float) -> PendulumState:
        """
        Advance the pendulum by dt seconds (clamped to MAX_DT).

        Returns:
            Snapshot of the state after the step.
        """
        dt = clamp_dt(dt)
        s = self._state
        if dt == 0.0:
            return s.copy()

        c = self._config
        alpha = pendulum_angular_acceleration(
            s.angle, s.angular_velocity, c.gravity, c.length, c.damping, c.mass
        )
        s.angle, s.angular_velocity = semi_implicit_euler(s.angle, s.angular_velocity, alpha, dt)
        s.time += dt

        snapshot = s.copy()
        self._observers.step(snapshot)
        return snapshot

    # -------------------------------------------------------------------------
    # Readouts
    # -------------------------------------------------------------------------

    def get_derived(self) -> Derived:
        """
        Energy relative to the lowest point of the swing.

        h = L·(1 - cos θ), v = L·ω; period is the small-angle reference.
        """
        c, s = self._config, self._state
        h = c.length * (1.0 - math.cos(s.angle))
        v = c.length * s.angular_velocity
        return energy_readout(
            potential_energy(c.mass, c.gravity, h),
            kinetic_energy(c.mass, v),
            period=self.theoretical_period,
        )

    def bob_position_of(
        self,
        state: PendulumState,
        pivot: tuple[float, float] = PENDULUM_PIVOT_PX,
        scale: float = PENDULUM_SCALE,
    ) -> tuple[float, float]:
        """
        Bob centre in canvas coordinates (y down) for a given state.

            x = pivot_x + sin θ · L · scale
            y = pivot_y + cos θ · L · scale
        """
        reach = self._config.length * scale
        return (
            pivot[0] + math.sin(state.angle) * reach,
            pivot[1] + math.cos(state.angle) * reach,
        )

    def bob_position(
        self,
        pivot: tuple[float, float] = PENDULUM_PIVOT_PX,
        scale: float = PENDULUM_SCALE,
    ) -> tuple[float, float]:
        """Bob centre for the current state; see bob_position_of."""
        return self.bob_position_of(self._state, pivot, scale)

    def phase_point(self) -> tuple[float, float]:
        """Current point (θ, ω) in phase space."""
        return self._state.angle, self._state.angular_velocity

    def reference_energy(self) -> float:
        """Potential energy at the release angle, for scaling energy bars."""
        c = self._config
        h0 = c.length * (1.0 - math.cos(deg_to_rad(c.initial_angle_deg)))
        return c.mass * c.gravity * h0
