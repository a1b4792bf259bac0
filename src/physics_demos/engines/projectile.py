# MIT License (see LICENSE)
"""
Projectile integrator.

A point mass launched from the origin over flat ground (y = 0) under
gravity. In advanced mode it also feels quadratic air drag relative to a
horizontal wind:

    a = (0, -g) - (F_d/m)·v_rel/|v_rel|,   F_d = ½ ρ Cd A |v_rel|²

Integration is semi-implicit Euler with no substepping. When a step takes
the projectile through the ground plane the crossing point is linearly
interpolated inside the step, the projectile is pinned there at rest and a
single ImpactEvent is emitted. It does not bounce; only reset() launches it
again.

Velocities are reported in the physical frame (vy > 0 is up). Drawing on
a y-down canvas is left to the caller (see util.to_canvas).
"""
from __future__ import annotations
import math

import numpy as np
from loguru import logger

from ..config import ClampedParameter, ProjectileConfig, clamp_config
from ..constants import CM2_TO_M2
from ..core.forces import gravity_acceleration, quadratic_drag_acceleration
from ..core.integrators import clamp_dt, semi_implicit_euler
from ..core.invariants import energy_readout, kinetic_energy, potential_energy
from ..observers.adapter import StepObserver
from ..types import Derived, ImpactEvent, ProjectileState
from ..util import deg_to_rad
from .base import ObserverHub


class ProjectileEngine:
    """
    Stepper for the projectile demo.

    Usage:
        engine = ProjectileEngine(ProjectileConfig(launch_angle_deg=30))
        while not engine.state.grounded:
            engine.step(1/60)
        print(engine.state.position[0])   # horizontal range
    """

    def __init__(self, config: ProjectileConfig | None = None):
        self._observers = ObserverHub()
        self._state = ProjectileState()
        self._config = ProjectileConfig()
        self._clamped: tuple[ClampedParameter, ...] = ()
        self.configure(config or ProjectileConfig())

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def config(self) -> ProjectileConfig:
        return self._config

    @property
    def state(self) -> ProjectileState:
        return self._state

    @property
    def clamped(self) -> tuple[ClampedParameter, ...]:
        return self._clamped

    def configure(self, config: ProjectileConfig) -> None:
        """Replace the configuration (clamped into range) and reset."""
        self._config, self._clamped = clamp_config(config)
        self.reset()

    def reset(self) -> ProjectileState:
        """Place the projectile at the launch point with its launch velocity."""
        vx, vy = self.launch_components()
        self._state = ProjectileState(
            time=0.0,
            position=(0.0, 0.0),
            velocity=(vx, vy),
            grounded=False,
        )
        logger.debug("projectile reset: v0=({:.3f}, {:.3f})", vx, vy)
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

    def acceleration(self, velocity: np.ndarray) -> np.ndarray:
        """
        Total acceleration at the given velocity.

        Basic mode is pure gravity. Advanced mode adds quadratic drag
        relative to the wind; zero relative speed adds nothing.
        """
        c = self._config
        a = gravity_acceleration(c.gravity)
        if c.advanced:
            a = a + quadratic_drag_acceleration(
                velocity,
                wind_speed=c.wind_speed,
                mass=c.mass,
                drag_coefficient=c.drag_coefficient,
                area_m2=c.cross_section_area_cm2 * CM2_TO_M2,
            )
        return a

    def step(self, dt: float) -> ProjectileState:
        """
        Advance the flight by dt seconds.

        A grounded projectile or a zero timestep leaves the state untouched
        and notifies nobody.

        Returns:
            Snapshot of the state after the step.
        """
        dt = clamp_dt(dt)
        s = self._state
        if s.grounded or dt == 0.0:
            return s.copy()

        p0, v0 = s.position, s.velocity
        p1, v1 = semi_implicit_euler(p0, v0, self.acceleration(v0), dt)

        if p1[1] <= 0.0 and (p1[1] < p0[1] or s.time > 0.0):
            self._land(p0, v0, p1, v1, dt)
            return self._state.copy()

        s.position = p1
        s.velocity = v1
        s.time += dt
        snapshot = s.copy()
        self._observers.step(snapshot)
        return snapshot

    def _land(
        self,
        p0: np.ndarray,
        v0: np.ndarray,
        p1: np.ndarray,
        v1: np.ndarray,
        dt: float,
    ) -> None:
        """Pin the projectile at the interpolated ground crossing and emit the impact."""
        s = self._state
        drop = p0[1] - p1[1]
        frac = p0[1] / drop if drop > 0.0 else 1.0
        frac = min(max(frac, 0.0), 1.0)

        impact_pos = p0 + frac * (p1 - p0)
        impact_vel = v0 + frac * (v1 - v0)

        s.position = np.array([impact_pos[0], 0.0], dtype=np.float64)
        s.velocity = np.zeros(2, dtype=np.float64)
        s.time += frac * dt
        s.grounded = True

        event = ImpactEvent(
            time=s.time,
            position=(float(impact_pos[0]), 0.0),
            velocity=(float(impact_vel[0]), float(impact_vel[1])),
        )
        logger.info("projectile impact at x={:.3f} m, t={:.3f} s", event.position[0], event.time)

        self._observers.step(s.copy())
        self._observers.event(event)

    # -------------------------------------------------------------------------
    # Readouts
    # -------------------------------------------------------------------------

    def get_derived(self) -> Derived:
        """Energy relative to the ground: PE = m·g·y, KE = ½·m·|v|²."""
        c, s = self._config, self._state
        return energy_readout(
            potential_energy(c.mass, c.gravity, float(s.position[1])),
            kinetic_energy(c.mass, s.velocity),
        )

    def launch_components(self) -> tuple[float, float]:
        """Initial (vx, vy) from launch speed and angle."""
        c = self._config
        theta = deg_to_rad(c.launch_angle_deg)
        return c.launch_speed * math.cos(theta), c.launch_speed * math.sin(theta)

    def theoretical_range(self) -> float:
        """Drag-free range R = v²·sin(2θ)/g."""
        c = self._config
        theta = deg_to_rad(c.launch_angle_deg)
        return c.launch_speed ** 2 * math.sin(2.0 * theta) / c.gravity

    def theoretical_max_height(self) -> float:
        """Drag-free apex height H = (v·sin θ)²/(2g)."""
        _, vy = self.launch_components()
        return vy * vy / (2.0 * self._config.gravity)

    def theoretical_flight_time(self) -> float:
        """Drag-free time of flight T = 2·v·sin θ/g."""
        _, vy = self.launch_components()
        return 2.0 * vy / self._config.gravity
