# MIT License (see LICENSE)
"""
Bouncing-ball integrator.

A ball in a closed box (floor, ceiling, two side walls) under gravity and
quadratic air drag. Physics runs in SI units; the pixel scale is only used
to convert the ball radius and the drag constant from the UI's pixel-based
parameters. Per step:

    1. gravity        vy ← vy - g·dt
    2. drag           v  ← v·max(0, 1 - k·dt·|v|),  k = air_resistance·scale
    3. position       p  ← p + ½(v_old + v_new)·dt
    4. side walls     clamp, vx ← -e·vx
    5. floor          clamp, vy ← e·v_c, vx ← friction·vx, snap |vy| < REST_SPEED to 0
    6. ceiling        clamp, vy ← -e·v_c

With k = air_resistance·scale the drag step reproduces the per-frame pixel
rule v ← v - k_px·v·|v| exactly at the reference frame rate.

v_c is the vertical speed at the moment of contact, recovered from the
penetration depth under constant gravity (v_c² = vy² + 2g·(y - y_wall)).
Moving the ball back to the wall therefore exchanges potential for kinetic
energy exactly, and an elastic, drag-free, frictionless ball keeps its total
energy to rounding error.
"""
from __future__ import annotations
import math
from dataclasses import dataclass

import numpy as np
from loguru import logger

from ..config import BouncingBallConfig, ClampedParameter, clamp_config
from ..constants import (
    ARENA_HEIGHT,
    ARENA_WIDTH,
    BALL_DROP_POINT,
    BALL_SCALE,
    REST_SPEED,
)
from ..core.forces import drag_retention, gravity_acceleration
from ..core.integrators import average_velocity_position, clamp_dt
from ..core.invariants import energy_readout, kinetic_energy, potential_energy
from ..observers.adapter import StepObserver
from ..types import BallState, Derived
from ..util import magnitude, pixels_to_meters, to_canvas
from .base import ObserverHub


@dataclass(frozen=True)
class Arena:
    """
    Box the ball moves in, in metres with the floor at y = 0.

    Attributes:
        width: Distance between the side walls.
        height: Floor-to-ceiling distance.
        drop_point: Centre of the ball on reset.
        scale: Pixels per metre, for radius/drag conversion and drawing.
        rest_speed: Vertical speed below which a floor bounce stops.
    """
    width: float = ARENA_WIDTH
    height: float = ARENA_HEIGHT
    drop_point: tuple[float, float] = BALL_DROP_POINT
    scale: float = BALL_SCALE
    rest_speed: float = REST_SPEED


def contact_speed(vy: float, overshoot: float, g: float) -> float:
    """
    Vertical speed at the wall, given the state after overshooting it.

    Args:
        vy: Vertical velocity after the step.
        overshoot: y - y_wall (negative below the floor, positive above
                   the ceiling).
        g: Gravitational acceleration.

    Returns:
        Non-negative contact speed |v_c|.
    """
    return math.sqrt(max(0.0, vy * vy + 2.0 * g * overshoot))


class BouncingBallEngine:
    """
    Stepper for the bouncing-ball demo.

    Every configure() resets the ball, so radius or initial-speed changes
    take effect immediately.

    Usage:
        engine = BouncingBallEngine(BouncingBallConfig(elasticity=0.9))
        for _ in range(600):
            state = engine.step(1/60)
            readout = engine.get_derived()
    """

    def __init__(self, config: BouncingBallConfig | None = None, arena: Arena | None = None):
        self.arena = arena or Arena()
        self._observers = ObserverHub()
        self._state = BallState()
        self._config = BouncingBallConfig()
        self._clamped: tuple[ClampedParameter, ...] = ()
        self.configure(config or BouncingBallConfig())

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def config(self) -> BouncingBallConfig:
        return self._config

    @property
    def state(self) -> BallState:
        return self._state

    @property
    def clamped(self) -> tuple[ClampedParameter, ...]:
        return self._clamped

    def configure(self, config: BouncingBallConfig) -> None:
        """Replace the configuration (clamped into range) and reset."""
        self._config, self._clamped = clamp_config(config)
        self.reset()

    def reset(self) -> BallState:
        """Put the ball at the drop point moving horizontally at initial_speed."""
        c, arena = self._config, self.arena
        r = pixels_to_meters(c.ball_radius_px, arena.scale)
        x = min(max(arena.drop_point[0], r), arena.width - r)
        y = min(max(arena.drop_point[1], r), arena.height - r)

        self._state = BallState(
            time=0.0,
            position=(x, y),
            velocity=(c.initial_speed, 0.0),
            radius=r,
        )
        logger.debug("ball reset: r={:.3f} m, v0={:.3f} m/s", r, c.initial_speed)
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

    def step(self, dt: float) -> BallState:
        """
        Advance the ball by dt seconds.

        Returns:
            Snapshot of the state after the step.
        """
        dt = clamp_dt(dt)
        s = self._state
        if dt == 0.0:
            return s.copy()

        c, arena = self._config, self.arena
        g, e, r = c.gravity, c.elasticity, s.radius

        v0 = s.velocity
        v1 = v0 + gravity_acceleration(g) * dt
        k = c.air_resistance * arena.scale
        v1 = v1 * drag_retention(magnitude(v1), k, dt)
        p1 = average_velocity_position(s.position, v0, v1, dt)

        x, y = float(p1[0]), float(p1[1])
        vx, vy = float(v1[0]), float(v1[1])

        # Side walls
        if x + r > arena.width:
            x = arena.width - r
            vx = -vx * e
        elif x - r < 0.0:
            x = r
            vx = -vx * e

        # Floor
        if y - r < 0.0:
            vy = e * contact_speed(vy, y - r, g)
            y = r
            vx *= c.friction
            if abs(vy) < arena.rest_speed:
                vy = 0.0

        # Ceiling
        if y + r > arena.height:
            ceiling = arena.height - r
            vy = -e * contact_speed(vy, y - ceiling, g)
            y = ceiling

        s.position = np.array([x, y], dtype=np.float64)
        s.velocity = np.array([vx, vy], dtype=np.float64)
        s.time += dt

        snapshot = s.copy()
        self._observers.step(snapshot)
        return snapshot

    # -------------------------------------------------------------------------
    # Readouts
    # -------------------------------------------------------------------------

    def get_derived(self) -> Derived:
        """Energy with the floor as reference: h is the gap under the ball."""
        c, s = self._config, self._state
        height = float(s.position[1]) - s.radius
        return energy_readout(
            potential_energy(c.mass, c.gravity, height),
            kinetic_energy(c.mass, s.velocity),
        )

    def canvas_position(self) -> tuple[float, float]:
        """Ball centre in canvas pixels (y down, ceiling at the top edge)."""
        floor_px = self.arena.height * self.arena.scale
        return to_canvas(self._state.position, (0.0, floor_px), self.arena.scale)

    def reference_energy(self) -> float:
        """Total energy at release, for scaling energy bars."""
        c = self._config
        r = pixels_to_meters(c.ball_radius_px, self.arena.scale)
        drop_height = min(max(self.arena.drop_point[1], r), self.arena.height - r) - r
        return c.mass * c.gravity * drop_height + 0.5 * c.mass * c.initial_speed ** 2

    @property
    def radius_px(self) -> float:
        return self._state.radius * self.arena.scale
