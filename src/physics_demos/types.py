# MIT License (see LICENSE)
"""
State and readout types shared by the engines and their observers.

Each engine owns exactly one mutable state object and overwrites it every
step. Anything handed to a caller or an observer is a snapshot made with
`copy()`, so collaborators can keep snapshots around without aliasing the
live state.

Conventions:
  - Positions in metres, velocities in m/s, physical frame with y up.
  - Angles in radians, counterclockwise positive.
"""
from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from .util import f64


def _zeros() -> np.ndarray:
    return np.zeros(2, dtype=np.float64)


# =============================================================================
# Engine states
# =============================================================================

@dataclass
class ProjectileState:
    """
    Kinematic state of the launched point mass.

    Attributes:
        time: Seconds since launch.
        position: [x, y] relative to the launch point; ground is y = 0.
        velocity: [vx, vy] in m/s.
        grounded: True once the projectile has hit the ground.
    """
    time: float = 0.0
    position: np.ndarray = field(default_factory=_zeros)
    velocity: np.ndarray = field(default_factory=_zeros)
    grounded: bool = False

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)

    def copy(self) -> "ProjectileState":
        return ProjectileState(self.time, self.position.copy(), self.velocity.copy(), self.grounded)


@dataclass
class BallState:
    """
    Kinematic state of the bouncing ball.

    Attributes:
        time: Seconds since reset.
        position: Centre [x, y]; x = 0 is the left wall, y = 0 the floor.
        velocity: [vx, vy] in m/s.
        radius: Ball radius in metres.
    """
    time: float = 0.0
    position: np.ndarray = field(default_factory=_zeros)
    velocity: np.ndarray = field(default_factory=_zeros)
    radius: float = 0.4

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)

    def copy(self) -> "BallState":
        return BallState(self.time, self.position.copy(), self.velocity.copy(), self.radius)


@dataclass
class PendulumState:
    """
    Angular state of the pendulum.

    Attributes:
        angle: Displacement from the downward vertical. Not wrapped.
        angular_velocity: dθ/dt in rad/s.
        time: Seconds since reset.
    """
    angle: float = 0.0
    angular_velocity: float = 0.0
    time: float = 0.0

    def copy(self) -> "PendulumState":
        return PendulumState(self.angle, self.angular_velocity, self.time)


SimulationState = ProjectileState | BallState | PendulumState


# =============================================================================
# Readouts and events
# =============================================================================

@dataclass(frozen=True)
class Derived:
    """
    Read-only quantities computed from the current state.

    Never fed back into integration.

    Attributes:
        potential_energy: Gravitational PE in J, relative to the engine's
                          reference level (ground, floor, or lowest point).
        kinetic_energy: Translational KE in J.
        total_energy: PE + KE.
        period: Small-angle reference period in s (pendulum only).
    """
    potential_energy: float
    kinetic_energy: float
    total_energy: float
    period: float | None = None


@dataclass(frozen=True)
class ImpactEvent:
    """
    One-shot event emitted when the projectile reaches the ground.

    Attributes:
        time: Interpolated time of impact since launch.
        position: Impact point [x, 0].
        velocity: Velocity just before impact.
    """
    time: float
    position: tuple[float, float]
    velocity: tuple[float, float]

    @property
    def horizontal_range(self) -> float:
        return self.position[0]
