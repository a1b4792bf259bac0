# MIT License (see LICENSE)
"""
Simulation configurations and their valid parameter ranges.

Each engine is driven by an immutable config. A parameter change from the
UI produces a new config (see `dataclasses.replace`), which the engine
clamps into its documented ranges before resetting. Clamping never raises:
out-of-range values land on the nearest bound and NaN falls back to the
field default, so an interactive session can never be stopped by a bad
input. The clamped parameters are reported back so the caller can show
the value that is actually in effect.

Defaults are the initial slider positions of the demo UI.
"""
from __future__ import annotations
import dataclasses
from dataclasses import dataclass
from typing import ClassVar

from loguru import logger

from .util import clamp


@dataclass(frozen=True)
class ClampedParameter:
    """
    Record of a configuration value replaced during clamping.

    Attributes:
        name: Field name on the config.
        requested: Value the caller asked for (may be NaN or infinite).
        applied: Value actually in effect.
    """
    name: str
    requested: float
    applied: float


@dataclass(frozen=True)
class ProjectileConfig:
    """
    Launch parameters for the projectile demo.

    Attributes:
        launch_angle_deg: Elevation above horizontal, degrees.
        launch_speed: Muzzle speed in m/s.
        gravity: Downward gravitational acceleration magnitude in m/s².
        advanced: Enable quadratic air drag and crosswind.
        mass: Projectile mass in kg (advanced mode only affects drag).
        drag_coefficient: Dimensionless drag coefficient Cd.
        cross_section_area_cm2: Frontal area in cm².
        wind_speed: Horizontal wind in m/s, positive along +x.
    """
    kind: ClassVar[str] = "projectile"
    BOUNDS: ClassVar[dict[str, tuple[float, float]]] = {
        "launch_angle_deg": (5.0, 85.0),
        "launch_speed": (10.0, 100.0),
        "gravity": (1.0, 20.0),
        "mass": (10.0, 200.0),
        "drag_coefficient": (0.0, 1.0),
        "cross_section_area_cm2": (10.0, 150.0),
        "wind_speed": (-20.0, 20.0),
    }

    launch_angle_deg: float = 45.0
    launch_speed: float = 60.0
    gravity: float = 9.8
    advanced: bool = False
    mass: float = 50.0
    drag_coefficient: float = 0.47
    cross_section_area_cm2: float = 50.0
    wind_speed: float = 0.0


@dataclass(frozen=True)
class BouncingBallConfig:
    """
    Parameters for the bouncing-ball demo.

    Attributes:
        gravity: Gravitational acceleration in m/s².
        elasticity: Coefficient of restitution e for every wall.
                    1 = perfectly elastic, 0 = perfectly inelastic.
        friction: Horizontal velocity retained per floor contact.
        air_resistance: Quadratic drag coefficient in per-frame
                        pixel units (see BouncingBallEngine).
        ball_radius_px: Radius in pixels at 50 px/m.
        mass: Ball mass in kg (energy readout only).
        initial_speed: Horizontal launch speed in m/s.
    """
    kind: ClassVar[str] = "bouncing_ball"
    BOUNDS: ClassVar[dict[str, tuple[float, float]]] = {
        "gravity": (1.0, 20.0),
        "elasticity": (0.0, 1.0),
        "friction": (0.8, 1.0),
        "air_resistance": (0.0, 0.01),
        "ball_radius_px": (5.0, 50.0),
        "mass": (0.1, 10.0),
        "initial_speed": (0.0, 10.0),
    }

    gravity: float = 9.8
    elasticity: float = 0.7
    friction: float = 0.98
    air_resistance: float = 0.001
    ball_radius_px: float = 20.0
    mass: float = 1.0
    initial_speed: float = 2.0


@dataclass(frozen=True)
class PendulumConfig:
    """
    Parameters for the damped simple pendulum.

    Attributes:
        length: Rod length in metres.
        gravity: Gravitational acceleration in m/s².
        damping: Linear damping coefficient b (torque ∝ -b·ω).
        mass: Bob mass in kg.
        initial_angle_deg: Release angle from the vertical, degrees.
    """
    kind: ClassVar[str] = "pendulum"
    BOUNDS: ClassVar[dict[str, tuple[float, float]]] = {
        "length": (0.1, 3.0),
        "gravity": (1.0, 20.0),
        "damping": (0.0, 0.5),
        "mass": (0.1, 5.0),
        "initial_angle_deg": (5.0, 90.0),
    }

    length: float = 1.0
    gravity: float = 9.8
    damping: float = 0.05
    mass: float = 1.0
    initial_angle_deg: float = 45.0


SimulationConfig = ProjectileConfig | BouncingBallConfig | PendulumConfig

CONFIG_TYPES: dict[str, type] = {
    cls.kind: cls for cls in (ProjectileConfig, BouncingBallConfig, PendulumConfig)
}


def clamp_config(config: SimulationConfig) -> tuple[SimulationConfig, tuple[ClampedParameter, ...]]:
    """
    Clamp every bounded field of a config into its valid range.

    Args:
        config: Config as requested by the caller.

    Returns:
        Tuple (effective_config, clamped):
        - effective_config: Config with every value inside its bounds.
        - clamped: One ClampedParameter per field that had to change.
    """
    defaults = {f.name: f.default for f in dataclasses.fields(config)}
    changes: dict[str, float] = {}
    clamped: list[ClampedParameter] = []

    for name, (lo, hi) in config.BOUNDS.items():
        requested = float(getattr(config, name))
        applied = clamp(requested, lo, hi, defaults[name])
        if applied != requested:
            changes[name] = applied
            clamped.append(ClampedParameter(name, requested, applied))
            logger.warning(
                "{}: {}={} outside [{}, {}], using {}",
                config.kind, name, requested, lo, hi, applied,
            )

    if not changes:
        return config, ()
    return dataclasses.replace(config, **changes), tuple(clamped)
