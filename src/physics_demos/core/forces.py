# MIT License (see LICENSE)
"""
Acceleration terms for the demo systems.

Every function here is pure: it returns an acceleration (or a velocity
scale factor) and never touches engine state. The engines combine the
terms and hand them to the integrators in core/integrators.py.

Key conventions:
- Gravity acts along -y (physical frame, y up).
- Degenerate directions (zero relative speed) contribute zero drag.
"""
from __future__ import annotations
import math

import numpy as np

from ..constants import AIR_DENSITY
from ..util import magnitude, unit


def gravity_acceleration(g: float) -> np.ndarray:
    """
    Uniform gravitational acceleration a = (0, -g).

    Args:
        g: Magnitude of gravitational acceleration in m/s².
    """
    return np.array([0.0, -g], dtype=np.float64)


def quadratic_drag_acceleration(
    velocity: np.ndarray,
    wind_speed: float,
    mass: float,
    drag_coefficient: float,
    area_m2: float,
    rho: float = AIR_DENSITY,
) -> np.ndarray:
    """
    Acceleration from quadratic air drag in a horizontal wind.

    Drag acts against the velocity relative to the air:
        v_rel = (vx - w, vy)
        F_d   = ½ ρ Cd A |v_rel|²
        a     = -(F_d / m) · v_rel / |v_rel|

    Args:
        velocity: Body velocity [vx, vy] in m/s.
        wind_speed: Horizontal wind velocity in m/s.
        mass: Body mass in kg, must be > 0.
        drag_coefficient: Dimensionless Cd.
        area_m2: Frontal area in m².
        rho: Air density in kg/m³.

    Returns:
        Drag acceleration [ax, ay]. Zero when the body is at rest
        relative to the air.
    """
    v_rel = np.array([velocity[0] - wind_speed, velocity[1]], dtype=np.float64)
    speed = magnitude(v_rel)
    force = 0.5 * rho * drag_coefficient * area_m2 * speed * speed
    return -(force / mass) * unit(v_rel)


def drag_retention(speed: float, k: float, dt: float) -> float:
    """
    Fraction of velocity kept after one step of quadratic drag.

    Implements v ← v - k·dt·|v|·v as a scalar factor applied to both
    components. Never negative: a step cannot reverse the motion.

    Args:
        speed: Current speed |v| in m/s.
        k: Drag constant in 1/m.
        dt: Timestep in seconds.
    """
    return max(0.0, 1.0 - k * dt * speed)


def pendulum_angular_acceleration(
    angle: float,
    angular_velocity: float,
    gravity: float,
    length: float,
    damping: float,
    mass: float,
) -> float:
    """
    Angular acceleration of a damped simple pendulum.

    Full nonlinear equation of motion (no small-angle approximation):
        θ'' = -(g/L)·sin θ - (b/m)·θ'
    """
    return -(gravity / length) * math.sin(angle) - (damping / mass) * angular_velocity
