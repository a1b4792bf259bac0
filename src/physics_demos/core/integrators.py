# MIT License (see LICENSE)
"""
Time-stepping rules shared by the engines.

Available steps:
- semi_implicit_euler: v ← v + a·dt, then x ← x + v·dt (symplectic Euler).
  Works on numpy vectors and on plain floats (angles).
- average_velocity_position: x ← x + ½(v_old + v_new)·dt, exact for
  constant acceleration and therefore energy-exact under pure gravity.

All engines pass their timestep through clamp_dt first, so every engine
follows the same timestep policy.

Reference:
    Semi-implicit Euler: https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
    Velocity Verlet: https://en.wikipedia.org/wiki/Verlet_integration#Velocity_Verlet
"""
from __future__ import annotations
import math
from typing import TypeVar

import numpy as np

from ..constants import MAX_DT

T = TypeVar("T", float, np.ndarray)


def clamp_dt(dt: float, max_dt: float = MAX_DT) -> float:
    """
    Clamp a requested timestep into [0, max_dt].

    Negative or non-finite values become 0 (a no-op step) and long frames
    are cut to max_dt to keep explicit integration stable.
    """
    if not math.isfinite(dt) or dt <= 0.0:
        return 0.0
    return min(dt, max_dt)


def semi_implicit_euler(x: T, v: T, a: T, dt: float) -> tuple[T, T]:
    """
    Advance one semi-implicit Euler step.

    Velocity is updated first and the new velocity moves the position.

    Args:
        x: Position (vector or angle).
        v: Velocity (vector or angular velocity).
        a: Acceleration, held constant over the step.
        dt: Timestep in seconds.

    Returns:
        Tuple (x_new, v_new).
    """
    v_new = v + a * dt
    x_new = x + v_new * dt
    return x_new, v_new


def average_velocity_position(
    x: np.ndarray,
    v_old: np.ndarray,
    v_new: np.ndarray,
    dt: float,
) -> np.ndarray:
    """
    Move a position by the mean of the start and end velocities.

    For constant acceleration a this equals x + v·dt + ½·a·dt², the
    velocity Verlet position update.
    """
    return x + 0.5 * (v_old + v_new) * dt
