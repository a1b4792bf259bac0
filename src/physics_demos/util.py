# MIT License (see LICENSE)
"""
Utility functions for unit conversion and 2D vector math.

Vectors are numpy arrays of shape (2,). Conversions between metres and
pixels always take an explicit scale (pixels per metre) so the physics
code never depends on a particular canvas.
"""
from __future__ import annotations
import math

import numpy as np


def f64(x) -> np.ndarray:
    """Convert any array-like to a float64 numpy array."""
    return np.array(x, dtype=np.float64)


def deg_to_rad(deg: float) -> float:
    return deg * math.pi / 180.0


def rad_to_deg(rad: float) -> float:
    return rad * 180.0 / math.pi


def meters_to_pixels(meters: float, scale: float) -> float:
    """Convert a length in metres to pixels at `scale` px/m."""
    return meters * scale


def pixels_to_meters(pixels: float, scale: float) -> float:
    """Convert a length in pixels to metres at `scale` px/m."""
    return pixels / scale


def to_canvas(
    point: np.ndarray | tuple[float, float],
    origin_px: tuple[float, float],
    scale: float = 1.0,
) -> tuple[float, float]:
    """
    Map a physical point (metres, y up) onto canvas pixels (y down).

    Args:
        point: Physical position [x, y].
        origin_px: Canvas pixel where the physical origin sits.
        scale: Pixels per metre.

    Returns:
        Canvas coordinates (px, py).
    """
    return (
        origin_px[0] + point[0] * scale,
        origin_px[1] - point[1] * scale,
    )


def magnitude(v: np.ndarray) -> float:
    """Length of a 2D vector."""
    return float(math.hypot(v[0], v[1]))


def direction_angle(v: np.ndarray) -> float:
    """Angle of a 2D vector from the +x axis, counterclockwise, in radians."""
    return float(math.atan2(v[1], v[0]))


def unit(v: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    """
    Return a unit vector in the direction of v.

    Returns the zero vector if |v| < eps, so a degenerate direction
    contributes nothing to whatever it scales.
    """
    n = magnitude(v)
    if n < eps:
        return np.zeros(2, dtype=np.float64)
    return v / n


def clamp(value: float, lo: float, hi: float, default: float) -> float:
    """
    Clamp value into [lo, hi].

    NaN is replaced by `default`; infinities land on the nearest bound.
    """
    if math.isnan(value):
        return default
    return min(max(value, lo), hi)


def wrap_angle(theta: float) -> float:
    """Normalize an angle to (-π, π]. Display only; physics never wraps."""
    wrapped = math.remainder(theta, 2.0 * math.pi)
    if wrapped == -math.pi:
        return math.pi
    return wrapped
