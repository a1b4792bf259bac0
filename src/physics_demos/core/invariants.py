# MIT License (see LICENSE)
"""
Mechanical energy bookkeeping for the readouts.

Energies are derived from the state on demand and never stored. In a
system without drag, damping or inelastic contacts the total should stay
constant (within integration error); with dissipation it must not grow.
"""
from __future__ import annotations

import numpy as np

from ..types import Derived


def kinetic_energy(mass: float, velocity: np.ndarray | float) -> float:
    """
    Translational kinetic energy T = ½·m·|v|².

    Args:
        mass: Mass in kg.
        velocity: Velocity vector in m/s, or a signed scalar speed.
    """
    v_sq = float(np.dot(velocity, velocity))
    return 0.5 * mass * v_sq


def potential_energy(mass: float, gravity: float, height: float) -> float:
    """
    Gravitational potential energy V = m·g·h above the reference level.

    Heights below the reference (floating-point residue after clamping)
    count as zero so the readout never goes negative.
    """
    return mass * gravity * max(0.0, height)


def energy_readout(potential: float, kinetic: float, period: float | None = None) -> Derived:
    """Bundle PE and KE into a Derived readout with their sum."""
    return Derived(
        potential_energy=potential,
        kinetic_energy=kinetic,
        total_energy=potential + kinetic,
        period=period,
    )
