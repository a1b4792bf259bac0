# MIT License (see LICENSE)
"""
Core numerical building blocks.

This subpackage provides:
    - Acceleration terms: gravity, quadratic drag, pendulum dynamics.
    - Integrators: semi-implicit Euler and the average-velocity position
      update, plus the shared timestep clamp.
    - Invariants: kinetic/potential energy readouts.

Typical usage:
    from physics_demos.core import gravity_acceleration, semi_implicit_euler

    a = gravity_acceleration(9.8)
    pos, vel = semi_implicit_euler(pos, vel, a, dt=1/60)
"""
from .forces import (
    gravity_acceleration,
    quadratic_drag_acceleration,
    drag_retention,
    pendulum_angular_acceleration,
)
from .integrators import clamp_dt, semi_implicit_euler, average_velocity_position
from .invariants import kinetic_energy, potential_energy, energy_readout

__all__ = [
    # Forces
    "gravity_acceleration",
    "quadratic_drag_acceleration",
    "drag_retention",
    "pendulum_angular_acceleration",
    # Integrators
    "clamp_dt",
    "semi_implicit_euler",
    "average_velocity_position",
    # Invariants
    "kinetic_energy",
    "potential_energy",
    "energy_readout",
]
