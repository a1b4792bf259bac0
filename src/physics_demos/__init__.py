# MIT License (see LICENSE)
"""
physics_demos - Time-stepping cores for interactive 2D physics demos.

This package provides the physics behind three classroom demonstrations.
Each engine is a small state machine stepped once per animation frame; the
caller draws the returned snapshots and readouts.

Main entry points:
    - ProjectileEngine: Launch under gravity, optional quadratic drag and wind.
    - BouncingBallEngine: Ball in a box with restitution, friction and drag.
    - PendulumEngine: Damped nonlinear pendulum with energy and period readouts.
    - SimulationDriver: Reference animation loop (start/pause/reset, timestep).

Submodules:
    - core: Acceleration terms, integrators, energy invariants.
    - engines: The three engines and their shared Protocol.
    - observers: Bounded trail/phase-space buffers and other step observers.
    - io: JSON presets for configurations.

Example:
    from physics_demos import PendulumEngine, PendulumConfig

    engine = PendulumEngine(PendulumConfig(initial_angle_deg=30))
    for _ in range(60):
        engine.step(1/60)
    print(engine.get_derived().total_energy)

Logging goes through loguru and is disabled for this package by default;
call ``logger.enable("physics_demos")`` to see clamp warnings and events.
"""
from loguru import logger

from .config import (
    BouncingBallConfig,
    ClampedParameter,
    PendulumConfig,
    ProjectileConfig,
    clamp_config,
)
from .driver import SimulationDriver, TimestepPolicy, VelocityThrottle
from .engines import Arena, BouncingBallEngine, Engine, PendulumEngine, ProjectileEngine
from .types import BallState, Derived, ImpactEvent, PendulumState, ProjectileState

logger.disable("physics_demos")

__all__ = [
    # Engines
    "ProjectileEngine",
    "BouncingBallEngine",
    "PendulumEngine",
    "Arena",
    "Engine",
    # Configuration
    "ProjectileConfig",
    "BouncingBallConfig",
    "PendulumConfig",
    "ClampedParameter",
    "clamp_config",
    # State and readouts
    "ProjectileState",
    "BallState",
    "PendulumState",
    "Derived",
    "ImpactEvent",
    # Driver
    "SimulationDriver",
    "TimestepPolicy",
    "VelocityThrottle",
]
