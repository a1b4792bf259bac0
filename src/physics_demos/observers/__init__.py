# MIT License (see LICENSE)
"""
Observers that keep display history outside the physics core.

This subpackage provides:
    - StepObserver: Abstract base class notified on reset, step and events.
    - TrailRecorder, PhaseSpaceRecorder: Bounded ring buffers for drawing.
    - ImpactRecorder: Collects projectile impact events.
    - PeriodEstimator: Measured pendulum period.
    - FrameRecorder: JSON-ready frame log.
    - DebugObserver, NullObserver: Text output and no-op.

Typical usage:
    from physics_demos.observers import TrailRecorder

    trail = TrailRecorder(maxlen=30)
    engine.attach(trail)
"""
from .adapter import (
    StepObserver,
    NullObserver,
    TrailRecorder,
    PhaseSpaceRecorder,
    ImpactRecorder,
    PeriodEstimator,
    FrameRecorder,
    DebugObserver,
)

__all__ = [
    "StepObserver",
    "NullObserver",
    "TrailRecorder",
    "PhaseSpaceRecorder",
    "ImpactRecorder",
    "PeriodEstimator",
    "FrameRecorder",
    "DebugObserver",
]
