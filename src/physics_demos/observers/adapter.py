# MIT License (see LICENSE)
"""
Step observers for display-side bookkeeping.

Trails, phase-space plots, impact effects and period readouts all need a
history of states, but the engines keep none. Instead an engine notifies
every attached observer after each reset and step, and the observers keep
whatever bounded history they need. The engines have no knowledge of
buffer sizes or canvases.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Callable, TextIO
import sys

from ..constants import FRAME_LOG_LEN, PERIOD_CROSSINGS_LEN, PHASE_TRAIL_LEN
from ..io.json_io import state_to_json
from ..types import (
    BallState,
    ImpactEvent,
    PendulumState,
    ProjectileState,
    SimulationState,
)


class StepObserver(ABC):
    """
    Abstract base class for engine observers.

    Usage:
        engine.attach(observer)
        engine.reset()          # -> observer.on_reset(state)
        engine.step(1/60)       # -> observer.on_step(state)
                                #    observer.on_event(event) for one-shot events

    Observers receive snapshots and may keep them.
    """

    def on_reset(self, state: SimulationState) -> None:
        """Called with the fresh state after every reset."""

    @abstractmethod
    def on_step(self, state: SimulationState) -> None:
        """
        Called once per step with the updated state.

        Args:
            state: Snapshot of the engine state after the step.
        """
        ...

    def on_event(self, event: Any) -> None:
        """Called for one-shot events such as ImpactEvent."""


class NullObserver(StepObserver):
    """No-op observer, useful as a placeholder and in benchmarks."""

    def on_step(self, state: SimulationState) -> None:
        pass


def _state_point(state: SimulationState) -> tuple[float, float]:
    if isinstance(state, (ProjectileState, BallState)):
        return float(state.position[0]), float(state.position[1])
    raise TypeError(f"No default trail point for {type(state).__name__}; pass point=")


class TrailRecorder(StepObserver):
    """
    Bounded trail of recent positions.

    The oldest points are dropped once `maxlen` is reached. For the
    pendulum pass a `point` callable that maps a state to the bob position,
    e.g. ``TrailRecorder(100, point=engine.bob_position_of)``.
    """

    def __init__(
        self,
        maxlen: int,
        point: Callable[[SimulationState], tuple[float, float]] | None = None,
    ):
        if maxlen <= 0:
            raise ValueError(f"maxlen must be positive, got {maxlen}")
        self.points: deque[tuple[float, float]] = deque(maxlen=maxlen)
        self._point = point or _state_point

    def on_reset(self, state: SimulationState) -> None:
        self.points.clear()
        self.points.append(self._point(state))

    def on_step(self, state: SimulationState) -> None:
        self.points.append(self._point(state))

    def __len__(self) -> int:
        return len(self.points)


class PhaseSpaceRecorder(StepObserver):
    """Bounded (θ, ω) history of a pendulum for phase-space plots."""

    def __init__(self, maxlen: int = PHASE_TRAIL_LEN):
        self.points: deque[tuple[float, float]] = deque(maxlen=maxlen)

    def on_reset(self, state: PendulumState) -> None:
        self.points.clear()

    def on_step(self, state: PendulumState) -> None:
        self.points.append((state.angle, state.angular_velocity))


class ImpactRecorder(StepObserver):
    """Collects ImpactEvents, e.g. to spawn impact effects."""

    def __init__(self) -> None:
        self.events: list[ImpactEvent] = []

    def on_reset(self, state: SimulationState) -> None:
        self.events.clear()

    def on_step(self, state: SimulationState) -> None:
        pass

    def on_event(self, event: Any) -> None:
        if isinstance(event, ImpactEvent):
            self.events.append(event)

    @property
    def last(self) -> ImpactEvent | None:
        return self.events[-1] if self.events else None


class PeriodEstimator(StepObserver):
    """
    Measures the pendulum period from its angular velocity.

    Records each time ω changes sign from positive to non-positive (the
    bob reaching its left turning point) and reports the intervals between
    successive crossings. Crossing times are linearly interpolated inside
    the step. Only the latest `maxlen` crossings are kept, so the estimate
    follows the current amplitude as a damped swing decays.
    """

    def __init__(self, maxlen: int = PERIOD_CROSSINGS_LEN) -> None:
        self.crossings: deque[float] = deque(maxlen=maxlen)
        self._prev: tuple[float, float] | None = None

    def on_reset(self, state: PendulumState) -> None:
        self.crossings.clear()
        self._prev = (state.time, state.angular_velocity)

    def on_step(self, state: PendulumState) -> None:
        t, w = state.time, state.angular_velocity
        if self._prev is not None:
            t0, w0 = self._prev
            if w0 > 0.0 >= w:
                frac = w0 / (w0 - w)
                self.crossings.append(t0 + frac * (t - t0))
        self._prev = (t, w)

    @property
    def periods(self) -> list[float]:
        """Intervals between successive crossings, in seconds."""
        c = list(self.crossings)
        return [b - a for a, b in zip(c, c[1:])]

    @property
    def estimate(self) -> float | None:
        """Mean measured period, or None before two crossings."""
        p = self.periods
        return sum(p) / len(p) if p else None


class FrameRecorder(StepObserver):
    """
    Records JSON-ready frames for playback or export.

    Example:
        recorder = FrameRecorder()
        engine.attach(recorder)
        for _ in range(100):
            engine.step(1/60)
        json.dump(recorder.frames, f)
    """

    def __init__(self, maxlen: int = FRAME_LOG_LEN):
        self.frames: deque[dict] = deque(maxlen=maxlen)

    def on_reset(self, state: SimulationState) -> None:
        self.frames.clear()
        self._record(state, "reset")

    def on_step(self, state: SimulationState) -> None:
        self._record(state, "step")

    def on_event(self, event: Any) -> None:
        if isinstance(event, ImpactEvent) and self.frames:
            self.frames[-1]["impact"] = {
                "time": event.time,
                "position": list(event.position),
                "velocity": list(event.velocity),
            }

    def _record(self, state: SimulationState, kind: str) -> None:
        frame = state_to_json(state)
        frame["kind"] = kind
        self.frames.append(frame)


class DebugObserver(StepObserver):
    """
    Console/text observer for development.

    Output:
        [step] t=0.0167 pos=(0.71, 0.70) vel=(42.43, 42.26)
        [impact] t=8.6585 x=367.35
    """

    def __init__(self, output: TextIO | None = None, every: int = 1):
        """
        Args:
            output: Output stream (defaults to sys.stdout).
            every: Only print every n-th step.
        """
        self.output = output or sys.stdout
        self.every = max(1, every)
        self._count = 0

    def on_reset(self, state: SimulationState) -> None:
        self._count = 0
        self.output.write(f"[reset] {self._describe(state)}\n")

    def on_step(self, state: SimulationState) -> None:
        self._count += 1
        if self._count % self.every == 0:
            self.output.write(f"[step] {self._describe(state)}\n")

    def on_event(self, event: Any) -> None:
        if isinstance(event, ImpactEvent):
            self.output.write(f"[impact] t={event.time:.4f} x={event.position[0]:.2f}\n")
        self.output.flush()

    @staticmethod
    def _describe(state: SimulationState) -> str:
        if isinstance(state, PendulumState):
            return f"t={state.time:.4f} θ={state.angle:.3f} ω={state.angular_velocity:.3f}"
        pos, vel = state.position, state.velocity
        return (
            f"t={state.time:.4f} pos=({pos[0]:.2f}, {pos[1]:.2f}) "
            f"vel=({vel[0]:.2f}, {vel[1]:.2f})"
        )
