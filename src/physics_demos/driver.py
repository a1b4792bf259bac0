# MIT License (see LICENSE)
"""
Reference driver loop for a single engine.

The driver plays the role of the UI's animation loop:
- Lifecycle: start, pause, resume, reset, configure.
- Timestep policy: fixed steps or clamped wall-clock deltas.
- Ordering: each tick steps the engine first; readouts are taken from the
  post-step state.
- Velocity reporting: a throttle limits readout updates to changes larger
  than 0.1 m/s, keeping that UI concern out of the physics.

Structure:
    driver = SimulationDriver(engine)
    driver.start()
    while animating:
        state = driver.tick(now)       # None while paused
        readout = driver.readout()
"""
from __future__ import annotations
from contextlib import nullcontext
from dataclasses import dataclass
from typing import Callable

from loguru import logger

from .config import ClampedParameter, SimulationConfig
from .constants import DEFAULT_DT, MAX_DT
from .core.integrators import clamp_dt
from .engines.base import Engine
from .profiler import Profiler
from .types import Derived, SimulationState


@dataclass(frozen=True)
class TimestepPolicy:
    """
    How the driver turns ticks into timesteps.

    Attributes:
        fixed_dt: Seconds per tick, or None to use wall-clock deltas.
        max_dt: Upper bound for wall-clock deltas.

    Wall-clock mode returns 0 for the first tick after start/resume/reset,
    since there is no previous frame to measure against.
    """
    fixed_dt: float | None = DEFAULT_DT
    max_dt: float = MAX_DT

    @classmethod
    def wall_clock(cls, max_dt: float = MAX_DT) -> "TimestepPolicy":
        return cls(fixed_dt=None, max_dt=max_dt)

    def next_dt(self, now: float | None, last: float | None) -> float:
        if self.fixed_dt is not None:
            return clamp_dt(self.fixed_dt, self.max_dt)
        if now is None or last is None:
            return 0.0
        return clamp_dt(now - last, self.max_dt)


class VelocityThrottle:
    """
    Hysteresis filter for velocity readouts.

    Reports the first velocity after a reset, then only velocities where a
    component moved by more than `threshold` since the last report.
    """

    def __init__(self, threshold: float = 0.1):
        self.threshold = threshold
        self._last: tuple[float, float] | None = None

    def reset(self) -> None:
        self._last = None

    def should_report(self, vx: float, vy: float) -> bool:
        last = self._last
        if (
            last is None
            or abs(vx - last[0]) > self.threshold
            or abs(vy - last[1]) > self.threshold
        ):
            self._last = (vx, vy)
            return True
        return False

    @property
    def last_reported(self) -> tuple[float, float] | None:
        return self._last


class SimulationDriver:
    """
    Owns one engine and advances it once per animation tick.

    Attributes:
        engine: The engine being driven. Only this driver may step it.
        policy: Timestep policy (default: fixed 1/60 s).
        throttle: Velocity-report throttle.
        profiler: Optional Profiler timing the "step" and "derive" sections.
        on_velocity: Optional callback(vx, vy) for throttled velocity reports.
    """

    def __init__(
        self,
        engine: Engine,
        policy: TimestepPolicy | None = None,
        throttle: VelocityThrottle | None = None,
        profiler: Profiler | None = None,
        on_velocity: Callable[[float, float], None] | None = None,
    ):
        self.engine = engine
        self.policy = policy or TimestepPolicy()
        self.throttle = throttle or VelocityThrottle()
        self.profiler = profiler
        self.on_velocity = on_velocity
        self._running = False
        self._last_time: float | None = None

    @property
    def running(self) -> bool:
        return self._running

    def _section(self, name: str):
        return self.profiler.section(name) if self.profiler else nullcontext()

    # -------------------------------------------------------------------------
    # Lifecycle commands
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Begin stepping on subsequent ticks."""
        self._running = True
        self._last_time = None
        logger.debug("{}: start", type(self.engine).__name__)

    def pause(self) -> None:
        """Stop stepping; the engine state is kept as is."""
        self._running = False
        logger.debug("{}: pause at t={:.3f}", type(self.engine).__name__, self.engine.state.time)

    def resume(self) -> None:
        """Continue after pause without counting the paused interval."""
        self._running = True
        self._last_time = None

    def reset(self) -> SimulationState:
        """Reinitialise the engine state. Running/paused status is unchanged."""
        self.throttle.reset()
        self._last_time = None
        return self.engine.reset()

    def configure(self, config: SimulationConfig) -> tuple[ClampedParameter, ...]:
        """
        Apply a new configuration (which resets the engine).

        Returns:
            The parameters the engine had to clamp, so the UI can show
            the values actually in effect.
        """
        self.throttle.reset()
        self._last_time = None
        self.engine.configure(config)
        return self.engine.clamped

    # -------------------------------------------------------------------------
    # Ticking
    # -------------------------------------------------------------------------

    def tick(self, now: float | None = None) -> SimulationState | None:
        """
        Advance the engine by one frame.

        Args:
            now: Frame timestamp in seconds (wall-clock policy only).

        Returns:
            Post-step snapshot, or None while not running.
        """
        if not self._running:
            return None

        dt = self.policy.next_dt(now, self._last_time)
        self._last_time = now

        with self._section("step"):
            state = self.engine.step(dt)

        self._report_velocity(state)

        if getattr(state, "grounded", False):
            # Flight finished; nothing left to advance until reset.
            self._running = False
        return state

    def readout(self) -> Derived:
        """Derived quantities for the state produced by the last tick."""
        with self._section("derive"):
            return self.engine.get_derived()

    def run(self, ticks: int) -> SimulationState:
        """Start if needed and advance up to `ticks` frames; returns the final state."""
        if not self._running:
            self.start()
        state = self.engine.state.copy()
        for _ in range(ticks):
            result = self.tick()
            if result is None:
                break
            state = result
        return state

    def _report_velocity(self, state: SimulationState) -> None:
        velocity = getattr(state, "velocity", None)
        if velocity is None or self.on_velocity is None:
            return
        vx, vy = float(velocity[0]), float(velocity[1])
        if self.throttle.should_report(vx, vy):
            self.on_velocity(vx, vy)
