# MIT License (see LICENSE)
"""
Frame-budget profiling for engine ticks.

Records wall-clock time spent in named sections (typically "step" and
"derive" inside SimulationDriver.tick) and reports how they compare with
the frame budget of the reference animation rate.

Example:
    profiler = Profiler()
    driver = SimulationDriver(engine, profiler=profiler)
    ...
    for name, stats in profiler.stats.summary().items():
        print(name, stats["mean_ms"], stats["budget_pct"])
"""
from __future__ import annotations
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

from .constants import FRAME_RATE


@dataclass
class ProfileStats:
    """
    Running timing totals per section.

    Only count, total and maximum are kept, so memory stays constant no
    matter how long a session runs.
    """
    frame_budget: float = 1.0 / FRAME_RATE
    counts: dict[str, int] = field(default_factory=dict)
    totals: dict[str, float] = field(default_factory=dict)
    maxima: dict[str, float] = field(default_factory=dict)

    def add(self, name: str, elapsed: float) -> None:
        """Record one timing sample (seconds) for a section."""
        self.counts[name] = self.counts.get(name, 0) + 1
        self.totals[name] = self.totals.get(name, 0.0) + elapsed
        self.maxima[name] = max(self.maxima.get(name, 0.0), elapsed)

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Summary statistics for all recorded sections.

        Returns:
            Dict mapping section name to:
            - 'n': sample count
            - 'mean_ms': average time in milliseconds
            - 'max_ms': worst time in milliseconds
            - 'budget_pct': mean time as a percentage of one frame
        """
        out = {}
        for name, n in self.counts.items():
            mean = self.totals[name] / n
            out[name] = {
                "n": n,
                "mean_ms": 1e3 * mean,
                "max_ms": 1e3 * self.maxima[name],
                "budget_pct": 100.0 * mean / self.frame_budget,
            }
        return out

    def clear(self) -> None:
        self.counts.clear()
        self.totals.clear()
        self.maxima.clear()


class Profiler:
    """Context-manager based section timer."""

    def __init__(self, frame_budget: float = 1.0 / FRAME_RATE) -> None:
        self.stats = ProfileStats(frame_budget=frame_budget)

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time the enclosed block under `name`."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)
