# MIT License (see LICENSE)
"""
The capability interface shared by the three engines.

The engines have the same lifecycle (configure → reset → step → derive)
but nothing else in common: their units, state fields and collision rules
all differ. They therefore share a Protocol rather than a base class, and
reuse the observer bookkeeping by composition through ObserverHub.
"""
from __future__ import annotations
from typing import Any, Callable, Protocol, runtime_checkable

from loguru import logger

from ..config import ClampedParameter, SimulationConfig
from ..observers.adapter import StepObserver
from ..types import Derived, SimulationState


@runtime_checkable
class Engine(Protocol):
    """
    Interface every engine exposes to its driver.

    - configure(config): clamp the config into range and reset.
    - reset(): reinitialise the state from the config; returns a snapshot.
    - step(dt): advance by dt seconds; returns a snapshot. Never raises.
    - get_derived(): energy readout (and period where meaningful).
    """

    @property
    def config(self) -> SimulationConfig: ...

    @property
    def state(self) -> SimulationState: ...

    @property
    def clamped(self) -> tuple[ClampedParameter, ...]: ...

    def configure(self, config: SimulationConfig) -> None: ...

    def reset(self) -> SimulationState: ...

    def step(self, dt: float) -> SimulationState: ...

    def get_derived(self) -> Derived: ...

    def attach(self, observer: StepObserver) -> None: ...

    def detach(self, observer: StepObserver) -> None: ...


class ObserverHub:
    """
    Ordered set of observers with fan-out helpers.

    An observer that raises is logged and skipped; the remaining observers
    still run and the exception never reaches the engine's caller.
    """

    def __init__(self) -> None:
        self._observers: list[StepObserver] = []

    def attach(self, observer: StepObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def detach(self, observer: StepObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def reset(self, state: SimulationState) -> None:
        self._notify("on_reset", state)

    def step(self, state: SimulationState) -> None:
        self._notify("on_step", state)

    def event(self, event: Any) -> None:
        self._notify("on_event", event)

    def _notify(self, hook: str, payload: Any) -> None:
        for obs in list(self._observers):
            callback: Callable[[Any], None] = getattr(obs, hook)
            try:
                callback(payload)
            except Exception:
                logger.exception("{}.{} failed", type(obs).__name__, hook)

    def __len__(self) -> int:
        return len(self._observers)
