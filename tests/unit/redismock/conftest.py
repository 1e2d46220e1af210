"""
Shared fixtures for redismock unit tests.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from src.redismock.config import RedisMockSettings, reset_settings
from src.redismock.registry import StoreRegistry, reset_default_registry
from src.redismock.store import QueueStore


class ManualTimer:
    """Timer handle that only fires when the test says so."""

    def __init__(self, delay_seconds: float, fn: Callable[[], None]):
        self.delay_seconds = delay_seconds
        self.fn = fn
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        if not self.cancelled:
            self.fn()


class ManualScheduler:
    """Scheduler recording every armed timer for deterministic expiry."""

    def __init__(self):
        self.timers: list[ManualTimer] = []

    def __call__(self, delay_seconds: float, fn: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(delay_seconds, fn)
        self.timers.append(timer)
        return timer

    def fire_all(self) -> None:
        for timer in list(self.timers):
            timer.fire()


class Recorder:
    """Callback that records every (err, reply) it receives."""

    def __init__(self):
        self.calls: list[tuple[Exception | None, object]] = []

    def __call__(self, err, reply) -> None:
        self.calls.append((err, reply))

    @property
    def replies(self) -> list[object]:
        return [reply for _, reply in self.calls]


@pytest.fixture(autouse=True)
def _reset_globals():
    """Isolate the process-wide registry and settings between tests."""
    reset_settings()
    reset_default_registry()
    yield
    reset_default_registry()
    reset_settings()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def store(scheduler: ManualScheduler) -> QueueStore:
    """Create a fresh store with manually driven timers."""
    return QueueStore(url="mocks://test", scheduler=scheduler)


@pytest.fixture
def settings() -> RedisMockSettings:
    return RedisMockSettings()


@pytest.fixture
def registry(settings: RedisMockSettings, scheduler: ManualScheduler) -> StoreRegistry:
    """Create a fresh registry independent of the process-wide one."""
    return StoreRegistry(settings=settings, scheduler=scheduler)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def make_recorder() -> Callable[[], Recorder]:
    return Recorder
