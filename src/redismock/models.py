"""
Redis Mock Models.

Data models for the in-memory list store: per-list state, registered
BLPOP waiters, and read-only snapshots used for inspection in tests.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

# Callback signatures mirror the node-style (err, reply) convention of redis clients.
BlpopCallback = Callable[[Exception | None, list[str] | None], None]
LpopCallback = Callable[[Exception | None, str | None], None]


def _now_utc() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(UTC)


def _generate_id() -> str:
    """Generate a unique identifier."""
    return str(uuid4())


class TimerHandle(Protocol):
    """Anything returned by a scheduler that can be cancelled."""

    def cancel(self) -> None: ...


@dataclass(eq=False)
class Waiter:
    """
    A consumer parked on a list by BLPOP.

    A waiter settles exactly once: it is either handed an item by a push,
    expired by its timer, or cancelled by its owner. Settlement is performed
    by the owning store under its lock; whichever path settles first wins.
    """

    queue: str
    callback: BlpopCallback
    timeout_seconds: float = 0
    waiter_id: str = field(default_factory=_generate_id)
    registered_at: datetime = field(default_factory=_now_utc)

    _settled: bool = field(default=False, init=False, repr=False)
    _timer: TimerHandle | None = field(default=None, init=False, repr=False)
    _canceller: Callable[[Waiter], bool] | None = field(
        default=None, init=False, repr=False
    )

    @property
    def settled(self) -> bool:
        """Whether the waiter has been delivered, expired, or cancelled."""
        return self._settled

    def settle(self) -> bool:
        """
        Mark the waiter settled and disarm its timer.

        Returns:
            True if this call settled the waiter, False if it already was.
        """
        if self._settled:
            return False
        self._settled = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        return True

    def cancel(self) -> bool:
        """
        Withdraw the waiter from its list.

        After this returns True the callback is guaranteed never to fire.
        Returns False if the waiter had already been settled.
        """
        if self._canceller is None:
            return self.settle()
        return self._canceller(self)


@dataclass
class QueueState:
    """State for a single named list."""

    name: str

    # Buffered values, head at the left
    items: deque[str] = field(default_factory=deque)

    # Parked BLPOP consumers, oldest at the left
    waiters: deque[Waiter] = field(default_factory=deque)

    created_at: datetime = field(default_factory=_now_utc)

    @property
    def is_empty(self) -> bool:
        return not self.items and not self.waiters


class QueueSnapshot(BaseModel):
    """Point-in-time view of one list."""

    model_config = ConfigDict(frozen=True)

    name: str
    length: int = Field(default=0, ge=0)
    waiting: int = Field(default=0, ge=0)
    items: tuple[str, ...] = ()


class StoreStats(BaseModel):
    """Counters for a single store."""

    model_config = ConfigDict(frozen=True)

    url: str
    queue_count: int = Field(default=0, ge=0)
    total_items: int = Field(default=0, ge=0)
    total_waiters: int = Field(default=0, ge=0)
    pushes: int = Field(default=0, ge=0)
    handoffs: int = Field(default=0, ge=0)
    timeouts: int = Field(default=0, ge=0)

    @property
    def handoff_rate(self) -> float:
        """Share of pushes delivered straight to a waiter."""
        if self.pushes == 0:
            return 0.0
        return self.handoffs / self.pushes


__all__ = [
    "BlpopCallback",
    "LpopCallback",
    "TimerHandle",
    "Waiter",
    "QueueState",
    "QueueSnapshot",
    "StoreStats",
]
