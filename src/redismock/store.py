"""
In-Memory List Store.

Simulates the list half of a Redis server for unit testing: RPUSH, LPOP
and BLPOP against named lists, with BLPOP consumers parked as callbacks
until a push hands them an item or their timeout expires.
NOT suitable for production use - no persistence, single process only.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from src.redismock.models import (
    BlpopCallback,
    LpopCallback,
    QueueSnapshot,
    QueueState,
    StoreStats,
    TimerHandle,
    Waiter,
)

logger = logging.getLogger(__name__)

Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


def thread_timer(delay_seconds: float, fn: Callable[[], None]) -> TimerHandle:
    """Default scheduler: run fn on a daemon timer thread after a delay."""
    timer = threading.Timer(delay_seconds, fn)
    timer.daemon = True
    timer.start()
    return timer


class QueueStore:
    """
    Named lists plus the BLPOP matching algorithm.

    Features:
    - RPUSH hands off to the oldest parked BLPOP consumer before buffering
    - BLPOP returns immediately: either delivers the head item or parks a waiter
    - Waiters settle exactly once (hand-off, timeout, or cancel)
    - Strict FIFO for both items and waiters of a list

    Thread Safety:
        Every read and write of a list's items/waiters pair happens under a
        single re-entrant lock. Callbacks run after the lock is released but
        before the triggering call returns, so they may call back into the
        store.
    """

    def __init__(
        self,
        url: str = "",
        scheduler: Scheduler | None = None,
        timers_enabled: bool = True,
    ):
        """
        Initialize the store.

        Args:
            url: Connection URL this store is registered under (for logs/stats)
            scheduler: Timer factory used to expire BLPOP waiters
            timers_enabled: When False, positive timeouts never expire
        """
        self._url = url
        self._scheduler = scheduler or thread_timer
        self._timers_enabled = timers_enabled
        self._queues: dict[str, QueueState] = {}
        self._lock = threading.RLock()
        self._pushes = 0
        self._handoffs = 0
        self._timeouts = 0

    @property
    def url(self) -> str:
        return self._url

    def _get_queue(self, name: str) -> QueueState:
        """Get or create state for a list. Caller must hold the lock."""
        queue = self._queues.get(name)
        if queue is None:
            queue = QueueState(name=name)
            self._queues[name] = queue
            logger.debug(f"Created list '{name}' in store {self._url}")
        return queue

    # =========================================================================
    # Push
    # =========================================================================

    def push(self, name: str, value: str) -> int:
        """
        Append a value to the tail of a list.

        If a BLPOP consumer is parked on the list the value is handed to the
        oldest one instead of being buffered, and the callback runs before
        this method returns.

        Returns:
            The buffered length after the push, or buffered length + 1 when
            the value was handed off (the width a BLPOP reply pairing shows).
        """
        if not isinstance(value, str):
            raise TypeError(f"list values must be str, got {type(value).__name__}")

        with self._lock:
            queue = self._get_queue(name)
            self._pushes += 1

            waiter = self._claim_waiter(queue)

            if waiter is None:
                queue.items.append(value)
                logger.debug(f"Buffered value on '{name}' (length {len(queue.items)})")
                return len(queue.items)

            self._handoffs += 1
            count = len(queue.items) + 1

        logger.debug(f"Handed off value on '{name}' to waiter {waiter.waiter_id}")
        waiter.callback(None, [name, value])
        return count

    def requeue(self, name: str, value: str) -> None:
        """
        Return a value to the head of a list.

        Used when a consumer that was already handed a value can no longer
        take it. A parked waiter, if any, receives it first.
        """
        with self._lock:
            queue = self._get_queue(name)
            waiter = self._claim_waiter(queue)
            if waiter is None:
                queue.items.appendleft(value)
                return

        waiter.callback(None, [name, value])

    # =========================================================================
    # Pop
    # =========================================================================

    def blocking_pop(
        self,
        name: str,
        timeout_seconds: float,
        callback: BlpopCallback,
    ) -> Waiter | None:
        """
        Pop the head of a list, or park the callback until one arrives.

        Never blocks the calling thread. When an item is buffered the callback
        receives (None, [name, item]) before this returns. Otherwise a waiter
        is registered; it receives (None, [name, value]) from a later push, or
        (None, None) once timeout_seconds elapse. A timeout of 0 waits forever.

        Returns:
            The parked Waiter (which can be cancelled), or None if the
            callback was already served.

        Raises:
            ValueError: If timeout_seconds is negative
        """
        if timeout_seconds < 0:
            raise ValueError("timeout is negative")

        with self._lock:
            queue = self._get_queue(name)

            if queue.items:
                item = queue.items.popleft()
            else:
                waiter = Waiter(
                    queue=name,
                    callback=callback,
                    timeout_seconds=timeout_seconds,
                )
                waiter._canceller = self.cancel
                queue.waiters.append(waiter)
                if timeout_seconds > 0 and self._timers_enabled:
                    waiter._timer = self._scheduler(
                        timeout_seconds, lambda: self._expire(waiter)
                    )
                logger.debug(
                    f"Parked waiter {waiter.waiter_id} on '{name}' "
                    f"(timeout {timeout_seconds}s, {len(queue.waiters)} waiting)"
                )
                return waiter

        callback(None, [name, item])
        return None

    def pop(self, name: str, callback: LpopCallback) -> None:
        """
        Pop the head of a list without waiting.

        The callback receives (None, item), or (None, None) if the list is
        missing or empty. Never registers a waiter.
        """
        with self._lock:
            queue = self._queues.get(name)
            item = queue.items.popleft() if queue is not None and queue.items else None

        callback(None, item)

    # =========================================================================
    # Waiter Settlement
    # =========================================================================

    def cancel(self, waiter: Waiter) -> bool:
        """
        Withdraw a parked waiter.

        Returns:
            True if the waiter was still pending (its callback will never
            fire), False if it had already been served or expired.
        """
        with self._lock:
            if not waiter.settle():
                return False
            self._discard_waiter(waiter)

        logger.debug(f"Cancelled waiter {waiter.waiter_id} on '{waiter.queue}'")
        return True

    def _expire(self, waiter: Waiter) -> None:
        """Timer entry point: deliver the null reply if still pending."""
        with self._lock:
            if not waiter.settle():
                return
            self._discard_waiter(waiter)
            self._timeouts += 1

        logger.debug(f"Waiter {waiter.waiter_id} on '{waiter.queue}' timed out")
        try:
            waiter.callback(None, None)
        except Exception:
            logger.exception(f"BLPOP timeout callback failed for '{waiter.queue}'")

    def _claim_waiter(self, queue: QueueState) -> Waiter | None:
        """Settle and dequeue the oldest pending waiter. Caller must hold the lock."""
        while queue.waiters:
            waiter = queue.waiters.popleft()
            if waiter.settle():
                return waiter
        return None

    def _discard_waiter(self, waiter: Waiter) -> None:
        """Remove a settled waiter from its list. Caller must hold the lock."""
        queue = self._queues.get(waiter.queue)
        if queue is not None and waiter in queue.waiters:
            queue.waiters.remove(waiter)

    # =========================================================================
    # Inspection
    # =========================================================================

    def length(self, name: str) -> int:
        """Number of buffered items on a list (LLEN)."""
        with self._lock:
            queue = self._queues.get(name)
            return len(queue.items) if queue is not None else 0

    def waiting(self, name: str) -> int:
        """Number of consumers parked on a list."""
        with self._lock:
            queue = self._queues.get(name)
            return len(queue.waiters) if queue is not None else 0

    def names(self) -> list[str]:
        """Names of every list referenced so far."""
        with self._lock:
            return list(self._queues)

    def snapshot(self, name: str) -> QueueSnapshot:
        """Point-in-time view of one list."""
        with self._lock:
            queue = self._queues.get(name)
            if queue is None:
                return QueueSnapshot(name=name)
            return QueueSnapshot(
                name=name,
                length=len(queue.items),
                waiting=len(queue.waiters),
                items=tuple(queue.items),
            )

    def stats(self) -> StoreStats:
        """Counters across every list in the store."""
        with self._lock:
            return StoreStats(
                url=self._url,
                queue_count=len(self._queues),
                total_items=sum(len(q.items) for q in self._queues.values()),
                total_waiters=sum(len(q.waiters) for q in self._queues.values()),
                pushes=self._pushes,
                handoffs=self._handoffs,
                timeouts=self._timeouts,
            )

    # =========================================================================
    # Teardown
    # =========================================================================

    def delete(self, name: str) -> bool:
        """
        Drop a list's buffered items.

        Parked waiters stay registered so no consumer is silently lost; the
        list is removed entirely only when nobody is waiting on it.

        Returns:
            True if the list existed.
        """
        with self._lock:
            queue = self._queues.get(name)
            if queue is None:
                return False
            queue.items.clear()
            if queue.is_empty:
                del self._queues[name]
        logger.info(f"Deleted list '{name}' from store {self._url}")
        return True

    def flush(self) -> None:
        """
        Drop every list, expiring parked waiters with a null reply.

        Each pending waiter still receives exactly one callback.
        """
        with self._lock:
            pending = [
                w for q in self._queues.values() for w in q.waiters if w.settle()
            ]
            self._queues.clear()

        for waiter in pending:
            try:
                waiter.callback(None, None)
            except Exception:
                logger.exception(f"BLPOP release callback failed for '{waiter.queue}'")
        logger.info(f"Flushed store {self._url} ({len(pending)} waiters released)")


__all__ = ["QueueStore", "Scheduler", "thread_timer"]
