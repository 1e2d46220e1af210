"""
Mock Redis Client.

A thin handle over a QueueStore exposing the callback-style redis client
surface. Many clients may share one store; quitting a client leaves the
store and its lists untouched.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from src.redismock.models import BlpopCallback, LpopCallback, Waiter
from src.redismock.store import QueueStore

logger = logging.getLogger(__name__)

SUPPORTED_EVENTS = ("error", "ready")


class MockRedisClient:
    """
    Client bound to one in-memory store.

    Example:
        client = create_client("mocks://jobs")
        client.blpop("work", 0, lambda err, item: print(item))
        client.rpush("work", "job-1")  # prints ['work', 'job-1']
        client.quit()
    """

    def __init__(self, store: QueueStore, default_timeout: float = 0):
        """
        Initialize the client.

        Args:
            store: Store this client reads and writes
            default_timeout: BLPOP timeout used when none is given
        """
        self._store = store
        self._default_timeout = default_timeout
        self._listeners: dict[str, Callable[..., Any]] = {}
        self._ready = True
        self._ready_fired = False
        self._closed = False

    @property
    def store(self) -> QueueStore:
        return self._store

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def closed(self) -> bool:
        return self._closed

    # =========================================================================
    # List Commands
    # =========================================================================

    def rpush(self, key: str, value: str) -> int:
        """Insert a value at the tail of a list. See QueueStore.push."""
        return self._store.push(key, value)

    def blpop(
        self,
        key: str,
        timeout: float | None,
        callback: BlpopCallback,
    ) -> Waiter | None:
        """
        Blocking list pop. Returns immediately; see QueueStore.blocking_pop.

        Returns:
            The parked Waiter if no item was available, else None
        """
        if timeout is None:
            timeout = self._default_timeout
        return self._store.blocking_pop(key, timeout, callback)

    def lpop(self, key: str, callback: LpopCallback) -> None:
        """Remove and return the first element of a list without waiting."""
        self._store.pop(key, callback)

    def llen(self, key: str) -> int:
        """Number of buffered items on a list."""
        return self._store.length(key)

    async def blpop_async(self, key: str, timeout: float | None = None) -> list[str] | None:
        """
        Await the next item on a list.

        Resolves to [key, value], or None when the timeout expires. If the
        awaiting task is cancelled after a push already handed it a value,
        the value is put back at the head of the list.
        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future[list[str] | None] = loop.create_future()

        def _resolve(item: list[str] | None) -> None:
            if future.cancelled():
                if item is not None:
                    logger.debug(f"Re-buffering value for cancelled consumer on '{key}'")
                    self._store.requeue(item[0], item[1])
                return
            future.set_result(item)

        def _callback(err: Exception | None, item: list[str] | None) -> None:
            loop.call_soon_threadsafe(_resolve, item)

        waiter = self.blpop(key, timeout, _callback)
        try:
            return await future
        except asyncio.CancelledError:
            if waiter is not None:
                waiter.cancel()
            raise

    # =========================================================================
    # Events
    # =========================================================================

    def on(self, event: str, listener: Callable[..., Any]) -> None:
        """
        Attach the listener for an event label.

        Only one listener is kept per label; a later registration replaces
        the earlier one. The client is ready as soon as it exists, so the
        first 'ready' listener is invoked immediately. 'ready' fires once
        per client: a replacement listener is stored but not invoked.

        Labels other than 'error' and 'ready' are accepted and ignored,
        since the mock never emits them.
        """
        if event not in SUPPORTED_EVENTS:
            logger.debug(f"Ignoring listener for unused event '{event}'")
            return

        self._listeners[event] = listener
        if event == "ready" and self._ready and not self._ready_fired:
            self._ready_fired = True
            listener()

    def emit(self, event: str, *args: Any) -> bool:
        """
        Invoke the listener for an event label.

        The store never fails, so nothing emits 'error' internally; tests
        use this to simulate connection faults.

        Returns:
            True if a listener was registered for the label
        """
        listener = self._listeners.get(event)
        if listener is None:
            return False
        listener(*args)
        return True

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def quit(self) -> str:
        """Close the client. The store keeps its lists. Always returns "OK"."""
        self._closed = True
        logger.debug(f"Client for {self._store.url} quit")
        return "OK"


__all__ = ["MockRedisClient", "SUPPORTED_EVENTS"]
