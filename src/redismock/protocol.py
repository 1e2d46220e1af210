"""
Redis Client Protocol.

Defines the subset of the redis client interface the mock implements:
enough to push single values onto a list, pop them (blocking or not),
listen for connection events, and quit.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from src.redismock.models import BlpopCallback, LpopCallback, Waiter


@runtime_checkable
class RedisClient(Protocol):
    """
    Callback-style redis client for list-backed queues.

    Implementations must provide:
    - RPUSH of single values onto the tail of a list
    - BLPOP that hands the head item (or a later pushed one) to a callback
    - LPOP that never waits
    - quit() that always acknowledges with "OK"
    """

    @abstractmethod
    def rpush(self, key: str, value: str) -> int:
        """
        Insert a value at the tail of the list stored at key.

        If key does not exist, it is created as an empty list first.

        Returns:
            The length of the list after the push operation
        """
        ...

    @abstractmethod
    def blpop(
        self,
        key: str,
        timeout: float | None,
        callback: BlpopCallback,
    ) -> Waiter | None:
        """
        Blocking list pop.

        The callback receives (None, [key, value]) once an element is
        available, or (None, None) when the timeout expires first.
        A timeout of 0 waits indefinitely.
        """
        ...

    @abstractmethod
    def lpop(self, key: str, callback: LpopCallback) -> None:
        """
        Remove and return the first element of the list stored at key.

        The callback receives (None, value), or (None, None) when the list
        does not exist or is empty.
        """
        ...

    @abstractmethod
    def on(self, event: str, listener: Callable[..., Any]) -> None:
        """Attach the single listener for an event label ('error' or 'ready')."""
        ...

    @abstractmethod
    def quit(self) -> str:
        """
        Close the connection.

        Returns:
            Always "OK"
        """
        ...


__all__ = ["RedisClient"]
