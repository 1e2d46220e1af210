"""
Store Registry

Maps connection URLs to isolated QueueStore instances.

The preferred pattern is to construct a registry and inject it:

    registry = StoreRegistry()
    producer = registry.client("mocks://jobs")
    consumer = registry.client("mocks://jobs")  # same store as producer

For convenience, a process-wide default registry backs create_client():

    client = create_client("mocks://jobs")
    ...
    reset_default_registry()  # between tests
"""

from __future__ import annotations

import logging
import threading

from src.redismock.client import MockRedisClient
from src.redismock.config import RedisMockSettings, get_settings
from src.redismock.exceptions import InvalidConnectionSchemeError
from src.redismock.store import QueueStore, Scheduler

logger = logging.getLogger(__name__)


class StoreRegistry:
    """
    Registry of in-memory stores keyed by connection URL.

    Requests for the same URL always reuse one store; different URLs never
    see each other's lists. Stores live as long as the registry unless
    explicitly discarded.

    Thread Safety:
        Get-or-create is atomic, so concurrent first access for a URL
        yields a single store.
    """

    def __init__(
        self,
        settings: RedisMockSettings | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        """
        Initialize the registry.

        Args:
            settings: Mock settings. If None, reads from environment.
            scheduler: Timer factory handed to every store created here
        """
        self._settings = settings or get_settings()
        self._scheduler = scheduler
        self._stores: dict[str, QueueStore] = {}
        self._lock = threading.Lock()

    @property
    def settings(self) -> RedisMockSettings:
        return self._settings

    def validate(self, url: str) -> None:
        """
        Check that a URL uses the mock scheme.

        Raises:
            InvalidConnectionSchemeError: If the URL lacks the scheme prefix
        """
        if not isinstance(url, str) or not url.startswith(self._settings.scheme):
            raise InvalidConnectionSchemeError(str(url), self._settings.scheme)

    def obtain(self, url: str) -> QueueStore:
        """
        Get the store for a URL, creating it on first request.

        Raises:
            InvalidConnectionSchemeError: If the URL lacks the scheme prefix.
                No store is created or looked up in that case.
        """
        self.validate(url)

        with self._lock:
            store = self._stores.get(url)
            if store is None:
                store = QueueStore(
                    url=url,
                    scheduler=self._scheduler,
                    timers_enabled=self._settings.timers_enabled,
                )
                self._stores[url] = store
                logger.info(f"Created mock store for {url}")
            return store

    def client(self, url: str) -> MockRedisClient:
        """Create a client bound to the store for a URL."""
        return MockRedisClient(
            self.obtain(url),
            default_timeout=self._settings.default_blpop_timeout,
        )

    def get(self, url: str) -> QueueStore | None:
        """Get an existing store without creating one."""
        with self._lock:
            return self._stores.get(url)

    def urls(self) -> list[str]:
        """URLs with a registered store."""
        with self._lock:
            return list(self._stores)

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._stores

    def __len__(self) -> int:
        with self._lock:
            return len(self._stores)

    # =========================================================================
    # Teardown
    # =========================================================================

    def discard(self, url: str) -> bool:
        """
        Forget the store for a URL, releasing its parked waiters.

        Clients already bound to the store keep working against it; new
        requests for the URL get a fresh, empty store.

        Returns:
            True if a store was registered for the URL
        """
        with self._lock:
            store = self._stores.pop(url, None)
        if store is None:
            return False
        store.flush()
        logger.info(f"Discarded mock store for {url}")
        return True

    def clear(self) -> None:
        """Forget every store."""
        with self._lock:
            stores = list(self._stores.values())
            self._stores.clear()
        for store in stores:
            store.flush()
        logger.info(f"Cleared {len(stores)} mock stores")


_default_registry: StoreRegistry | None = None
_default_lock = threading.Lock()


def get_default_registry() -> StoreRegistry:
    """Get the process-wide registry, creating it on first use."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = StoreRegistry()
        return _default_registry


def reset_default_registry() -> None:
    """Tear down the process-wide registry (testing only)."""
    global _default_registry
    with _default_lock:
        registry = _default_registry
        _default_registry = None
    if registry is not None:
        registry.clear()


__all__ = [
    "StoreRegistry",
    "get_default_registry",
    "reset_default_registry",
]
