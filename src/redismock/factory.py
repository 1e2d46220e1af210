"""
Mock Client Factory.

Creates clients bound to in-memory stores segregated by connection URL.
"""

from __future__ import annotations

import logging

from src.redismock.client import MockRedisClient
from src.redismock.registry import StoreRegistry, get_default_registry

logger = logging.getLogger(__name__)


def create_client(url: str, registry: StoreRegistry | None = None) -> MockRedisClient:
    """
    Initialize a new client to a mocked queue store.

    Stores are segregated by the full connection URL, which must start with
    the mock scheme ('mocks://' by default).

    Args:
        url: Connection URL
        registry: Registry to resolve the store from. If None, uses the
            process-wide default registry.

    Returns:
        Initialized mock queue client

    Raises:
        InvalidConnectionSchemeError: If the URL does not use the mock scheme

    Example:
        pusher = create_client("mocks://mocked")
        client = create_client("mocks://mocked")

        client.blpop("jobs", 0, on_item)
        pusher.rpush("jobs", "a value")  # on_item(None, ["jobs", "a value"])
    """
    if registry is None:
        registry = get_default_registry()

    client = registry.client(url)
    logger.debug(f"Created mock client for {url}")
    return client


__all__ = ["create_client"]
