"""
In-Memory Redis Queue Mock.

Provides a callback-style redis client backed by in-memory lists for
deterministic unit tests of code that queues work through RPUSH/BLPOP.

Key components:
- QueueStore: named lists and the BLPOP hand-off algorithm
- StoreRegistry: one isolated store per connection URL
- MockRedisClient: the client surface (rpush, blpop, lpop, on, quit)

Usage:
    from src.redismock import create_client

    pusher = create_client("mocks://mocked")
    client = create_client("mocks://mocked")

    client.blpop("jobs", 0, lambda err, item: print(item))
    pusher.rpush("jobs", "a value")
"""

from src.redismock.client import MockRedisClient
from src.redismock.config import RedisMockSettings, get_settings, reset_settings
from src.redismock.exceptions import (
    ConnectionSchemeError,
    InvalidConnectionSchemeError,
    RedisMockError,
)
from src.redismock.factory import create_client
from src.redismock.models import QueueSnapshot, QueueState, StoreStats, Waiter
from src.redismock.protocol import RedisClient
from src.redismock.registry import (
    StoreRegistry,
    get_default_registry,
    reset_default_registry,
)
from src.redismock.store import QueueStore

__all__ = [
    # Config
    "RedisMockSettings",
    "get_settings",
    "reset_settings",
    # Errors
    "RedisMockError",
    "ConnectionSchemeError",
    "InvalidConnectionSchemeError",
    # Models
    "Waiter",
    "QueueState",
    "QueueSnapshot",
    "StoreStats",
    # Engine
    "QueueStore",
    "StoreRegistry",
    "get_default_registry",
    "reset_default_registry",
    # Client
    "RedisClient",
    "MockRedisClient",
    "create_client",
]
