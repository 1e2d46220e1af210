"""redis-queue-mock - In-memory redis list mock for deterministic unit tests."""

__version__ = "0.1.0"
