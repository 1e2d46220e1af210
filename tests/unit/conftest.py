"""
Pytest configuration for unit tests.

Pins mock settings so a developer's environment cannot change behaviour.
"""

import os


def pytest_configure(config):
    """Configure mock defaults for unit tests."""
    # Tests that exercise other values construct RedisMockSettings explicitly
    os.environ.setdefault("REDISMOCK_SCHEME", "mocks://")
    os.environ.setdefault("REDISMOCK_DEFAULT_BLPOP_TIMEOUT", "0")
