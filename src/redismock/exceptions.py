"""
Redis Mock Exception Hierarchy

Provides structured exception types for the in-memory Redis mock.
All redismock-specific exceptions inherit from RedisMockError.

Queue operations and the client surface never raise: an absent list
behaves like an empty one and unused event labels are ignored. Errors
only surface when acquiring a client for a URL outside the mock scheme.

Usage:
    from src.redismock.exceptions import InvalidConnectionSchemeError

    try:
        client = create_client("redis://localhost:6379")
    except InvalidConnectionSchemeError as e:
        logger.error(f"Refusing connection: {e}")
"""

from __future__ import annotations


class RedisMockError(Exception):
    """
    Root of every error the mock raises.

    Tests that swap the mock in for a real redis client can catch this to
    tell mock misconfiguration (a wrong URL, a bad setting) apart from
    failures in the code under test. The code, when set, is prefixed to the
    rendered message, e.g. "[INVALID_SCHEME] ...".

    Attributes:
        message: Human-readable error description
        code: Stable identifier tests can assert on instead of message text
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code
        super().__init__(message)

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


# =============================================================================
# Connection Errors
# =============================================================================


class ConnectionSchemeError(RedisMockError):
    """Base class for connection URL errors."""

    pass


class InvalidConnectionSchemeError(ConnectionSchemeError):
    """Connection URL does not use the mock scheme."""

    def __init__(self, url: str, expected: str) -> None:
        super().__init__(
            f"Invalid mock queue protocol for '{url}': expected prefix '{expected}'",
            code="INVALID_SCHEME",
        )
        self.url = url
        self.expected = expected


__all__ = [
    "RedisMockError",
    "ConnectionSchemeError",
    "InvalidConnectionSchemeError",
]
