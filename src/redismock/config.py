"""
Redis Mock Configuration

Configuration settings using pydantic-settings for environment variable support.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RedisMockSettings(BaseSettings):
    """
    Configuration for the in-memory Redis mock.

    Reads from environment variables with REDISMOCK_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="REDISMOCK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    scheme: str = Field(
        default="mocks://",
        description="Connection URL prefix accepted by the registry",
    )
    default_blpop_timeout: float = Field(
        default=0,
        ge=0,
        description="BLPOP timeout in seconds when none is given (0 = wait forever)",
    )
    timers_enabled: bool = Field(
        default=True,
        description="Arm expiry timers for BLPOP waiters with a positive timeout",
    )

    @field_validator("scheme")
    @classmethod
    def scheme_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("scheme must not be empty")
        return v


_settings: RedisMockSettings | None = None


def get_settings() -> RedisMockSettings:
    """Get the global settings instance, loading from environment on first use."""
    global _settings
    if _settings is None:
        _settings = RedisMockSettings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None


__all__ = ["RedisMockSettings", "get_settings", "reset_settings"]
