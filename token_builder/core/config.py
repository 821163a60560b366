"""Runtime configuration read from environment variables.

Variables:
    TOKEN_BUILDER_LOG_LEVEL: logging level name (default: INFO)
    TOKEN_BUILDER_MAX_SESSIONS: live editing sessions kept before the oldest
        is evicted (default: 1000)
    TOKEN_BUILDER_API_PREFIX: URL prefix of the editor API (default: /token-builder)
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field, field_validator

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_MAX_SESSIONS = 1000
DEFAULT_API_PREFIX = "/token-builder"

_settings: Settings | None = None


class Settings(BaseModel):
    """Process settings for the token builder service."""

    log_level: str = Field(default=DEFAULT_LOG_LEVEL)
    max_sessions: int = Field(default=DEFAULT_MAX_SESSIONS, ge=1)
    api_prefix: str = Field(default=DEFAULT_API_PREFIX)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize log level name."""
        return v.upper().strip()

    @field_validator("api_prefix")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        """Ensure a leading slash and no trailing slash."""
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from the process environment."""
        return cls(
            log_level=os.getenv("TOKEN_BUILDER_LOG_LEVEL", DEFAULT_LOG_LEVEL),
            max_sessions=int(os.getenv("TOKEN_BUILDER_MAX_SESSIONS", DEFAULT_MAX_SESSIONS)),
            api_prefix=os.getenv("TOKEN_BUILDER_API_PREFIX", DEFAULT_API_PREFIX),
        )


def get_settings() -> Settings:
    """Get the process settings, reading the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Drop cached settings (useful for testing or reconfiguration)."""
    global _settings
    _settings = None
