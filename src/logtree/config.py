"""Process-wide logging configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Structured logging settings.

    All settings can be overridden via environment variables prefixed with
    ``LOGTREE_``, e.g. ``LOGTREE_MAX_DEPTH=12``.
    """

    model_config = SettingsConfigDict(
        env_prefix="LOGTREE_",
        case_sensitive=False,
        extra="ignore",
    )

    max_depth: int = Field(
        default=8, ge=0, description="Deepest nesting level a log entry may reach"
    )
    cause_in_message: bool = Field(
        default=False,
        description="Fold the cause into the payload instead of passing it to the sink",
    )


@lru_cache
def get_settings() -> LoggingSettings:
    """Get cached settings instance."""
    return LoggingSettings()


__all__ = ["LoggingSettings", "get_settings"]
