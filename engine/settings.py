"""
Centralized settings configuration using Pydantic BaseSettings.

All environment variables are defined here with types, defaults, and
validation. Variables use the BUILD_TRACKER_ prefix and may also be set
in a local .env file.

Usage:
    from engine.settings import get_settings

    settings = get_settings()
    print(settings.data_file)
"""

from functools import lru_cache
from pathlib import Path
import logging
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from engine.core.thresholds import HISTORY_LIMITS


class Settings(BaseSettings):
    """Tracker settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BUILD_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, test, production",
    )

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------
    data_file: Path = Field(
        default=Path("~/.build-tracker/store.json"),
        description="JSON document holding the training store",
    )
    history_limit: int = Field(
        default=HISTORY_LIMITS.sessions_per_exercise,
        ge=1,
        description="Sessions kept per exercise",
    )
    check_history_limit: int = Field(
        default=HISTORY_LIMITS.checks_per_key,
        ge=1,
        description="Mobility checks / pain reports kept per key",
    )

    # -------------------------------------------------------------------------
    # Observability
    # -------------------------------------------------------------------------
    log_level: str = Field(
        default="WARNING",
        description="Root log level for the CLI",
    )
    sentry_dsn: Optional[str] = Field(
        default=None,
        description="Sentry DSN for error tracking",
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Invalid log level '{v}'")
        return level

    # -------------------------------------------------------------------------
    # Helper Properties
    # -------------------------------------------------------------------------
    @property
    def data_path(self) -> Path:
        """Store location with ~ expanded."""
        return self.data_file.expanduser()

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_test(self) -> bool:
        return self.environment == "test"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    For testing, clear the cache with get_settings.cache_clear().
    """
    return Settings()
