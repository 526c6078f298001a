"""
Core configuration management for conlog.

This module provides centralized configuration using Pydantic settings with
support for environment variables and type validation. The values are read
once and then handed to :class:`conlog.logger.Logger` as plain defaults;
a logger never re-reads the environment after construction.

Classes:
    Settings: Configuration class with all logger defaults

Environment Variables:
    Settings can be overridden using environment variables with the same
    names as the class attributes (case-sensitive).

Example:
    >>> from conlog.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.LOG_LEVEL)
    info

Configuration Sections:
    - Application: environment name
    - Logger: level, expanded mode, output mode, raw mode, inspection depth
    - Diagnostics: level and format of conlog's own structlog output
"""

from functools import lru_cache
from typing import Any, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from conlog.helpers.level import select_level
from conlog.helpers.mode import select_mode
from conlog.models.levels import LogLevel, ServerMode

TEST_ENVIRONMENTS = ("test", "testing")


class Settings(BaseSettings):
    """
    Logger defaults with environment variable support.

    Attributes:
        ENVIRONMENT: Deployment environment (development/production/test)

        LOG_LEVEL: Threshold level name or number (1-5)
        LOG_EXPANDED: Deep-parse JSON strings before output
        LOG_MODE: Output mode (OFF/STD/AWS/GCP, "server" or "console")
        LOG_RAW: Pass structures to the sink instead of rendered text
        LOG_OBJECT_DEPTH: Depth limit for rendered structures (unset = no limit)

        DIAGNOSTIC_LOG_LEVEL: Level for conlog's own diagnostics
        DIAGNOSTIC_LOG_FORMAT: Diagnostics format (json/text)

    Properties:
        level: Effective threshold level
        expanded: Effective expanded mode
        mode: Effective output mode

    Example:
        >>> settings = Settings(LOG_LEVEL="2", LOG_MODE="server")
        >>> settings.level, settings.mode
        (<LogLevel.WARN: 'warn'>, <ServerMode.STD: 'STD'>)
    """

    # Application
    ENVIRONMENT: str = "development"

    # Logger Configuration
    LOG_LEVEL: LogLevel = LogLevel.INFO
    LOG_EXPANDED: bool = False
    LOG_MODE: ServerMode = ServerMode.OFF
    LOG_RAW: bool = False
    LOG_OBJECT_DEPTH: Optional[int] = None

    # Diagnostics Configuration
    DIAGNOSTIC_LOG_LEVEL: str = "WARNING"
    DIAGNOSTIC_LOG_FORMAT: str = "text"

    @property
    def testing(self) -> bool:
        """True when running under a test environment."""
        return self.ENVIRONMENT.lower() in TEST_ENVIRONMENTS

    @property
    def level(self) -> LogLevel:
        """
        Effective threshold level.

        Test environments always log everything, matching the behaviour
        callers rely on when asserting on captured output.
        """
        return LogLevel.TRACE if self.testing else self.LOG_LEVEL

    @property
    def expanded(self) -> bool:
        """Effective expanded mode; forced on in test environments."""
        return self.testing or self.LOG_EXPANDED

    @property
    def mode(self) -> ServerMode:
        return self.LOG_MODE

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def validate_log_level(cls, v: Any) -> LogLevel:
        """
        Normalize the threshold level.

        Numeric strings coming from the environment are treated as level
        numbers, so ``LOG_LEVEL=2`` means ``warn``. Unknown values fall back
        to ``trace`` instead of failing, the same as ``select_level``.
        """
        if isinstance(v, str) and v.strip().isdigit():
            v = int(v.strip())
        return select_level(v)

    @field_validator("LOG_MODE", mode="before")
    @classmethod
    def validate_log_mode(cls, v: Any) -> ServerMode:
        return select_mode(v)

    @field_validator("LOG_OBJECT_DEPTH")
    @classmethod
    def validate_object_depth(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError("LOG_OBJECT_DEPTH must be zero or positive")
        return v

    @field_validator("DIAGNOSTIC_LOG_LEVEL")
    @classmethod
    def validate_diagnostic_level(cls, v: str) -> str:
        """
        Validate the diagnostics level is a standard logging level.

        Supported levels: DEBUG, INFO, WARNING, ERROR, CRITICAL
        """
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"DIAGNOSTIC_LOG_LEVEL must be one of: {valid_levels}")
        return v.upper()

    @field_validator("DIAGNOSTIC_LOG_FORMAT")
    @classmethod
    def validate_diagnostic_format(cls, v: str) -> str:
        if v.lower() not in ("json", "text"):
            raise ValueError("DIAGNOSTIC_LOG_FORMAT must be 'json' or 'text'")
        return v.lower()

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()


def reset_settings() -> None:
    """Drop the cached settings so the next access re-reads the environment."""
    get_settings.cache_clear()
