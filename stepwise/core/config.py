"""
Stepwise Configuration

Process-level settings loaded from environment variables prefixed with
STEPWISE_ (e.g., STEPWISE_LOG_LEVEL=DEBUG).
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class LogLevel(str, Enum):
    """Logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StepwiseSettings(BaseSettings):
    """Main settings."""

    log_level: LogLevel = LogLevel.INFO
    log_json: bool = True

    # JSON retention schema used when no path is given explicitly
    rules_path: Optional[Path] = Field(default=None)

    model_config = {
        "env_prefix": "STEPWISE_",
        "case_sensitive": False,
    }

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v


# Global settings instance (lazy loaded)
_settings: Optional[StepwiseSettings] = None


def get_settings() -> StepwiseSettings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = StepwiseSettings()
    return _settings


def set_settings(settings: StepwiseSettings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset the global settings to default."""
    global _settings
    _settings = None
