"""Stepwise Core Module - settings and logging."""

from stepwise.core.config import (
    LogLevel,
    StepwiseSettings,
    get_settings,
    set_settings,
    reset_settings,
)
from stepwise.core.logging import setup_logging

__all__ = [
    "LogLevel",
    "StepwiseSettings",
    "get_settings",
    "set_settings",
    "reset_settings",
    "setup_logging",
]
