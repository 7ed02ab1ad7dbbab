"""
Stepwise Settings Tests
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
import structlog

from stepwise.core.config import (
    LogLevel,
    StepwiseSettings,
    get_settings,
    reset_settings,
    set_settings,
)
from stepwise.core.logging import setup_logging


@pytest.fixture(autouse=True)
def clean_settings():
    reset_settings()
    yield
    reset_settings()


class TestStepwiseSettings:
    """Test settings loading."""

    def test_defaults(self):
        """Test default values."""
        with patch.dict(os.environ, {}, clear=True):
            settings = StepwiseSettings()

        assert settings.log_level == LogLevel.INFO
        assert settings.log_json is True
        assert settings.rules_path is None

    def test_from_env(self):
        """Test values from STEPWISE_ environment variables."""
        with patch.dict(os.environ, {
            "STEPWISE_LOG_LEVEL": "debug",
            "STEPWISE_LOG_JSON": "false",
            "STEPWISE_RULES_PATH": "/etc/stepwise/rules.json",
        }):
            settings = StepwiseSettings()

        assert settings.log_level == LogLevel.DEBUG
        assert settings.log_json is False
        assert settings.rules_path == Path("/etc/stepwise/rules.json")

    def test_global_settings(self):
        """Test the lazily created global instance."""
        first = get_settings()
        assert get_settings() is first

        custom = StepwiseSettings(log_level=LogLevel.ERROR)
        set_settings(custom)
        assert get_settings() is custom

        reset_settings()
        assert get_settings() is not custom


class TestSetupLogging:
    """Test structlog configuration."""

    @pytest.fixture(autouse=True)
    def restore_structlog(self):
        yield
        structlog.reset_defaults()

    def test_json_renderer(self):
        """Test JSON output is the default."""
        setup_logging("INFO")

        config = structlog.get_config()
        assert isinstance(config["processors"][-1], structlog.processors.JSONRenderer)
        assert config["wrapper_class"] is structlog.stdlib.BoundLogger

    def test_console_renderer(self):
        """Test console output when JSON is disabled."""
        setup_logging("DEBUG", json_output=False)

        config = structlog.get_config()
        assert isinstance(config["processors"][-1], structlog.dev.ConsoleRenderer)
