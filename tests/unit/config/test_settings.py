"""
Unit tests for configuration management.
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from clinvoice_schema.config.settings import (
    ClinvoiceSettings,
    get_config,
    load_config,
    reload_config,
)
from clinvoice_schema.models import Currency


class TestClinvoiceSettings:
    """Test cases for ClinvoiceSettings."""

    def test_config_with_valid_env_vars(self, test_config):
        """Test configuration loads correctly with valid environment variables."""
        assert test_config.environment == "testing"
        assert test_config.debug is True
        assert test_config.log_level == "DEBUG"
        assert test_config.log_format == "json"
        assert test_config.default_currency is Currency.EUR

    def test_default_values(self, monkeypatch):
        for key in (
            "ENVIRONMENT",
            "DEBUG",
            "LOG_LEVEL",
            "LOG_FORMAT",
            "LOG_FILE",
            "LOG_CONSOLE",
            "LOG_MAX_FILE_SIZE",
            "LOG_BACKUP_COUNT",
            "DEFAULT_CURRENCY",
        ):
            monkeypatch.delenv(key, raising=False)

        config = ClinvoiceSettings(_env_file=None)

        assert config.environment == "development"
        assert config.debug is False
        assert config.log_level == "INFO"
        assert config.log_format == "standard"
        assert config.log_file is None
        assert config.log_console is True
        assert config.log_max_file_size == 10 * 1024 * 1024
        assert config.log_backup_count == 5
        assert config.default_currency is Currency.USD

    def test_values_are_normalized(self, mock_env):
        with patch.dict(
            os.environ,
            {"ENVIRONMENT": "Production", "LOG_LEVEL": "warning", "DEFAULT_CURRENCY": " gbp "},
        ):
            config = ClinvoiceSettings()

        assert config.environment == "production"
        assert config.log_level == "WARNING"
        assert config.default_currency is Currency.GBP

    @pytest.mark.parametrize(
        "key,value",
        [
            ("LOG_LEVEL", "LOUD"),
            ("LOG_FORMAT", "xml"),
            ("ENVIRONMENT", "staging"),
            ("DEFAULT_CURRENCY", "XYZ"),
        ],
    )
    def test_invalid_values_raise_error(self, mock_env, key, value):
        with patch.dict(os.environ, {key: value}):
            with pytest.raises(ValidationError):
                ClinvoiceSettings()


class TestLoggingConfigFromSettings:
    """Test the logging configuration derived from settings."""

    def test_debug_forces_debug_level(self, test_config):
        settings = test_config.model_copy(update={"log_level": "ERROR"})

        assert settings.logging_config().log_level == "DEBUG"

    def test_level_and_format(self, test_config):
        settings = test_config.model_copy(update={"debug": False, "log_level": "WARNING"})

        logging_config = settings.logging_config()

        assert logging_config.log_level == "WARNING"
        assert logging_config.log_format == "json"
        assert logging_config.enable_file is False

    def test_handler_options_from_environment(self, mock_env):
        with patch.dict(
            os.environ,
            {
                "LOG_FILE": "/tmp/clinvoice.log",
                "LOG_CONSOLE": "false",
                "LOG_MAX_FILE_SIZE": "5242880",
                "LOG_BACKUP_COUNT": "3",
            },
        ):
            logging_config = ClinvoiceSettings().logging_config()

        assert logging_config.enable_console is False
        assert logging_config.enable_file is True
        assert logging_config.max_file_size == 5242880
        assert logging_config.backup_count == 3

    def test_non_positive_file_size_raises_error(self, mock_env):
        with patch.dict(os.environ, {"LOG_MAX_FILE_SIZE": "0"}):
            with pytest.raises(ValidationError):
                ClinvoiceSettings()

    def test_log_file_enables_file_output(self, test_config):
        settings = test_config.model_copy(update={"log_file": "/tmp/clinvoice.log"})

        logging_config = settings.logging_config()

        assert logging_config.enable_file is True
        assert logging_config.log_file == "/tmp/clinvoice.log"


class TestConfigFunctions:
    """Test configuration utility functions."""

    def test_get_config_singleton(self, mock_env):
        """Test get_config returns the same instance."""
        config1 = get_config()
        config2 = get_config()

        assert config1 is config2

    def test_reload_config(self, mock_env):
        """Test reload_config creates a new instance."""
        config1 = get_config()
        config2 = reload_config()

        assert config1 is not config2
        assert config2 is get_config()

    def test_load_config_with_env_file(self, mock_env, tmp_path, monkeypatch):
        monkeypatch.delenv("DEFAULT_CURRENCY")
        env_file = tmp_path / ".env"
        env_file.write_text("DEFAULT_CURRENCY=JPY\n")

        config = load_config(str(env_file))

        assert config.default_currency is Currency.JPY
