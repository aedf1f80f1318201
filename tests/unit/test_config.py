"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from rotation_planner.config import AppSettings, Environment, LogFormat, get_settings


class TestAppSettings:
    """Test AppSettings parsing and validation."""

    def test_defaults(self, monkeypatch):
        """Test match defaults when nothing is configured."""
        for name in ("DEFAULT_HALF_LENGTH_MINUTES", "DEFAULT_ROTATION_INTERVAL_MINUTES", "MUST_ON_SHARE"):
            monkeypatch.delenv(name, raising=False)
        settings = AppSettings(_env_file=None)
        assert settings.DEFAULT_HALF_LENGTH_MINUTES == 30
        assert settings.DEFAULT_ROTATION_INTERVAL_MINUTES == 10
        assert settings.MUST_ON_SHARE == 0.5

    def test_env_normalized(self):
        """Test ENV accepts common spellings."""
        assert AppSettings(ENV="dev", _env_file=None).ENV is Environment.DEV
        assert AppSettings(ENV="TEST", _env_file=None).ENV is Environment.TEST

    def test_env_rejected(self):
        with pytest.raises(ValidationError):
            AppSettings(ENV="staging", _env_file=None)

    def test_log_level_validated(self):
        """Test log level is upper-cased and checked."""
        assert AppSettings(LOG_LEVEL="debug", _env_file=None).LOG_LEVEL == "DEBUG"
        with pytest.raises(ValidationError):
            AppSettings(LOG_LEVEL="LOUD", _env_file=None)

    def test_log_format_case_insensitive(self):
        assert AppSettings(LOG_FORMAT="JSON", _env_file=None).LOG_FORMAT is LogFormat.JSON

    def test_environment_variables(self, monkeypatch):
        """Test settings are read from the environment."""
        monkeypatch.setenv("DEFAULT_ROTATION_INTERVAL_MINUTES", "5")
        assert AppSettings(_env_file=None).DEFAULT_ROTATION_INTERVAL_MINUTES == 5

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
