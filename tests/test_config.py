"""
Tests for settings loading.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from expenzo.config import AppSettings, LedgerStoreSettings, get_settings, validate_all_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Tests for environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        """Test defaults without any environment."""
        for name in ("EXPENZO_TREND_MONTHS", "EXPENZO_SEED_DEMO_DATA", "EXPENZO_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        settings = AppSettings()
        assert settings.trend_months == 6
        assert settings.seed_demo_data is False
        assert settings.log_level == "INFO"
        assert settings.export_dir == Path("exports")

    def test_env_prefix(self, monkeypatch, tmp_path):
        """Test values are read from prefixed environment variables."""
        monkeypatch.setenv("EXPENZO_TREND_MONTHS", "12")
        monkeypatch.setenv("EXPENZO_LEDGER_PATH", str(tmp_path / "ledger.json"))
        monkeypatch.setenv("EXPENZO_LEDGER_INDENT", "4")

        assert AppSettings().trend_months == 12
        ledger = LedgerStoreSettings()
        assert ledger.path == tmp_path / "ledger.json"
        assert ledger.indent == 4

    def test_invalid_log_level(self, monkeypatch):
        """Test log level must be a known level."""
        monkeypatch.setenv("EXPENZO_LOG_LEVEL", "LOUD")
        with pytest.raises(ValidationError):
            AppSettings()

    def test_validate_all_settings_reports_failures(self, monkeypatch):
        """Test startup validation names the failing group."""
        monkeypatch.setenv("EXPENZO_TREND_MONTHS", "0")
        results = validate_all_settings()
        assert results["ledger"] is True
        assert results["app"] is False
        assert "app_error" in results

    def test_get_settings_is_cached(self):
        """Test the settings root is built once."""
        assert get_settings() is get_settings()

    def test_debug_mode_forces_debug_logging(self, monkeypatch):
        """Test debug mode overrides the configured log level."""
        monkeypatch.setenv("EXPENZO_LOG_LEVEL", "WARNING")
        assert AppSettings().effective_log_level == "WARNING"

        monkeypatch.setenv("EXPENZO_DEBUG_MODE", "true")
        assert AppSettings().effective_log_level == "DEBUG"
