"""
Configuration Management for Expenzo

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The analytics thresholds (spike percentage, waste rules, alert ratio) are
NOT configurable; they are constants of the rules engine. Only the
surrounding application concerns live here.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerStoreSettings(BaseSettings):
    """JSON ledger file configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENZO_LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    path: Optional[Path] = Field(
        default=None,
        description="Path to the JSON ledger file. In-memory ledger when unset."
    )
    indent: int = Field(
        default=2,
        ge=0,
        le=8,
        description="JSON indentation used when writing the ledger"
    )
    @field_validator('path')
    @classmethod
    def validate_parent_exists(cls, v: Optional[Path]) -> Optional[Path]:
        """Warn if the ledger directory doesn't exist (it is created on first write)."""
        if v is not None and not v.parent.exists():
            import warnings
            warnings.warn(
                f"Ledger directory {v.parent} does not exist yet. "
                "It will be created on first write."
            )
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXPENZO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Log at DEBUG regardless of log_level"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for structured logs"
    )

    # Analytics display
    trend_months: int = Field(
        default=6,
        ge=1,
        le=36,
        description="Number of months shown in the income/expense trend"
    )

    # Demo ledger
    seed_demo_data: bool = Field(
        default=False,
        description="Seed the demo ledger into empty collections at session start"
    )

    # Export
    export_dir: Path = Field(
        default=Path("exports"),
        description="Directory for CSV exports"
    )

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug_mode else self.log_level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Sub-settings are loaded lazily to allow partial configuration

    @property
    def ledger(self) -> LedgerStoreSettings:
        return LedgerStoreSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with an
    `<name>_error` entry for each failure. Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("ledger", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
