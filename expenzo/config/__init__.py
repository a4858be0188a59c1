"""Configuration package."""

from expenzo.config.settings import (
    AppSettings,
    LedgerStoreSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "LedgerStoreSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
