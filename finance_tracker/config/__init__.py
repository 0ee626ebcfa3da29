"""Configuration package."""

from finance_tracker.config.settings import (
    SUPPORTED_LOCALES,
    AppSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "SUPPORTED_LOCALES",
    "AppSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
