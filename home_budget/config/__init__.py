"""Configuration package."""

from home_budget.config.settings import (
    AppSettings,
    ElectricitySettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "ElectricitySettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
