"""
Configuration Management for Home Budget

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here. Every setting has a
default, so the budget runs without a .env file; environment variables only
override.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local key-value store configuration."""

    model_config = SettingsConfigDict(
        env_prefix="HOME_BUDGET_STORAGE_",
        extra="ignore"
    )

    data_file: Path = Field(
        default=Path("data") / "home_budget.json",
        description="JSON file backing the local key-value store"
    )

    # Keys inside the store
    monthly_key: str = Field(
        default="HomeBudget_Data",
        min_length=1,
        description="Key of the month id -> record mapping"
    )
    savings_key: str = Field(
        default="HomeBudget_GlobalSavings",
        min_length=1,
        description="Key of the flat savings ledger"
    )

    @field_validator("savings_key")
    @classmethod
    def validate_distinct_keys(cls, v: str, info: ValidationInfo) -> str:
        """Both blobs must live under different keys."""
        if v == info.data.get("monthly_key"):
            raise ValueError("savings_key must differ from monthly_key")
        return v


class ElectricitySettings(BaseSettings):
    """Electricity splitter defaults."""

    model_config = SettingsConfigDict(
        env_prefix="HOME_BUDGET_ELECTRICITY_",
        extra="ignore"
    )

    # Kept as text: they prefill the form fields verbatim
    default_day_price: str = Field(
        default="0.14986",
        description="Day tariff (T1) price per kWh incl. VAT"
    )
    default_night_price: str = Field(
        default="0.08870",
        description="Night tariff (T2) price per kWh incl. VAT"
    )
    currency: str = Field(
        default="EUR",
        min_length=1,
        max_length=10,
        description="Currency label used in exported reports"
    )

    @field_validator("default_day_price", "default_night_price")
    @classmethod
    def validate_price(cls, v: str) -> str:
        """Default prices must be non-negative numbers."""
        if float(v) < 0:
            raise ValueError(f"Price cannot be negative: {v}")
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    audit_history_size: int = Field(
        default=200,
        ge=0,
        le=10000,
        description="How many audit events to keep in memory"
    )


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

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def electricity(self) -> ElectricitySettings:
        return ElectricitySettings()

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

    Returns a dict of {setting_name: is_valid}, plus a
    "<name>_error" entry for every section that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "electricity", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
