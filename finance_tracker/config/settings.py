"""
Configuration Management for Finance Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: Settings are read only at the edges (orchestrator and
presentation). The pure core receives every choice (currency, locale,
list sizes, reference date) as an explicit argument.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from finance_tracker.utils.money import SUPPORTED_CURRENCIES


SUPPORTED_LOCALES = ("pt-BR", "en-US")


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

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level written to the structured log"
    )

    # Display
    default_currency: str = Field(
        default="BRL",
        description="Currency used when an account does not name a supported one"
    )
    default_locale: str = Field(
        default="pt-BR",
        description="Locale for number and currency formatting"
    )

    # Dashboard sizes
    top_transactions_count: int = Field(
        default=5,
        ge=1,
        le=50,
        description="How many largest incomes/expenses the dashboard lists"
    )
    recent_transactions_count: int = Field(
        default=5,
        ge=1,
        le=50,
        description="How many recent transactions the dashboard lists"
    )
    trend_months: int = Field(
        default=6,
        ge=1,
        le=36,
        description="Months shown in the monthly and balance trend charts"
    )

    @field_validator('default_currency')
    @classmethod
    def validate_currency(cls, v: str) -> str:
        """Only currencies the formatter knows."""
        code = v.strip().upper()
        if code not in SUPPORTED_CURRENCIES:
            raise ValueError(
                f"Unsupported currency: {v}. Allowed: {', '.join(SUPPORTED_CURRENCIES)}"
            )
        return code

    @field_validator('default_locale')
    @classmethod
    def validate_locale(cls, v: str) -> str:
        if v not in SUPPORTED_LOCALES:
            raise ValueError(
                f"Unsupported locale: {v}. Allowed: {', '.join(SUPPORTED_LOCALES)}"
            )
        return v

    @property
    def is_production(self) -> bool:
        return self.app_environment.lower() == "production"


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

    Returns a dict of {setting_name: is_valid}, with a `<name>_error`
    entry holding the message for each section that failed.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.app
        results["app"] = True
    except ValueError as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
