"""
Configuration Management for Expense Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The CLI may override the data file per invocation; everything else comes
from EXPENSE_TRACKER_* variables or a .env file.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Storage
    data_file: Path = Field(
        default=Path("expenses.json"),
        description="Path of the JSON file holding all expenses"
    )
    json_indent: int = Field(
        default=2,
        ge=1,
        le=8,
        description="Indentation used when writing the data file"
    )

    # Logging
    log_level: str = Field(
        default="ERROR",
        description="Minimum level for log lines written to stderr"
    )
    log_json: bool = Field(
        default=False,
        description="Render log lines as JSON instead of key=value"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept stdlib logging level names."""
        level = v.strip().upper()
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if level not in allowed:
            raise ValueError(f"Unsupported log level: {v}. Allowed: {sorted(allowed)}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()
