"""Configuration settings for agencyledger."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from AGENCYLEDGER_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="AGENCYLEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    db_path: Optional[str] = Field(
        default=None, description="SQLite database file (defaults to ~/.agencyledger/ledger.db)"
    )
    tax_rate_percent: float = Field(
        default=15.0, ge=0, le=100, description="Tax rate applied to gross revenue"
    )
    max_value: int = Field(
        default=100_000_000_000, gt=0, description="Largest transaction value in minor units"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING", description="Logging level"
    )
    log_format: Literal["json", "console"] = Field(
        default="console", description="Log output format"
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
