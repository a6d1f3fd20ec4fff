"""
Configuration settings for catalog import
Loads from environment variables or a .env file
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"]


class ImportSettings(BaseSettings):
    """
    Import settings.

    Load from environment variables with CATALOG_IMPORT_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_IMPORT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields in .env file
    )

    # CSV reading
    default_delimiter: str = ","
    encoding: Optional[str] = None  # None = detect with chardet
    chunk_size: int = Field(default=1000, ge=1)

    # Logging
    log_level: str = "INFO"

    @field_validator("default_delimiter")
    @classmethod
    def validate_delimiter(cls, v):
        """Delimiter must be exactly one character."""
        if len(v) != 1:
            raise ValueError(f"Delimiter must be a single character, got {v!r}")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v):
        """Log level must be a standard logging level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of {LOG_LEVELS}, got {v!r}")
        return level


@lru_cache()
def get_settings() -> ImportSettings:
    """Get cached settings instance"""
    return ImportSettings()
