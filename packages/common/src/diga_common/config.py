"""Configuration management for the DiGA FHIR adapter.

Settings are read from environment variables (case-insensitive) and an
optional ``.env`` file. Command-line flags take precedence where both exist.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
VALID_LOG_FORMATS = ("console", "json")

OUTPUT_FILE_NAME_DEFAULT = "DigaVerzeichnis.json"


class Settings(BaseSettings):
    """Process-wide settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(
        default="console",
        description="Log renderer: 'console' for humans, 'json' for machines",
    )
    default_output_file: str = Field(
        default=OUTPUT_FILE_NAME_DEFAULT,
        description="Output file used when --output-file is not given",
    )
    output_encoding: str = Field(
        default="utf-8",
        description="Text encoding of the written JSON file",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {VALID_LOG_LEVELS}, got {v!r}")
        return upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        lower = v.lower()
        if lower not in VALID_LOG_FORMATS:
            raise ValueError(f"log_format must be one of {VALID_LOG_FORMATS}, got {v!r}")
        return lower


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()
