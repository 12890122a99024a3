# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to the DynamoDB table, worker pool sizing, and logging config

import os
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_workers() -> int:
    return min(32, (os.cpu_count() or 1) + 4)


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="PICTURE_HARVEST_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # Store Configuration
    table_name: str = Field(default="edl-cc-goal-content-prod", description="DynamoDB table holding content records")
    aws_region: str | None = Field(
        default=None, description="AWS region override (falls back to the boto3 discovery chain)"
    )
    page_size: int | None = Field(default=None, ge=1, description="Maximum records per Scan page (store default if unset)")
    fetch_retry_attempts: int = Field(
        default=1, ge=1, description="Attempts per page fetch; 1 keeps fail-fast behavior"
    )

    # Traversal Configuration
    max_workers: int = Field(default_factory=_default_workers, ge=1, description="Threads used for record traversal")
    max_sequence_depth: int = Field(
        default=1, ge=0, description="Number of nested list levels walked along any path of a record"
    )

    # Output Configuration
    output_path: Path = Field(default=Path("pictures.json"), description="Where the picture id list is written")

    # Logging Configuration
    log_mode: Literal["interactive", "production"] | None = Field(
        default=None, description="Logging output mode (detected from the terminal if unset)"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")

    @field_validator("log_mode", mode="before")
    @classmethod
    def _normalize_log_mode(cls, value):
        return value.lower() if isinstance(value, str) else value


# Global config instance - lazy loaded when first accessed
_config_instance: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Creates the config on first access, subsequent calls return the same instance.

    Returns:
        Config: The application configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment variables.

    Useful for testing or when environment variables change at runtime.

    Returns:
        Config: A fresh configuration instance
    """
    global _config_instance
    _config_instance = Config()
    return _config_instance
