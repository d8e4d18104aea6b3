"""Configuration for the response helpers using Pydantic Settings.

Features:
- **Type safety**: All configuration values are validated and typed
- **Environment variables**: ``RESPOND_`` prefixed variables and .env files
- **Nested configuration**: Uses __ delimiter for complex config structures
- **Caching**: Configuration is cached for performance

The charset and MIME types written by the helpers are fixed constants and
are deliberately not part of the settings.
"""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogConfig(BaseModel):
    """Logging configuration used by setup_logging."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_formatter_type: Literal["console", "json"] = Field(
        default="console",
        description="Log output formatter",
    )


class Settings(BaseSettings):
    """Main settings class for the response helpers."""

    model_config = SettingsConfigDict(
        env_prefix="RESPOND_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = Field(default=False, description="Debug mode flag")

    # Encoder settings
    json_sort_keys: bool = Field(
        default=False,
        description="Sort JSON object keys instead of keeping insertion order",
    )
    xml_short_empty_elements: bool = Field(
        default=False,
        description="Render empty XML elements as <Name /> instead of <Name></Name>",
    )

    # Logging configuration
    log_config: LogConfig = Field(
        default_factory=LogConfig, description="Logging configuration"
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
