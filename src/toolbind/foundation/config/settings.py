"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults. Supports .env files and nested configuration.

Example:
    >>> from toolbind.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.invocation.void_result
    'Done'
    >>> settings.logging.level
    'INFO'

    # Or with environment variables:
    # TOOLBIND_SCHEMA_PRETTY=false
    # TOOLBIND_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DRAFT_2020_12 = "https://json-schema.org/draft/2020-12/schema"


class SchemaSettings(BaseSettings):
    """Input-schema generation configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TOOLBIND_SCHEMA_",
        extra="ignore",
    )

    dialect: str = Field(default=DRAFT_2020_12, description="Value written to the $schema keyword")
    pretty: bool = Field(default=True, description="Indent the generated schema document")

    @field_validator("dialect")
    @classmethod
    def _require_uri(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"schema dialect must be an absolute URI, got {v!r}")
        return v


class InvocationSettings(BaseSettings):
    """Call-time behaviour of method callbacks."""

    model_config = SettingsConfigDict(
        env_prefix="TOOLBIND_INVOCATION_",
        extra="ignore",
    )

    void_result: str = Field(default="Done", min_length=1, description="Result text for methods returning None")
    log_inputs: bool = Field(default=False, description="Include raw call input in debug logs")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TOOLBIND_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _upper(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class ToolbindSettings(BaseSettings):
    """Root settings for toolbind.

    Loads configuration from environment variables with TOOLBIND_ prefix.
    Supports nested configuration and .env files.

    Example environment variables:
        TOOLBIND_DEBUG=true
        TOOLBIND_SCHEMA_DIALECT=https://json-schema.org/draft-07/schema#
        TOOLBIND_INVOCATION_VOID_RESULT=OK
        TOOLBIND_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix="TOOLBIND_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode")
    environment: Literal["development", "staging", "production"] = "development"

    json_schema: SchemaSettings = Field(default_factory=SchemaSettings)
    invocation: InvocationSettings = Field(default_factory=InvocationSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("environment", mode="before")
    @classmethod
    def _normalize_env(cls, v: str) -> str:
        """Normalize environment name to lowercase."""
        return v.lower() if isinstance(v, str) else v

    @computed_field
    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> ToolbindSettings:
    """Get the global settings instance (cached)."""
    return ToolbindSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
