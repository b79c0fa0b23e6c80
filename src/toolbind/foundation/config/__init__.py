"""Configuration management using pydantic-settings.

Provides environment-based configuration with type safety and validation.
"""

from .settings import (
    DRAFT_2020_12,
    InvocationSettings,
    LoggingSettings,
    SchemaSettings,
    ToolbindSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "DRAFT_2020_12",
    "InvocationSettings",
    "LoggingSettings",
    "SchemaSettings",
    "ToolbindSettings",
    "clear_settings_cache",
    "get_settings",
]
