"""Configuration management using pydantic-settings.

Provides environment-based configuration with type safety and validation.
"""

from .settings import (
    AGILE_API_PREFIX,
    REST_API_PREFIX,
    JiraSettings,
    clear_settings_cache,
    get_settings,
    load_settings,
)

__all__ = [
    "AGILE_API_PREFIX",
    "REST_API_PREFIX",
    "JiraSettings",
    "clear_settings_cache",
    "get_settings",
    "load_settings",
]
