"""
Configuration module - Centralized settings management.

This module provides type-safe configuration management using Pydantic,
supporting environment variables, YAML files, and explicit overrides.

Usage:
    from semantic_locator.config import get_settings, configure

    # Get global settings (loaded once)
    settings = get_settings()

    # Install the filter pipeline described by the settings (once, at startup)
    configure(settings)

Environment Variables:
    SEMANTIC_LOCATOR__CUSTOM_LOCATOR__ENABLED=true
    SEMANTIC_LOCATOR__CUSTOM_LOCATOR__ATTRIBUTE=data-qa
    SEMANTIC_LOCATOR__LOCATOR__DEFAULT_TYPE=css
"""

from typing import Optional

from semantic_locator.config.settings import (
    Settings,
    LocatorSettings,
    CustomLocatorSettings,
    LoggingSettings,
)
from semantic_locator.config.loader import ConfigLoader, load_config
from semantic_locator.engine.filters import (
    FilterPipeline,
    pipeline_from_settings,
    reset_default_pipeline,
    set_default_pipeline,
)

# Global settings singleton
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance (singleton).

    Settings are loaded once from environment variables and config files.
    Call reset_settings() to reload.

    Returns:
        Global Settings instance
    """
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def reset_settings() -> None:
    """Reset the global settings and the default filter pipeline."""
    global _settings
    _settings = None
    reset_default_pipeline()


def configure(settings: Optional[Settings] = None) -> FilterPipeline:
    """
    Install the default filter pipeline built from settings.

    Args:
        settings: Settings to use; the global settings when None

    Returns:
        The installed pipeline
    """
    pipeline = pipeline_from_settings(settings or get_settings())
    set_default_pipeline(pipeline)
    return pipeline


__all__ = [
    "Settings",
    "LocatorSettings",
    "CustomLocatorSettings",
    "LoggingSettings",
    "ConfigLoader",
    "load_config",
    "get_settings",
    "reset_settings",
    "configure",
]
