"""
Settings - Pydantic models for type-safe configuration.

This module defines all configuration settings as Pydantic models,
providing validation, type hints, and automatic environment variable loading.

Example:
    >>> from semantic_locator.config import Settings, load_config
    >>> settings = load_config()  # Loads from env, yaml, and defaults
    >>> print(settings.custom_locator.attribute)
    'data-test-id'
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LocatorSettings(BaseModel):
    """
    Locator classification settings.

    Attributes:
        default_type: Type for strings without CSS/XPath markers
            (None keeps them fuzzy)
    """
    default_type: Optional[str] = None


class CustomLocatorSettings(BaseModel):
    """
    Custom attribute shorthand (e.g. ``$register_button``).

    Attributes:
        enabled: Register the custom locator filter
        prefix: Prefix marking a custom locator
        attribute: Attribute matched by the shorthand
        strategy: Produce an XPath or a CSS locator
        show_actual: Show the generated locator instead of the shorthand
    """
    enabled: bool = False
    prefix: str = Field(default="$", min_length=1)
    attribute: str = Field(default="data-test-id", min_length=1)
    strategy: Literal["xpath", "css"] = "xpath"
    show_actual: bool = False

    @field_validator("strategy", mode="before")
    @classmethod
    def lower_strategy(cls, value: str) -> str:
        return value.lower() if isinstance(value, str) else value


class LoggingSettings(BaseModel):
    """
    Logging configuration.

    Attributes:
        level: Log level
        format: Log format string
        file: Log file path (None for console only)
        json_format: Use JSON format for logs
    """
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None
    json_format: bool = False


class Settings(BaseSettings):
    """
    Root settings container - single source of truth for all configuration.

    Settings are loaded in this priority order (highest to lowest):
    1. Explicit values passed to constructor
    2. Config file (YAML), passed in as constructor values
    3. Environment variables (prefixed with SEMANTIC_LOCATOR__)
    4. Default values

    Example:
        >>> settings = Settings()  # Load from env vars
        >>> settings = Settings(custom_locator=CustomLocatorSettings(enabled=True))
    """

    model_config = SettingsConfigDict(
        env_prefix="SEMANTIC_LOCATOR__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    locator: LocatorSettings = Field(default_factory=LocatorSettings)
    custom_locator: CustomLocatorSettings = Field(default_factory=CustomLocatorSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    debug: bool = False

    def merge_with(self, overrides: dict) -> "Settings":
        """
        Create a new Settings instance with overrides applied.

        Args:
            overrides: Dictionary of values to override

        Returns:
            New Settings instance with overrides applied
        """
        current = self.model_dump()

        def deep_merge(base: dict, updates: dict) -> dict:
            for key, value in updates.items():
                if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                    deep_merge(base[key], value)
                else:
                    base[key] = value
            return base

        merged = deep_merge(current, overrides)
        return Settings(**merged)
