"""
Config Loader - Find, read and merge locator configuration.

Sources, highest priority first:

1. Explicit overrides passed to ``load()``
2. The YAML config file
3. Environment variables (``SEMANTIC_LOCATOR__...``, ``.env`` included)
4. Defaults

The YAML file may use the settings layout directly::

    custom_locator:
      enabled: true
      attribute: data-qa

or the plugin layout used by test runner configs::

    plugins:
      customLocator:
        enabled: true
        attribute: data-qa
        showActual: true
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging
import os
import re

import yaml
from dotenv import load_dotenv

from semantic_locator.config.settings import Settings
from semantic_locator.exceptions.base import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "SEMANTIC_LOCATOR_CONFIG"

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def normalize_file_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Turn a plugin-style config into the settings layout.

    ``plugins.customLocator`` becomes ``custom_locator`` with snake_case keys.
    Top-level settings sections win over the plugin block.

    Args:
        config: Raw mapping read from YAML

    Returns:
        Mapping accepted by ``Settings``
    """
    plugins = config.get("plugins") or {}
    if not isinstance(plugins, dict):
        raise ConfigurationError("'plugins' must be a mapping", {"plugins": plugins})

    normalized = {key: value for key, value in config.items() if key != "plugins"}
    plugin = plugins.get("customLocator")
    if plugin is None:
        return normalized
    if not isinstance(plugin, dict):
        raise ConfigurationError("'plugins.customLocator' must be a mapping")

    custom = {_snake_case(key): value for key, value in plugin.items()}
    custom.update(normalized.get("custom_locator") or {})
    normalized["custom_locator"] = custom
    return normalized


class ConfigLoader:
    """
    Locate and load the locator configuration.

    Example:
        >>> settings = ConfigLoader("locator.yaml").load()
        >>> settings.custom_locator.attribute
        'data-qa'
    """

    DEFAULT_CONFIG_PATHS = [
        Path("locator.yaml"),
        Path("locator.yml"),
        Path("config/locator.yaml"),
        Path.home() / ".config" / "semantic-locator" / "config.yaml",
    ]

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize the config loader.

        Args:
            config_path: Explicit config file; ``SEMANTIC_LOCATOR_CONFIG`` is used when omitted
        """
        config_path = config_path or os.environ.get(CONFIG_PATH_ENV)
        self.config_path = Path(config_path) if config_path else None

    def find_config_file(self) -> Optional[Path]:
        """
        Pick the config file to read.

        An explicit path must exist; otherwise the default locations are
        searched in order.

        Raises:
            ConfigurationError: If the explicit path doesn't exist
        """
        if self.config_path:
            if not self.config_path.exists():
                raise ConfigurationError(f"Config file {self.config_path} not found")
            return self.config_path

        return next((path for path in self.DEFAULT_CONFIG_PATHS if path.exists()), None)

    def load_yaml_config(self, path: Path) -> Dict[str, Any]:
        """
        Read a YAML config file.

        Raises:
            ConfigurationError: If the file isn't valid YAML or isn't a mapping
        """
        try:
            config = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        return normalize_file_config(config)

    def load(
        self,
        env_file: Optional[Union[str, Path]] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> Settings:
        """
        Build settings from every source.

        Args:
            env_file: .env file to load; ``.env`` or ``.env.local`` when omitted
            overrides: Values applied on top of everything else

        Returns:
            Complete Settings instance
        """
        env_files = [Path(env_file)] if env_file else [Path(".env"), Path(".env.local")]
        for env_path in env_files:
            if env_path.exists():
                load_dotenv(env_path)
                break

        file_config: Dict[str, Any] = {}
        config_file = self.find_config_file()
        if config_file:
            logger.debug(f"Loading locator config from {config_file}")
            file_config = self.load_yaml_config(config_file)

        # Env vars only fill what the file leaves unset
        settings = Settings(**file_config)
        return settings.merge_with(overrides) if overrides else settings


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    env_file: Optional[Union[str, Path]] = None,
    **overrides: Any,
) -> Settings:
    """
    Load settings in one call.

    Example:
        >>> settings = load_config()
        >>> settings = load_config(config_path="my-locators.yaml")
        >>> settings = load_config(custom_locator={"enabled": True, "attribute": "data-qa"})
    """
    return ConfigLoader(config_path).load(env_file=env_file, overrides=overrides or None)
