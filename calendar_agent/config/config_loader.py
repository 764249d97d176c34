"""Configuration loader for YAML files with environment overrides."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .config_schema import AppConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.yaml"

# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "CALDAV_SERVER_URL": ("caldav", "server_url"),
    "CALDAV_USERNAME": ("caldav", "username"),
    "CALDAV_PASSWORD": ("caldav", "password"),
    "CALENDAR_TIMEZONE": ("calendar", "default_timezone"),
    "CALENDAR_LOCALE": ("calendar", "locale"),
}


def apply_env_overrides(
    config_dict: Dict[str, Any], environ: Optional[Mapping[str, str]] = None
) -> Dict[str, Any]:
    """
    Overlay environment variables onto a raw configuration dict.

    Args:
        config_dict: Configuration loaded from YAML
        environ: Environment mapping (defaults to os.environ)

    Returns:
        New dict with overrides applied
    """
    environ = os.environ if environ is None else environ
    merged = {section: dict(values or {}) for section, values in config_dict.items()}

    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value:
            merged.setdefault(section, {})[key] = value
            logger.debug(f"Config {section}.{key} overridden by {env_name}")

    return merged


class ConfigLoader:
    """Load and validate configuration from YAML files."""

    @staticmethod
    def load_config(
        path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None
    ) -> AppConfig:
        """
        Load configuration from YAML file.

        When no path is given, config.yaml is used if it exists; otherwise the
        defaults plus environment overrides apply.

        Args:
            path: Path to configuration file
            environ: Environment mapping for overrides (defaults to os.environ)

        Returns:
            Validated AppConfig instance

        Raises:
            FileNotFoundError: If an explicitly given config file doesn't exist
            ValueError: If config is invalid
        """
        config_dict: Dict[str, Any] = {}

        config_path = Path(path or DEFAULT_CONFIG_PATH)
        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                config_dict = yaml.safe_load(f)
            if not config_dict:
                raise ValueError("Configuration file is empty")
            if not isinstance(config_dict, dict):
                raise ValueError("Configuration file must contain a mapping")
        elif path is not None:
            raise FileNotFoundError(f"Configuration file not found: {path}")
        else:
            logger.info(f"{DEFAULT_CONFIG_PATH} not found, using defaults")

        config = AppConfig(**apply_env_overrides(config_dict, environ))
        config.validate()

        return config

    @staticmethod
    def validate_config(config: dict) -> bool:
        """
        Validate configuration dictionary.

        Args:
            config: Configuration dictionary

        Returns:
            True if valid

        Raises:
            ValueError: If config is invalid
        """
        app_config = AppConfig(**config)
        app_config.validate()
        return True


def load_config(
    path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None
) -> AppConfig:
    """
    Convenience function to load configuration.

    Args:
        path: Path to configuration file
        environ: Environment mapping for overrides

    Returns:
        Validated AppConfig instance
    """
    return ConfigLoader.load_config(path, environ)
