"""Configuration loading: YAML file, environment overrides, pydantic validation."""

from .config_loader import ConfigLoader, apply_env_overrides, load_config
from .config_schema import AppConfig, CalDAVConfig, CalendarConfig

__all__ = [
    "AppConfig",
    "CalDAVConfig",
    "CalendarConfig",
    "ConfigLoader",
    "apply_env_overrides",
    "load_config",
]
