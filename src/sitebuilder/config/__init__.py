"""
Configuration helpers for the site builder.
"""

from .models import CONFIG_FILENAME, ConfigError, SiteConfig, find_config, load_config
from .settings import EnvironmentOverrides, apply_overrides, get_overrides

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "SiteConfig",
    "find_config",
    "load_config",
    "EnvironmentOverrides",
    "apply_overrides",
    "get_overrides",
]
