"""
Configuration management for Shocker.

Provides the settings dataclass and helpers for loading it from
files and environment variables.
"""

from shocker.config.settings import (
    ConfigurationError,
    ShockerConfig,
    load_config_from_env,
)

__all__ = [
    "ConfigurationError",
    "ShockerConfig",
    "load_config_from_env",
]
