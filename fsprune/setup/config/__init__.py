"""
Pydantic configuration system.

Settings are read from FSPRUNE_* environment variables and an optional .env file.
"""

from .models import (
    Environment,
    EvictionScope,
    LoggingConfig,
    EvictionConfig,
    ArchiveConfig,
    AppConfig,
)
from .loader import ConfigLoader, load_config, load_logging_config, resolve_environment


def get_config(env_file=None):
    """
    Load the application configuration.

    Args:
        env_file: Optional path to a .env file

    Returns:
        AppConfig: Fully configured application settings
    """
    return load_config(env_file)


__all__ = [
    "Environment",
    "EvictionScope",
    "LoggingConfig",
    "EvictionConfig",
    "ArchiveConfig",
    "AppConfig",
    "ConfigLoader",
    "load_config",
    "load_logging_config",
    "resolve_environment",
    "get_config",
]
