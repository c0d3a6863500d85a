"""
Configuration loader with environment variable mapping.

This module handles loading configuration from environment variables,
optionally seeded from a .env file.
"""

from typing import Optional
import os
import logging
from dotenv import load_dotenv

from .models import (
    AppConfig,
    ArchiveConfig,
    Environment,
    EvictionConfig,
    EvictionScope,
    LoggingConfig,
)

logger = logging.getLogger(__name__)

ENV_PREFIX = "FSPRUNE"


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}_{name}", default)


def _getenv_bool(name: str, default: str = "false") -> bool:
    return _getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def resolve_environment() -> Environment:
    """Resolve the environment from FSPRUNE_ENVIRONMENT, then ENVIRONMENT."""
    env_str = (_getenv("ENVIRONMENT") or os.getenv("ENVIRONMENT", "development")).lower()
    if env_str in Environment.__members__.values():
        return Environment(env_str)
    return Environment.DEVELOPMENT


class ConfigLoader:
    """Configuration loader with environment variable mapping."""

    def __init__(self, env_file: Optional[str] = None):
        """
        Initialize configuration loader.

        Args:
            env_file: Path to .env file (defaults to .env in current directory)
        """
        self.env_file = env_file or ".env"
        self._loaded_config: Optional[AppConfig] = None

    def load_configuration(self) -> AppConfig:
        """
        Load configuration from environment variables.

        Returns:
            Validated AppConfig instance
        """
        self._load_env_file()
        config = self._load_typed_config()
        self._loaded_config = config
        return config

    def get_loaded_config(self) -> Optional[AppConfig]:
        """Get the currently loaded configuration."""
        return self._loaded_config

    def _load_env_file(self):
        """Load environment variables from .env file."""
        if os.path.exists(self.env_file):
            load_dotenv(self.env_file, override=False)
            logger.debug(f"Loaded environment variables from {self.env_file}")

    def _load_typed_config(self) -> AppConfig:
        """Load configuration using Pydantic models with environment mapping."""
        return AppConfig(
            environment=resolve_environment(),
            logging=self._load_logging_config(),
            eviction=self._load_eviction_config(),
            archive=self._load_archive_config(),
        )

    def _load_logging_config(self) -> LoggingConfig:
        return LoggingConfig(
            level=_getenv("LOG_LEVEL", "INFO"),
            log_dir=_getenv("LOG_DIR") or None,
            log_files_horizon=int(_getenv("LOG_FILES_HORIZON", "5")),
        )

    def _load_eviction_config(self) -> EvictionConfig:
        return EvictionConfig(
            scope=EvictionScope(_getenv("EVICTION_SCOPE", "recursive").lower()),
            dry_run=_getenv_bool("DRY_RUN"),
        )

    def _load_archive_config(self) -> ArchiveConfig:
        return ArchiveConfig(
            compresslevel=int(_getenv("ARCHIVE_COMPRESSLEVEL", "9")),
        )


def load_config(env_file: Optional[str] = None) -> AppConfig:
    """Load configuration from the environment (and .env, if present)."""
    return ConfigLoader(env_file).load_configuration()


def load_logging_config(env_file: Optional[str] = None) -> LoggingConfig:
    """
    Load only the logging section.

    Invalid values fall back to defaults with a warning, so a bad eviction or
    archive setting never keeps the library from importing.
    """
    loader = ConfigLoader(env_file)
    loader._load_env_file()
    try:
        return loader._load_logging_config()
    except ValueError as e:
        logger.warning(f"Invalid logging configuration, using defaults: {e}")
        return LoggingConfig()
