"""
Pydantic configuration models with validation.

Configuration Architecture:
==========================

LoggingConfig: Log level, optional log directory and how many log folders to keep
EvictionConfig: Candidate scope and dry-run default for size-bounded eviction
ArchiveConfig: tar.gz compression settings
AppConfig: Top-level application configuration (combines the above)
"""

from pydantic import BaseModel, Field, field_validator
from enum import Enum
from typing import Optional
from pathlib import Path


class Environment(str, Enum):
    """Application environment enumeration."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class EvictionScope(str, Enum):
    """Which files are eviction candidates."""
    RECURSIVE = "recursive"
    DIRECT = "direct"


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Console log level")
    log_dir: Optional[str] = Field(
        default=None,
        description="Root folder for JSON log files; file logging is off when unset"
    )
    log_files_horizon: int = Field(
        default=5,
        ge=1,
        le=1000,
        description="Number of most recent log folders kept per day"
    )

    @field_validator('level')
    @classmethod
    def validate_level(cls, v):
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of {', '.join(LOG_LEVELS)}")
        return level

    def get_log_dir(self) -> Optional[Path]:
        """Get log directory as Path object."""
        return Path(self.log_dir) if self.log_dir else None


class EvictionConfig(BaseModel):
    """Size-bounded eviction defaults."""

    scope: EvictionScope = Field(
        default=EvictionScope.RECURSIVE,
        description="Scan the whole tree or only direct children for candidates"
    )
    dry_run: bool = Field(
        default=False,
        description="Select files without deleting them"
    )


class ArchiveConfig(BaseModel):
    """Archive (tar.gz) settings."""

    compresslevel: int = Field(default=9, ge=1, le=9, description="gzip compression level")


class AppConfig(BaseModel):
    """Top-level application configuration."""

    environment: Environment = Field(default=Environment.DEVELOPMENT, description="Execution environment")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging settings")
    eviction: EvictionConfig = Field(default_factory=EvictionConfig, description="Eviction settings")
    archive: ArchiveConfig = Field(default_factory=ArchiveConfig, description="Archive settings")

    @property
    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        return self.environment == Environment.TESTING
