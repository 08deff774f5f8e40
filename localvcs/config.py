"""
Configuration management for localvcs.

This module provides centralized configuration for:
- Snapshot storage location
- Logging settings
"""

import os
from pathlib import Path
from typing import Literal, cast

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables from .env file
load_dotenv()

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class StorageConfig(BaseModel):
    """Configuration for the snapshot backing store."""

    store_path: str = Field(
        default=".localvcs/snapshot.json",
        description="File holding the committed snapshot",
    )
    indent: int = Field(
        default=2, ge=0, le=8, description="JSON indentation of the store file"
    )

    @property
    def path(self) -> Path:
        """Get absolute path to the store file."""
        return Path(self.store_path).resolve()


class LogConfig(BaseModel):
    """Configuration for logging system."""

    level: LogLevel = Field(default="INFO", description="Logging level")
    rotation: str = Field(default="100 MB", description="Log file rotation size")
    retention: str = Field(default="1 month", description="Log file retention period")
    log_dir: str = Field(default="logs", description="Directory for log files")
    enable_file_logging: bool = Field(
        default=False, description="Whether to enable file logging"
    )
    enable_console_logging: bool = Field(
        default=True, description="Whether to enable console logging"
    )


class Config(BaseModel):
    """Main configuration object for localvcs."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LogConfig = Field(default_factory=LogConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables."""
        return cls(
            storage=StorageConfig(
                store_path=os.getenv("LOCALVCS_STORE_PATH", ".localvcs/snapshot.json"),
                indent=int(os.getenv("LOCALVCS_STORE_INDENT", "2")),
            ),
            logging=LogConfig(
                level=cast(LogLevel, os.getenv("LOCALVCS_LOG_LEVEL", "INFO")),
                log_dir=os.getenv("LOCALVCS_LOG_DIR", "logs"),
                enable_file_logging=os.getenv("LOCALVCS_LOG_TO_FILE", "false").lower()
                in ("1", "true", "yes"),
            ),
        )


# Global configuration instance
config = Config.from_env()
