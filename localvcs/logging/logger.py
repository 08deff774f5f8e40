"""
Logging infrastructure for localvcs.

Provides structured logging with:
- Component-specific loggers
- Console and rotating file sinks
- Structured records for engine operations
"""

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from loguru import logger


class VcsLogger:
    """
    Logger setup for localvcs with component-specific features.

    Features:
    - Structured logging with context
    - Log rotation and retention
    - Separate sink for version control operations
    """

    def __init__(
        self,
        log_dir: Optional[Path] = None,
        rotation: str = "100 MB",
        retention: str = "1 month",
        level: str = "INFO",
        format_string: Optional[str] = None,
        enable_file_logging: bool = True,
        enable_console_logging: bool = True,
    ):
        """
        Initialize the logger.

        Args:
            log_dir: Directory for log files
            rotation: When to rotate log files
            retention: How long to keep old logs
            level: Default log level
            format_string: Custom format string
            enable_file_logging: Whether to log to files
            enable_console_logging: Whether to log to console
        """
        self.log_dir = log_dir or Path("logs")
        self.rotation = rotation
        self.retention = retention
        self.level = level

        self.format_string = format_string or (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[component]}</cyan> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )

        logger.remove()
        logger.configure(extra={"component": "system"})

        if enable_console_logging:
            logger.add(
                sys.stderr,
                format=self.format_string,
                level=level,
                colorize=True,
            )

        if enable_file_logging:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self._add_file_handlers()

        self.logger = logger.bind(component="system")

    def _add_file_handlers(self) -> None:
        """Add file handlers for the main log, engine operations and errors."""
        logger.add(
            self.log_dir / "localvcs.log",
            format=self.format_string,
            level=self.level,
            rotation=self.rotation,
            retention=self.retention,
            compression="zip",
        )

        # Engine operations (always DEBUG for full capture)
        logger.add(
            self.log_dir / "operations.log",
            format=self.format_string,
            level="DEBUG",
            rotation=self.rotation,
            retention=self.retention,
            compression="zip",
            filter=lambda record: record["extra"].get("component") == "engine",
        )

        logger.add(
            self.log_dir / "errors.log",
            format=self.format_string,
            level="ERROR",
            rotation=self.rotation,
            retention=self.retention,
            compression="zip",
        )

    def get_logger(self, component: str) -> Any:
        """
        Get a logger bound to a specific component.

        Args:
            component: Component name (e.g., "engine", "storage", "cli")
        """
        return logger.bind(component=component)


def get_vcs_logger(component: str = "system") -> Any:
    """
    Get a component-specific logger.

    Example:
        >>> log = get_vcs_logger("engine")
        >>> log.info("Committed snapshot", files=3)
    """
    return logger.bind(component=component)


def log_vcs_operation(logger_instance: Any, operation: str, **kwargs: Any) -> None:
    """
    Log a version control operation.

    Args:
        logger_instance: Logger to use
        operation: Operation type (e.g., "commit", "revert", "stage")
        **kwargs: Additional context
    """
    logger_instance.debug(
        f"VCS operation: {operation}",
        operation=operation,
        timestamp=datetime.now(timezone.utc).isoformat(),
        **kwargs,
    )


# Global logger instance
_vcs_logger: Optional[VcsLogger] = None


def initialize_logging(
    log_dir: Optional[Path] = None, level: str = "INFO", **kwargs: Any
) -> VcsLogger:
    """
    Initialize the logging system.

    This should be called once at application startup.

    Args:
        log_dir: Directory for log files
        level: Default log level
        **kwargs: Additional configuration for VcsLogger
    """
    global _vcs_logger
    _vcs_logger = VcsLogger(log_dir=log_dir, level=level, **kwargs)
    return _vcs_logger


def initialize_from_config(log_config: Any) -> VcsLogger:
    """Initialize logging from a ``LogConfig``."""
    return initialize_logging(
        log_dir=Path(log_config.log_dir),
        level=log_config.level,
        rotation=log_config.rotation,
        retention=log_config.retention,
        enable_file_logging=log_config.enable_file_logging,
        enable_console_logging=log_config.enable_console_logging,
    )


def get_logger_instance() -> Optional[VcsLogger]:
    """Get the global logger instance."""
    return _vcs_logger
