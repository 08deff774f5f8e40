"""
Logging infrastructure for localvcs.

Provides structured logging and decorators for tracking engine operations.
"""

from .logger import (
    VcsLogger,
    get_vcs_logger,
    initialize_logging,
    initialize_from_config,
    get_logger_instance,
    log_vcs_operation,
)

from .decorators import (
    track_vcs_operation,
    performance_monitor,
)

__all__ = [
    # Logger
    "VcsLogger",
    "get_vcs_logger",
    "initialize_logging",
    "initialize_from_config",
    "get_logger_instance",
    "log_vcs_operation",
    # Decorators
    "track_vcs_operation",
    "performance_monitor",
]
