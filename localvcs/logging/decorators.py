"""
Decorators for automatic logging of version control operations.

These decorators enable traceability without cluttering engine logic.
"""

import functools
import time
from typing import Any, Callable

from .logger import get_vcs_logger, log_vcs_operation


def track_vcs_operation(operation_type: str) -> Callable:
    """
    Decorator to track engine operations.

    Logs start, completion and failure with the call's arguments.

    Args:
        operation_type: Type of operation (e.g., "commit", "revert")

    Example:
        >>> @track_vcs_operation("commit")
        ... def commit(self) -> bool:
        ...     ...
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            log = get_vcs_logger("engine")

            operation_id = time.time()
            log_vcs_operation(
                log,
                operation=operation_type,
                operation_id=operation_id,
                function=func.__name__,
                arguments=[str(a)[:100] for a in args[1:]],
            )

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                log_vcs_operation(
                    log,
                    operation=f"{operation_type}_error",
                    operation_id=operation_id,
                    function=func.__name__,
                    error=str(e),
                    error_type=type(e).__name__,
                    success=False,
                )
                raise

            log_vcs_operation(
                log,
                operation=f"{operation_type}_complete",
                operation_id=operation_id,
                function=func.__name__,
                success=True,
            )
            return result

        return wrapper

    return decorator


def performance_monitor(threshold_ms: float = 1000.0) -> Callable:
    """
    Decorator to monitor function performance.

    Logs warning if execution exceeds threshold.

    Args:
        threshold_ms: Warning threshold in milliseconds
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            log = get_vcs_logger("system")
            start_time = time.perf_counter()

            result = func(*args, **kwargs)
            elapsed_ms = (time.perf_counter() - start_time) * 1000

            if elapsed_ms > threshold_ms:
                log.warning(
                    f"Performance threshold exceeded: {func.__name__}",
                    function=func.__name__,
                    elapsed_ms=elapsed_ms,
                    threshold_ms=threshold_ms,
                )
            return result

        return wrapper

    return decorator
