"""Performance monitoring decorator for underwriting operations."""

import time
from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from beartype import beartype

from .config import get_settings
from .logging_utils import get_logger

P = ParamSpec("P")
T = TypeVar("T")

logger = get_logger(__name__)


@beartype
def performance_monitor(
    operation_name: str,
    max_duration_ms: float | None = None,
    log_slow_operations: bool = True,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator timing a synchronous operation and logging its duration.

    Args:
        operation_name: Name of the operation for monitoring
        max_duration_ms: Alert threshold in milliseconds; defaults to the
            configured ``slow_evaluation_ms``
        log_slow_operations: Whether to log slow operations as warnings
    """

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception:
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.exception(
                    "Operation %s failed after %.3fms", operation_name, duration_ms
                )
                raise

            duration_ms = (time.perf_counter() - start_time) * 1000
            threshold = (
                max_duration_ms
                if max_duration_ms is not None
                else get_settings().slow_evaluation_ms
            )
            if log_slow_operations and duration_ms > threshold:
                logger.warning(
                    "Slow operation %s: %.3fms (threshold %.1fms)",
                    operation_name,
                    duration_ms,
                    threshold,
                )
            else:
                logger.debug(
                    "Operation %s completed in %.3fms", operation_name, duration_ms
                )
            return result

        return wrapper

    return decorator
