# ABOUTME: Structured logger helpers bound to harvest runs and their steps
# ABOUTME: Provides get_logger, a per-scan run context, and a step timing decorator

import functools
import time
import uuid
from collections.abc import Callable
from typing import Any, TypeVar

import structlog

F = TypeVar("F", bound=Callable[..., Any])


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, named after the package when no name is given."""
    return structlog.get_logger(name or "picture_harvest")


def new_run_id() -> str:
    """Short id tying together every log line of one scan."""
    return uuid.uuid4().hex[:8]


def log_step(step: str) -> Callable[[F], F]:
    """Decorator logging how long a harvest step took, and how it failed if it did.

    Args:
        step: Step name written as the ``step`` field
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger(func.__module__).bind(step=step)
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    "Step failed",
                    elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise
            logger.debug("Step done", elapsed_ms=round((time.perf_counter() - started) * 1000, 1))
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


class ScanContext:
    """Binds run id and table to a logger for the lifetime of one scan."""

    def __init__(self, table_name: str, **context):
        self.table_name = table_name
        self.run_id = new_run_id()
        self.logger = get_logger("picture_harvest.scan").bind(run_id=self.run_id, table_name=table_name, **context)
        self._started = 0.0

    def __enter__(self) -> structlog.stdlib.BoundLogger:
        self._started = time.perf_counter()
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = round(time.perf_counter() - self._started, 3)
        if exc_type is not None:
            self.logger.error("Scan aborted", error=str(exc_val), error_type=exc_type.__name__, elapsed_seconds=elapsed)
        else:
            self.logger.debug("Scan context closed", elapsed_seconds=elapsed)


def with_scan_context(table_name: str, **context) -> ScanContext:
    """Create the logging context for one scan of a table."""
    return ScanContext(table_name, **context)
