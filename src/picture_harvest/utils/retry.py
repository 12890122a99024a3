# ABOUTME: Retry policy for store requests using the tenacity library
# ABOUTME: Defaults to a single attempt so store failures stay fatal unless retries are opted into

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from picture_harvest.utils.logging import get_logger

logger = get_logger(__name__)


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Retrying store request",
        attempt=retry_state.attempt_number,
        error=str(exc),
        error_type=type(exc).__name__,
    )


def store_retry(
    attempts: int = 1,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    min_wait: float = 0.5,
    max_wait: float = 10.0,
    multiplier: float = 2.0,
) -> Retrying:
    """Build a tenacity policy for one store request.

    Args:
        attempts: Total attempts, 1 disables retrying
        retry_on: Exception types that trigger another attempt
        min_wait: Minimum backoff in seconds
        max_wait: Maximum backoff in seconds
        multiplier: Exponential backoff multiplier

    Returns:
        A Retrying instance that re-raises the last error once attempts run out
    """
    return Retrying(
        stop=stop_after_attempt(max(1, attempts)),
        wait=wait_exponential(multiplier=multiplier, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(retry_on),
        before_sleep=_log_retry,
        reraise=True,
    )
