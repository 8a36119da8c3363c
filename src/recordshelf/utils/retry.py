"""
Retry utilities with linear backoff for downloads and network operations.
"""

import time
from typing import Callable, TypeVar, Optional
from functools import wraps
from ..core.exceptions import DownloadError, NetworkError
from ..core.config import DOWNLOAD_CONFIG
from ..core.logger import get_logger

T = TypeVar('T')

logger = get_logger("retry")


class RetryError(Exception):
    """Exception raised when all retry attempts are exhausted."""

    def __init__(self, message: str, attempts: int):
        super().__init__(message)
        self.attempts = attempts


def backoff_delay(attempt: int, backoff_step: float) -> float:
    """Seconds to wait after the given failed attempt (1-based): attempt * step."""
    return attempt * backoff_step


def retry_with_backoff(
    max_attempts: Optional[int] = None,
    backoff_step: Optional[float] = None,
    exceptions: Optional[tuple] = None,
    sleep: Optional[Callable[[float], None]] = None
):
    """
    Decorator for retrying a function with linear backoff.

    After failed attempt ``n`` the wrapper waits ``n * backoff_step`` seconds,
    so three attempts with a step of 2 wait 2s and then 4s.

    Args:
        max_attempts: Total number of attempts, including the first
        backoff_step: Seconds multiplied by the attempt number
        exceptions: Tuple of exceptions to catch and retry
        sleep: Sleep function (defaults to time.sleep)

    Returns:
        Decorated function
    """
    max_attempts = max_attempts or DOWNLOAD_CONFIG["MAX_ATTEMPTS"]
    backoff_step = DOWNLOAD_CONFIG["BACKOFF_STEP"] if backoff_step is None else backoff_step
    exceptions = exceptions or (DownloadError, NetworkError, ConnectionError, TimeoutError, OSError)

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            last_exception = None

            for attempt in range(1, max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    last_exception = e
                    logger.debug(f"Attempt {attempt}/{max_attempts} of {func.__name__} failed: {e}")

                    if attempt == max_attempts:
                        break

                    delay = backoff_delay(attempt, backoff_step)
                    logger.info(f"Retrying in {delay:g} seconds...")
                    (sleep or time.sleep)(delay)

            raise RetryError(
                f"Function {func.__name__} failed after {max_attempts} attempts",
                attempts=max_attempts
            ) from last_exception

        return wrapper
    return decorator
