"""Retry decorator for async Sub-Registry requests.

Transient failures (transport errors and 429/502/503/504 responses) are
retried with jittered exponential backoff. Any other HTTP status is
raised immediately so the caller can map it to a domain error.
"""

import asyncio
import logging
import random
from functools import wraps
from typing import Callable, Optional, Tuple, Type, TypeVar

import httpx

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE_STATUS_CODES = (429, 502, 503, 504)


def async_retry(
    max_attempts: int = 3,
    delay: float = 1.0,
    backoff: float = 2.0,
    exceptions: Tuple[Type[Exception], ...] = (httpx.HTTPError,),
    status_codes: Optional[Tuple[int, ...]] = RETRYABLE_STATUS_CODES,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Create a retry decorator for async functions.

    :param max_attempts: Maximum number of attempts (including the first)
    :type max_attempts: int
    :param delay: Initial delay between retries in seconds
    :type delay: float
    :param backoff: Multiplier for delay on each retry attempt
    :type backoff: float
    :param exceptions: Exception types that should trigger retries
    :type exceptions: Tuple[Type[Exception], ...]
    :param status_codes: HTTP status codes that should trigger retries
                         (only applies to ``httpx.HTTPStatusError``)
    :type status_codes: Optional[Tuple[int, ...]]
    :return: Decorator function that can be applied to async functions
    :rtype: Callable[[Callable[..., T]], Callable[..., T]]
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            current_delay = delay
            for attempt in range(max_attempts):
                try:
                    return await func(*args, **kwargs)
                except exceptions as e:
                    if isinstance(e, httpx.HTTPStatusError):
                        if status_codes and e.response.status_code not in status_codes:
                            raise
                    if attempt >= max_attempts - 1:
                        raise
                    logger.debug(
                        "Retrying %s after %s (attempt %d/%d)",
                        func.__name__,
                        type(e).__name__,
                        attempt + 1,
                        max_attempts,
                    )
                    jitter = random.uniform(0.8, 1.2)
                    await asyncio.sleep(current_delay * jitter)
                    current_delay *= backoff
            raise RuntimeError("async_retry requires max_attempts >= 1")

        return wrapper

    return decorator
