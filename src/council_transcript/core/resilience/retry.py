"""Retry logic with exponential backoff using tenacity."""

import logging
from typing import Callable, TypeVar, ParamSpec, Type, Tuple

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential_jitter,
    retry_if_exception_type,
    before_log,
    after_log,
    RetryError,
)

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

# Transport-level failures worth another attempt; HTTP status errors are not retried.
NETWORK_EXCEPTIONS: Tuple[Type[Exception], ...] = (
    httpx.TransportError,
    ConnectionError,
    TimeoutError,
)

__all__ = [
    "retry_network",
    "NETWORK_EXCEPTIONS",
    "RetryError",
]


def retry_network(
    max_attempts: int = 3,
    max_delay: float = 60.0,
    min_wait: float = 1.0,
    max_wait: float = 30.0,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Retry decorator for caption downloads.

    Stops after `max_attempts` or `max_delay` seconds, whichever comes first.
    Jitter is bounded by `min_wait`, so `min_wait=0` retries immediately.

    Usage:
        @retry_network(max_attempts=3)
        def fetch():
            ...
    """
    return retry(
        stop=stop_after_attempt(max_attempts) | stop_after_delay(max_delay),
        wait=wait_exponential_jitter(initial=min_wait, max=max_wait, jitter=min_wait),
        retry=retry_if_exception_type(NETWORK_EXCEPTIONS),
        before=before_log(logger, logging.DEBUG),
        after=after_log(logger, logging.WARNING),
        reraise=True,
    )
