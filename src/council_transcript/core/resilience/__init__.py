"""Resilience patterns for network reads."""

from council_transcript.core.resilience.retry import (
    retry_network,
    NETWORK_EXCEPTIONS,
    RetryError,
)

__all__ = [
    "retry_network",
    "NETWORK_EXCEPTIONS",
    "RetryError",
]
