"""Utilities: logging, timing."""

from council_transcript.utils.logging import setup_logging, get_logger
from council_transcript.utils.decorators import timed, stage

__all__ = [
    "setup_logging",
    "get_logger",
    "timed",
    "stage",
]
