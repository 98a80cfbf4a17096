"""Timing helpers for pipeline stages."""

import functools
import time
import logging
from contextlib import contextmanager
from typing import Callable, Iterator, TypeVar, ParamSpec

P = ParamSpec("P")
R = TypeVar("R")

logger = logging.getLogger(__name__)


def timed(func: Callable[P, R]) -> Callable[P, R]:
    """Log execution time of a function."""
    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed = time.perf_counter() - start
            logger.info(f"{func.__qualname__} completed in {elapsed:.2f}s")
    return wrapper


@contextmanager
def stage(name: str, log: logging.Logger | None = None) -> Iterator[dict]:
    """Time a named block; the yielded dict receives `elapsed_ms` on exit.

    Usage:
        with stage("parse captions") as timing:
            ...
        timing["elapsed_ms"]
    """
    log = log or logger
    timing: dict = {"name": name}
    start = time.perf_counter()
    log.debug(f"{name}: started")
    try:
        yield timing
    except Exception as e:
        log.error(f"{name}: failed: {e}")
        raise
    finally:
        timing["elapsed_ms"] = (time.perf_counter() - start) * 1000
    log.debug(f"{name}: done in {timing['elapsed_ms']:.1f}ms")
