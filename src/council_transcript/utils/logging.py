"""Structured logging configuration."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_FORMATS = {
    "simple": "%(levelname)s | %(name)s | %(message)s",
    "detailed": "%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s",
}

_configured = False


def setup_logging(
    level: LogLevel = "INFO",
    format_style: Literal["simple", "detailed"] = "simple",
    log_file: Path | str | None = None,
) -> None:
    """Configure logging for the application.

    Args:
        level: Log level
        format_style: 'simple' for interactive runs, 'detailed' for batch jobs
        log_file: Optional rotating log file written next to stdout
    """
    global _configured

    if _configured:
        return

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(log_path, maxBytes=2_000_000, backupCount=3))

    logging.basicConfig(
        level=getattr(logging, level),
        format=_FORMATS[format_style],
        handlers=handlers,
    )

    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance (typically for __name__)."""
    return logging.getLogger(name)
