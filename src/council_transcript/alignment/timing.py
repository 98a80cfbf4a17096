"""Time literal parsing and tolerance-padded interval matching."""

import math
import re
from typing import Protocol, Sequence, TypeVar

from council_transcript.core.exceptions import FormatError

DEFAULT_GRACE_WINDOW = 0.35

# HH:MM:SS / H:MM:SS with optional fraction, or M:SS / MM:SS with optional fraction.
_TIME_LITERAL = re.compile(
    r"""^(?:
        (?P<hours>\d{1,2}):(?P<minutes>\d{2})
        |
        (?P<short_minutes>\d{1,2})
    ):(?P<seconds>\d{2})(?:[.,](?P<fraction>\d{1,3}))?$""",
    re.VERBOSE,
)


class TimedWindow(Protocol):
    start_sec: float
    end_sec: float


W = TypeVar("W", bound=TimedWindow)


def parse_time_literal(text: str) -> float:
    """Convert a time literal to seconds since meeting start.

    Accepts `MM:SS`, `HH:MM:SS` and the caption forms `H:MM:SS.mmm`,
    `HH:MM:SS.mmm`, `MM:SS.mmm` with either `.` or `,` as decimal separator.
    Fractions shorter than three digits are right-padded (`.5` is 500 ms).

    Raises:
        FormatError: If the literal matches none of the accepted shapes
    """
    match = _TIME_LITERAL.match(text.strip()) if isinstance(text, str) else None
    if not match:
        raise FormatError(f"Invalid time literal: {text!r}")

    if match.group("hours") is not None:
        hours = int(match.group("hours"))
        minutes = int(match.group("minutes"))
    else:
        hours = 0
        minutes = int(match.group("short_minutes"))
    seconds = int(match.group("seconds"))

    if minutes >= 60 and match.group("hours") is not None:
        raise FormatError(f"Minutes out of range in time literal: {text!r}")
    if seconds >= 60:
        raise FormatError(f"Seconds out of range in time literal: {text!r}")

    fraction = match.group("fraction") or ""
    millis = int(fraction.ljust(3, "0")) if fraction else 0

    return hours * 3600 + minutes * 60 + seconds + millis / 1000


def seconds_to_timestamp(seconds: float) -> str:
    """Format seconds as zero-padded HH:MM:SS, flooring the fractional part."""
    total = max(0, math.floor(seconds))
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def in_window(t: float, start: float, end: float, grace: float = DEFAULT_GRACE_WINDOW) -> bool:
    """True iff `start - grace <= t < end + grace`."""
    return start - grace <= t < end + grace


def best_window(t: float, windows: Sequence[W], grace: float = DEFAULT_GRACE_WINDOW) -> W | None:
    """Pick the window covering `t` whose start is closest to `t`.

    Overlapping windows (corrections, interruptions) can all cover a boundary
    cue; the nearest start wins and ties keep the earlier candidate.
    """
    best: W | None = None
    best_distance = math.inf

    for window in windows:
        if not in_window(t, window.start_sec, window.end_sec, grace):
            continue
        distance = abs(t - window.start_sec)
        if distance < best_distance:
            best = window
            best_distance = distance

    return best
