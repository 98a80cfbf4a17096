"""WebVTT caption tokenizer and cue-list helpers."""

import html
import re
from dataclasses import dataclass, field
from typing import Sequence

from council_transcript.alignment.timing import parse_time_literal
from council_transcript.core import Cue, FormatError
from council_transcript.utils import get_logger

logger = get_logger(__name__)

SIGNATURE = "WEBVTT"
INTERVAL_DELIMITER = "-->"
# Blocks that carry no cues and run until the next blank line.
_SKIPPED_BLOCK = re.compile(r"^(?:NOTE|STYLE|REGION)(?:\s|$)")

_TAG = re.compile(r"</?[^>]+>")
_WHITESPACE = re.compile(r"\s+")


@dataclass
class ParsedCaptions:
    """Cues in ascending start order plus every per-block problem encountered."""
    cues: list[Cue] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)


@dataclass
class CaptionStats:
    total_cues: int = 0
    total_duration: float = 0.0
    average_cue_duration: float = 0.0
    total_words: int = 0
    average_words_per_cue: float = 0.0
    first_cue_start: float = 0.0
    last_cue_end: float = 0.0


def clean_cue_text(text: str) -> str:
    """Strip inline markup, decode entities and collapse whitespace."""
    text = _TAG.sub("", text)
    text = html.unescape(text)
    return _WHITESPACE.sub(" ", text).strip()


def parse_interval(line: str) -> tuple[float, float]:
    """Parse `start --> end [settings]` into seconds.

    Raises:
        FormatError: If the delimiter or either timestamp is malformed
    """
    parts = line.split(INTERVAL_DELIMITER)
    if len(parts) != 2:
        raise FormatError(f"Invalid timing line: {line!r}")

    start_text = parts[0].strip()
    end_fields = parts[1].split()
    if not start_text or not end_fields:
        raise FormatError(f"Invalid timing line: {line!r}")

    # Anything after the end timestamp is cue settings (align:, position:, ...).
    return parse_time_literal(start_text), parse_time_literal(end_fields[0])


class CaptionParser:
    """Turn a WebVTT payload into an ordered list of cues.

    Malformed interval lines skip their block and are reported in
    `ParsedCaptions.issues`; they never abort the parse.

    Args:
        sort_cues: Stable-sort cues by start when the payload is out of order
    """

    def __init__(self, sort_cues: bool = True):
        self.sort_cues = sort_cues

    def parse(self, payload: str) -> ParsedCaptions:
        result = ParsedCaptions()
        lines = [line.strip() for line in payload.lstrip("\ufeff").splitlines()]

        i = 0
        while i < len(lines) and not lines[i].startswith(SIGNATURE):
            i += 1
        if i >= len(lines):
            result.issues.append(f"Missing {SIGNATURE} header")
            logger.warning(f"Caption payload has no {SIGNATURE} header")
            return result
        i += 1

        # Header metadata lines directly after the signature belong to the header.
        while i < len(lines) and lines[i] and INTERVAL_DELIMITER not in lines[i]:
            i += 1

        while i < len(lines):
            while i < len(lines) and not lines[i]:
                i += 1
            if i >= len(lines):
                break

            if _SKIPPED_BLOCK.match(lines[i]) and INTERVAL_DELIMITER not in lines[i]:
                i = self._skip_block(lines, i)
                continue

            if INTERVAL_DELIMITER not in lines[i]:
                i += 1  # cue identifier
                if i >= len(lines) or not lines[i]:
                    continue

            timing_line = lines[i]
            i += 1

            body = []
            while i < len(lines) and lines[i] and INTERVAL_DELIMITER not in lines[i]:
                body.append(lines[i])
                i += 1

            try:
                start, end = parse_interval(timing_line)
            except FormatError as e:
                logger.warning(f"Skipping caption block: {e}")
                result.issues.append(str(e))
                continue

            if end < start:
                message = f"Inverted cue dropped: {timing_line!r}"
                logger.warning(message)
                result.issues.append(message)
                continue

            text = clean_cue_text(" ".join(body))
            if text:
                result.cues.append(Cue(start=start, end=end, text=text))

        if any(a.start > b.start for a, b in zip(result.cues, result.cues[1:])):
            if self.sort_cues:
                result.cues.sort(key=lambda cue: cue.start)
                result.issues.append("Cues were out of order and have been sorted by start time")
            else:
                result.issues.append("Cues are out of order")
            logger.warning(result.issues[-1])

        logger.info(f"Parsed {len(result.cues)} caption cues ({len(result.issues)} issues)")
        return result

    @staticmethod
    def _skip_block(lines: list[str], i: int) -> int:
        while i < len(lines) and lines[i]:
            i += 1
        return i

    @staticmethod
    def validate(payload: str) -> tuple[bool, list[str]]:
        """Cheap structural check of a payload without building cues."""
        errors = []

        if not payload.lstrip("\ufeff").startswith(SIGNATURE):
            errors.append(f"Missing {SIGNATURE} header")

        cue_count = 0
        valid_cues = 0
        for number, raw in enumerate(payload.splitlines(), 1):
            line = raw.strip()
            if INTERVAL_DELIMITER not in line:
                continue
            cue_count += 1
            try:
                parse_interval(line)
                valid_cues += 1
            except FormatError:
                errors.append(f"Invalid timing format at line {number}: {line}")

        if cue_count == 0:
            errors.append("No cues found in caption payload")
        elif valid_cues == 0:
            errors.append("No valid cues found in caption payload")

        return not errors, errors

    @staticmethod
    def stats(cues: Sequence[Cue]) -> CaptionStats:
        if not cues:
            return CaptionStats()

        total_words = sum(len(cue.text.split()) for cue in cues)
        first_start = min(cue.start for cue in cues)
        last_end = max(cue.end for cue in cues)

        return CaptionStats(
            total_cues=len(cues),
            total_duration=last_end - first_start,
            average_cue_duration=sum(cue.duration for cue in cues) / len(cues),
            total_words=total_words,
            average_words_per_cue=total_words / len(cues),
            first_cue_start=first_start,
            last_cue_end=last_end,
        )


def filter_cues_by_time_range(cues: Sequence[Cue], start: float, end: float) -> list[Cue]:
    """Cues that start inside, end inside, or span [start, end]."""
    return [
        cue for cue in cues
        if (start <= cue.start < end)
        or (start < cue.end <= end)
        or (cue.start < start and cue.end > end)
    ]


def merge_cues(cues: Sequence[Cue], max_gap_seconds: float = 0.5) -> list[Cue]:
    """Join overlapping cues and cues separated by at most `max_gap_seconds`."""
    if not cues:
        return []

    ordered = sorted(cues, key=lambda cue: cue.start)
    merged = []
    start, end, text = ordered[0].start, ordered[0].end, ordered[0].text

    for cue in ordered[1:]:
        if cue.start <= end + max_gap_seconds:
            end = max(end, cue.end)
            text = f"{text} {cue.text}"
        else:
            merged.append(Cue(start=start, end=end, text=text))
            start, end, text = cue.start, cue.end, cue.text

    merged.append(Cue(start=start, end=end, text=text))
    logger.debug(f"Merged {len(cues)} cues into {len(merged)}")
    return merged
