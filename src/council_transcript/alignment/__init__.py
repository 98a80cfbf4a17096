"""Caption-to-speaker alignment module."""

from council_transcript.alignment.timing import (
    DEFAULT_GRACE_WINDOW,
    parse_time_literal,
    seconds_to_timestamp,
    round_half_up,
    in_window,
    best_window,
)
from council_transcript.alignment.index import flatten_windows
from council_transcript.alignment.aligner import (
    TranscriptAligner,
    AlignmentStats,
    SpeakerStats,
    AgendaCoverage,
    count_words,
)
from council_transcript.alignment.validation import ValidationResult, validate_alignment

__all__ = [
    "DEFAULT_GRACE_WINDOW",
    "parse_time_literal",
    "seconds_to_timestamp",
    "round_half_up",
    "in_window",
    "best_window",
    "flatten_windows",
    "TranscriptAligner",
    "AlignmentStats",
    "SpeakerStats",
    "AgendaCoverage",
    "count_words",
    "ValidationResult",
    "validate_alignment",
]
