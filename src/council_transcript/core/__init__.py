"""Core components: data classes, exceptions."""

from council_transcript.core.base import (
    Cue,
    SpeakerWindow,
    AgendaItem,
    IndexedWindow,
    Segment,
    MeetingInfo,
)
from council_transcript.core.exceptions import (
    TranscriptError,
    ConfigError,
    FormatError,
    CaptionError,
    AgendaError,
    AlignmentError,
    AlignmentFailure,
    AlignmentShortfall,
    OutputError,
    PipelineError,
)

__all__ = [
    # Data classes
    "Cue",
    "SpeakerWindow",
    "AgendaItem",
    "IndexedWindow",
    "Segment",
    "MeetingInfo",
    # Exceptions
    "TranscriptError",
    "ConfigError",
    "FormatError",
    "CaptionError",
    "AgendaError",
    "AlignmentError",
    "AlignmentFailure",
    "AlignmentShortfall",
    "OutputError",
    "PipelineError",
]
