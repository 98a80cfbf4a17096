"""Transcript document models and builders."""

from council_transcript.output.builder import TranscriptBuilder
from council_transcript.output.schemas import (
    SegmentRecord,
    VideoMetadata,
    ImportMetadata,
    TranscriptDocument,
    SimplifiedDocument,
    ProcessingSummary,
)

__all__ = [
    "TranscriptBuilder",
    "SegmentRecord",
    "VideoMetadata",
    "ImportMetadata",
    "TranscriptDocument",
    "SimplifiedDocument",
    "ProcessingSummary",
]
