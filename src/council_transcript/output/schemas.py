"""Pydantic models for the transcript documents."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


# ============================================================================
# Verbose document
# ============================================================================

class SegmentRecord(BaseModel):
    """One transcript segment as serialized. Counts are final, no recomputation."""

    segment_id: str = Field(min_length=1)
    speaker_name: str | None = None
    transcript_text: str = Field(min_length=1)
    video_seconds: int = Field(ge=0)
    timestamp_start: str = Field(pattern=r"^\d{2,}:\d{2}:\d{2}$")
    timestamp_end: str = Field(pattern=r"^\d{2,}:\d{2}:\d{2}$")
    duration_seconds: int
    word_count: int = Field(ge=0)
    char_count: int = Field(ge=0)
    segment_type: str = "spoken"
    agenda_item: str | None = None


class VideoMetadata(BaseModel):
    title: str = Field(min_length=1)
    filename: str = Field(min_length=1)
    date: str | None = None
    duration: int | None = Field(default=None, description="Video length in seconds")
    source: str
    dataset: str
    format: str
    place: str | None = None
    record_type: str
    total_words: int | None = None
    total_segments: int | None = None
    description: str | None = None
    url: str | None = None


class ImportMetadata(BaseModel):
    source: str
    created_at: str
    created_by: str
    source_file: str | None = None
    conversion_notes: str | None = None


class TranscriptDocument(BaseModel):
    """Verbose transcript document: metadata plus full segment records."""

    format_version: str
    import_metadata: ImportMetadata | None = None
    video: VideoMetadata
    segments: list[SegmentRecord] = Field(default_factory=list)


# ============================================================================
# Simplified document
# ============================================================================

class SimplifiedSpeaker(BaseModel):
    start_time: float
    end_time: float
    speaker_name: str


class SimplifiedAgendaItem(BaseModel):
    id: str
    title: str
    order: int
    speakers: list[SimplifiedSpeaker] = Field(default_factory=list)


class SimplifiedSegment(BaseModel):
    start: int
    end: int
    text: str
    speaker: str | None = None
    agenda_item: str | None = None


class SimplifiedDocument(BaseModel):
    """Flat document keyed by meeting, with agenda and transcript lists."""

    meeting_id: str
    date: str | None = None
    title: str
    location: str | None = None
    chairperson: str | None = None
    agenda_url: str | None = None
    player_url: str
    language: str
    video_available: bool
    agenda: list[SimplifiedAgendaItem] = Field(default_factory=list)
    transcript: list[SimplifiedSegment] = Field(default_factory=list)


# ============================================================================
# Processing summary
# ============================================================================

class SummaryStatistics(BaseModel):
    total_segments: int
    total_words: int
    total_duration_seconds: int
    speaker_alignment_rate: int = Field(description="Percentage, 0-100")
    agenda_alignment_rate: int = Field(description="Percentage, 0-100")
    unique_speakers: int
    agenda_items_covered: int


class QualityMetrics(BaseModel):
    has_speaker_data: bool
    has_agenda_data: bool
    alignment_quality: Literal["good", "poor"]


class ProcessingSummary(BaseModel):
    meeting_id: str
    processing_timestamp: str
    processing_time_ms: float
    statistics: SummaryStatistics
    quality_metrics: QualityMetrics
