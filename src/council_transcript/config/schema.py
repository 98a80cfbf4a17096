"""Pydantic configuration schemas with validation."""

from typing import Literal
from pydantic import BaseModel, Field, model_validator


class CaptionConfig(BaseModel):
    """Caption tokenizer configuration."""
    sort_cues: bool = True  # stable-sort out-of-order payloads at the parser boundary
    premerge_cues: bool = False  # join near-adjacent cues before alignment
    premerge_gap_seconds: float = Field(default=0.5, ge=0.0)


class AlignmentConfig(BaseModel):
    """Cue-to-speaker alignment configuration."""
    grace_window_seconds: float = Field(default=0.35, ge=0.0)
    fill_speaker_gaps: bool = True
    merge_short_segments: bool = True
    min_segment_seconds: int = Field(default=2, ge=0)
    max_merge_gap_seconds: int = Field(default=5, ge=0)


class ValidationConfig(BaseModel):
    """Thresholds for post-alignment validation."""
    min_speaker_rate: float = Field(default=0.5, ge=0.0, le=1.0)
    min_agenda_rate: float = Field(default=0.3, ge=0.0, le=1.0)
    fail_on_warnings: bool = False


class OutputConfig(BaseModel):
    """Transcript document configuration."""
    format: Literal["verbose", "simplified"] = "verbose"
    optimize: bool = True  # drop null fields from the verbose document
    output_dir: str = "./output"
    format_version: str = "1.0"
    source: str = "Gemeente Lansingerland"
    dataset: str = "lansingerland_gemeenteraad"
    meeting_format: str = "Gemeenteraadsvergadering"
    importer: str = "council_transcript"
    language: str = "nl"
    player_url_template: str = "https://channel.royalcast.com/webcast/{meeting_id}"


class SourceConfig(BaseModel):
    """Caption download configuration."""
    timeout_seconds: float = Field(default=30.0, gt=0.0)
    max_attempts: int = Field(default=3, ge=1, le=10)
    max_retry_delay_seconds: float = Field(default=60.0, gt=0.0)
    retry_min_wait_seconds: float = Field(default=1.0, ge=0.0)
    user_agent: str = "council-transcript/0.1"
    encoding: str = "utf-8"


class TranscriptConfig(BaseModel):
    """Root configuration for the transcript alignment system."""
    captions: CaptionConfig = Field(default_factory=CaptionConfig)
    alignment: AlignmentConfig = Field(default_factory=AlignmentConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)

    # Global settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["simple", "detailed"] = "simple"
    log_file: str | None = None

    @model_validator(mode="after")
    def _check_player_url(self) -> "TranscriptConfig":
        if "{meeting_id}" not in self.output.player_url_template:
            raise ValueError("output.player_url_template must contain '{meeting_id}'")
        return self
