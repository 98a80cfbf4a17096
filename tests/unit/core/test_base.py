"""Tests for core data classes and exceptions."""

import dataclasses

import pytest

from council_transcript.core import (
    AgendaError,
    AgendaItem,
    AlignmentError,
    AlignmentFailure,
    AlignmentShortfall,
    CaptionError,
    ConfigError,
    Cue,
    FormatError,
    IndexedWindow,
    OutputError,
    PipelineError,
    Segment,
    SpeakerWindow,
    TranscriptError,
)


class TestDataClasses:
    def test_cue_duration(self):
        assert Cue(1.5, 4.0, "x").duration == pytest.approx(2.5)

    def test_cue_is_immutable(self):
        cue = Cue(0, 1, "x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            cue.text = "y"

    def test_indexed_window_delegates(self):
        entry = IndexedWindow(SpeakerWindow(10, 20, "Anna"), "2")
        assert (entry.start_sec, entry.end_sec, entry.speaker_name) == (10, 20, "Anna")
        assert entry.agenda_item_id == "2"

    def test_agenda_item_defaults_to_no_speakers(self):
        assert AgendaItem("1", "Opening", 1).speakers == ()

    def test_segment_to_dict(self):
        segment = Segment(
            segment_id="001",
            speaker_name=None,
            transcript_text="hallo",
            video_seconds=3,
            timestamp_start="00:00:03",
            timestamp_end="00:00:04",
            duration_seconds=1,
            word_count=1,
            char_count=5,
        )
        data = segment.to_dict()
        assert data["segment_type"] == "spoken"
        assert data["agenda_item"] is None
        assert data["speaker_name"] is None


class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [ConfigError, FormatError, CaptionError, AgendaError, AlignmentError, OutputError, PipelineError],
    )
    def test_hierarchy(self, exc_class):
        assert issubclass(exc_class, TranscriptError)

    def test_alignment_failure_carries_errors(self):
        exc = AlignmentFailure(["No segments generated"])
        assert isinstance(exc, AlignmentError)
        assert exc.errors == ["No segments generated"]
        assert str(exc) == "Alignment validation failed: No segments generated"

    def test_alignment_shortfall_carries_warnings(self):
        exc = AlignmentShortfall(["a", "b"])
        assert exc.warnings == ["a", "b"]
        assert str(exc) == "Alignment coverage too low: a, b"
