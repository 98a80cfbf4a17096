"""Tests for transcript document building."""

import json

import pytest

from council_transcript.config import OutputConfig
from council_transcript.core import MeetingInfo, OutputError
from council_transcript.output import TranscriptBuilder


@pytest.fixture
def builder():
    return TranscriptBuilder()


@pytest.fixture
def segments(make_segment):
    return [
        make_segment(speaker_name="Jules Bijl", agenda_item="Opening", video_seconds=83,
                     duration_seconds=2, transcript_text="Dames en heren"),
        make_segment(speaker_name=None, agenda_item="Opening", video_seconds=90,
                     duration_seconds=4, transcript_text="welkom"),
    ]


class TestTranscriptDocument:
    def test_metadata_and_totals(self, builder, meeting, segments):
        document = builder.build_transcript_document(meeting, segments, source_file="meeting.vtt")

        assert document.format_version == "1.0"
        assert document.video.title == meeting.title
        assert document.video.filename == f"{meeting.meeting_id}.json"
        assert document.video.duration == 2 * 3600 + 52 * 60 + 3
        assert document.video.record_type == "Official Council Meeting"
        assert document.video.total_words == 4
        assert document.video.total_segments == 2
        assert document.import_metadata.source_file == "meeting.vtt"
        assert [s.segment_id for s in document.segments] == [s.segment_id for s in segments]
        assert document.segments[1].speaker_name is None

    def test_invalid_segment_raises(self, builder, meeting, make_segment):
        broken = make_segment(timestamp_start="1:2")
        with pytest.raises(OutputError):
            builder.build_transcript_document(meeting, [broken])

    def test_unparsable_duration_is_dropped(self, builder):
        meeting = MeetingInfo(meeting_id="m1", title="Raad", duration="lang")
        document = builder.build_transcript_document(meeting, [])
        assert document.video.duration is None

    def test_future_meeting(self, builder, meeting):
        document = builder.build_future_meeting_document(meeting)
        assert document.segments == []
        assert document.video.record_type == "Scheduled Council Meeting"
        assert document.video.total_segments == 0
        assert "Future meeting" in document.import_metadata.conversion_notes

    def test_dataset_labels_from_config(self, meeting):
        builder = TranscriptBuilder(OutputConfig(dataset="delft_raad", source="Gemeente Delft"))
        document = builder.build_future_meeting_document(meeting)
        assert (document.video.dataset, document.video.source) == ("delft_raad", "Gemeente Delft")


class TestSimplifiedDocument:
    def test_shape(self, builder, meeting, agenda_items, segments):
        document = builder.build_simplified_document(meeting, agenda_items, segments)

        assert document.meeting_id == meeting.meeting_id
        assert document.player_url == f"https://channel.royalcast.com/webcast/{meeting.meeting_id}"
        assert document.language == "nl"
        assert document.video_available
        assert document.agenda[0].speakers[0].speaker_name == "Jules Bijl"
        assert document.agenda[0].speakers[0].start_time == 76
        assert (document.transcript[0].start, document.transcript[0].end) == (83, 85)
        assert document.transcript[1].speaker is None


class TestSerialization:
    def test_optimize_drops_nulls_and_empty_strings(self, builder, meeting, segments):
        meeting.description = ""
        document = builder.build_transcript_document(meeting, segments)
        data = builder.optimize(document)

        assert "description" not in data["video"]
        assert "url" not in data["video"]
        assert "speaker_name" not in data["segments"][1]
        assert data["segments"][0]["speaker_name"] == "Jules Bijl"

    def test_save_document(self, builder, meeting, segments, tmp_path):
        document = builder.build_transcript_document(meeting, segments)
        path = builder.save_document(builder.optimize(document), tmp_path / "out" / "meeting.json")

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["video"]["total_segments"] == 2
        assert builder.estimate_file_size(builder.optimize(document)) + 1 == path.stat().st_size

    def test_to_json_keeps_unicode(self, builder):
        assert "Café" in builder.to_json({"name": "Café"})


class TestProcessingSummary:
    def test_statistics(self, builder, meeting, agenda_items, segments):
        summary = builder.create_processing_summary(meeting, agenda_items, segments, 12.5)

        stats = summary.statistics
        assert stats.total_segments == 2
        assert stats.total_words == 4
        assert stats.total_duration_seconds == 94
        assert stats.speaker_alignment_rate == 50
        assert stats.agenda_alignment_rate == 100
        assert stats.unique_speakers == 1
        assert stats.agenda_items_covered == 1
        assert summary.quality_metrics.alignment_quality == "poor"
        assert summary.quality_metrics.has_agenda_data

    def test_empty(self, builder, meeting):
        summary = builder.create_processing_summary(meeting, [], [], 0.0)
        assert summary.statistics.speaker_alignment_rate == 0
        assert not summary.quality_metrics.has_speaker_data
