"""Build transcript documents from aligned segments."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence

from pydantic import BaseModel, ValidationError

from council_transcript.alignment.timing import parse_time_literal, round_half_up
from council_transcript.config.schema import OutputConfig
from council_transcript.core import AgendaItem, FormatError, MeetingInfo, OutputError, Segment
from council_transcript.output.schemas import (
    ImportMetadata,
    ProcessingSummary,
    QualityMetrics,
    SegmentRecord,
    SimplifiedAgendaItem,
    SimplifiedDocument,
    SimplifiedSegment,
    SimplifiedSpeaker,
    SummaryStatistics,
    TranscriptDocument,
    VideoMetadata,
)
from council_transcript.utils import get_logger

logger = get_logger(__name__)

RECORD_TYPE_HELD = "Official Council Meeting"
RECORD_TYPE_SCHEDULED = "Scheduled Council Meeting"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class TranscriptBuilder:
    """Assemble verbose, simplified and summary documents.

    Args:
        config: Output settings (dataset labels, player URL, language)
    """

    def __init__(self, config: OutputConfig | None = None):
        self.config = config or OutputConfig()

    def build_transcript_document(
        self,
        meeting: MeetingInfo,
        segments: Sequence[Segment],
        source_file: str | None = None,
        conversion_notes: str | None = None,
    ) -> TranscriptDocument:
        """Build the verbose document, with segment totals in the video metadata.

        Raises:
            OutputError: If metadata or any segment fails validation
        """
        try:
            video = self._video_metadata(meeting, RECORD_TYPE_HELD)
            video.total_words = sum(s.word_count for s in segments)
            video.total_segments = len(segments)
            document = TranscriptDocument(
                format_version=self.config.format_version,
                import_metadata=ImportMetadata(
                    source=self.config.importer,
                    created_at=_now(),
                    created_by=self.config.importer,
                    source_file=source_file,
                    conversion_notes=conversion_notes,
                ),
                video=video,
                segments=[SegmentRecord(**s.to_dict()) for s in segments],
            )
        except ValidationError as e:
            logger.error(f"Transcript document validation failed: {e.error_count()} errors")
            raise OutputError(f"Transcript document validation failed: {e}") from e

        logger.info(
            f"Built transcript document for {meeting.meeting_id}: "
            f"{video.total_segments} segments, {video.total_words} words"
        )
        return document

    def build_future_meeting_document(self, meeting: MeetingInfo) -> TranscriptDocument:
        """Document for a meeting that has no video yet."""
        try:
            video = self._video_metadata(meeting, RECORD_TYPE_SCHEDULED)
        except ValidationError as e:
            raise OutputError(f"Meeting metadata validation failed: {e}") from e
        video.total_words = 0
        video.total_segments = 0

        return TranscriptDocument(
            format_version=self.config.format_version,
            import_metadata=ImportMetadata(
                source=self.config.importer,
                created_at=_now(),
                created_by=self.config.importer,
                conversion_notes="Future meeting - no video content available yet",
            ),
            video=video,
            segments=[],
        )

    def build_simplified_document(
        self,
        meeting: MeetingInfo,
        agenda_items: Sequence[AgendaItem],
        segments: Sequence[Segment],
        video_available: bool = True,
    ) -> SimplifiedDocument:
        agenda = [
            SimplifiedAgendaItem(
                id=item.id,
                title=item.title,
                order=item.order,
                speakers=[
                    SimplifiedSpeaker(
                        start_time=w.start_sec, end_time=w.end_sec, speaker_name=w.speaker_name
                    )
                    for w in item.speakers
                ],
            )
            for item in agenda_items
        ]
        transcript = [
            SimplifiedSegment(
                start=s.video_seconds,
                end=s.video_seconds + s.duration_seconds,
                text=s.transcript_text,
                speaker=s.speaker_name,
                agenda_item=s.agenda_item,
            )
            for s in segments
        ]

        document = SimplifiedDocument(
            meeting_id=meeting.meeting_id,
            date=meeting.date,
            title=meeting.title,
            location=meeting.location,
            chairperson=meeting.chairperson,
            agenda_url=meeting.agenda_url,
            player_url=self.config.player_url_template.format(meeting_id=meeting.meeting_id),
            language=self.config.language,
            video_available=video_available,
            agenda=agenda,
            transcript=transcript,
        )
        logger.info(
            f"Built simplified document for {meeting.meeting_id}: "
            f"{len(agenda)} agenda items, {len(transcript)} segments"
        )
        return document

    def _video_metadata(self, meeting: MeetingInfo, record_type: str) -> VideoMetadata:
        return VideoMetadata(
            title=meeting.title,
            filename=f"{meeting.meeting_id}.json",
            date=meeting.date,
            duration=self._parse_duration(meeting.duration),
            source=self.config.source,
            dataset=self.config.dataset,
            format=self.config.meeting_format,
            place=meeting.location,
            record_type=record_type,
            description=meeting.description,
            url=meeting.url,
        )

    @staticmethod
    def _parse_duration(duration: str | None) -> int | None:
        if not duration:
            return None
        try:
            return int(parse_time_literal(duration))
        except FormatError:
            logger.warning(f"Could not parse duration: {duration}")
            return None

    @staticmethod
    def optimize(document: BaseModel) -> dict[str, Any]:
        """Dump a document without null or empty-string optional fields."""
        return _drop_empty(document.model_dump(exclude_none=True))

    @staticmethod
    def to_json(document: BaseModel | dict[str, Any]) -> str:
        data = document.model_dump() if isinstance(document, BaseModel) else document
        return json.dumps(data, indent=2, ensure_ascii=False)

    def estimate_file_size(self, document: BaseModel | dict[str, Any]) -> int:
        """Size in bytes of the indented UTF-8 JSON rendering."""
        return len(self.to_json(document).encode("utf-8"))

    def save_document(self, document: BaseModel | dict[str, Any], path: Path | str) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(document) + "\n", encoding="utf-8")
        logger.info(f"Wrote {path}")
        return path

    @staticmethod
    def create_processing_summary(
        meeting: MeetingInfo,
        agenda_items: Sequence[AgendaItem],
        segments: Sequence[Segment],
        processing_time_ms: float,
    ) -> ProcessingSummary:
        total = len(segments)
        aligned_speakers = sum(1 for s in segments if s.speaker_name)
        aligned_agenda = sum(1 for s in segments if s.agenda_item)
        covered_titles = {s.agenda_item for s in segments if s.agenda_item}

        def rate(count: int) -> int:
            return round_half_up(count / total * 100) if total else 0

        return ProcessingSummary(
            meeting_id=meeting.meeting_id,
            processing_timestamp=_now(),
            processing_time_ms=processing_time_ms,
            statistics=SummaryStatistics(
                total_segments=total,
                total_words=sum(s.word_count for s in segments),
                total_duration_seconds=max(
                    (s.video_seconds + s.duration_seconds for s in segments), default=0
                ),
                speaker_alignment_rate=rate(aligned_speakers),
                agenda_alignment_rate=rate(aligned_agenda),
                unique_speakers=len({s.speaker_name for s in segments if s.speaker_name}),
                agenda_items_covered=sum(1 for item in agenda_items if item.title in covered_titles),
            ),
            quality_metrics=QualityMetrics(
                has_speaker_data=aligned_speakers > 0,
                has_agenda_data=aligned_agenda > 0,
                alignment_quality="good" if aligned_speakers > total * 0.5 else "poor",
            ),
        )


def _drop_empty(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _drop_empty(v) for k, v in value.items() if v != ""}
    if isinstance(value, list):
        return [_drop_empty(v) for v in value]
    return value
