"""End-to-end transcript pipeline: captions + agenda -> document."""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from council_transcript.agenda import AgendaDocument, load_agenda
from council_transcript.alignment import (
    AlignmentStats,
    TranscriptAligner,
    ValidationResult,
    validate_alignment,
)
from council_transcript.captions import CaptionParser, load_caption_payload, merge_cues
from council_transcript.config import TranscriptConfig, load_config
from council_transcript.core import CaptionError, Segment
from council_transcript.output import TranscriptBuilder
from council_transcript.utils import get_logger, setup_logging, stage, timed

logger = get_logger(__name__)


@dataclass
class TranscriptResult:
    """Everything produced by one pipeline run."""
    meeting_id: str
    segments: list[Segment]
    stats: AlignmentStats
    validation: ValidationResult
    document: BaseModel | dict[str, Any]
    video_available: bool = True
    diagnostics: list[str] = field(default_factory=list)  # caption and agenda issues
    processing_time_ms: float = 0.0
    output_path: Path | None = None


class TranscriptPipeline:
    """Align a caption track with an agenda and build the output document.

    Flow: payload -> CaptionParser -> TranscriptAligner (align, post-process)
    -> validate_alignment -> TranscriptBuilder
    """

    def __init__(self, config: TranscriptConfig | None = None):
        self.config = config or TranscriptConfig()
        self.parser = CaptionParser(sort_cues=self.config.captions.sort_cues)
        self.aligner = TranscriptAligner(
            grace_window_seconds=self.config.alignment.grace_window_seconds,
            min_segment_seconds=self.config.alignment.min_segment_seconds,
            max_merge_gap_seconds=self.config.alignment.max_merge_gap_seconds,
        )
        self.builder = TranscriptBuilder(self.config.output)

    @classmethod
    def from_config(
        cls,
        config_path: Path | str | None = None,
        env: str | None = None,
        config_dir: Path | str = "configs",
        overrides: dict[str, Any] | None = None,
    ) -> "TranscriptPipeline":
        config = load_config(
            config_path=config_path, env=env, config_dir=config_dir, overrides=overrides
        )
        setup_logging(config.log_level, config.log_format, config.log_file)
        return cls(config)

    @timed
    def process(
        self,
        payload: str,
        agenda: AgendaDocument,
        source_file: str | None = None,
    ) -> TranscriptResult:
        """Align an in-memory caption payload with a loaded agenda.

        Raises:
            CaptionError: If the payload yields no cues
            AlignmentFailure: If the aligned segments fail validation
            AlignmentShortfall: If coverage is low and validation.fail_on_warnings is set
        """
        started = time.perf_counter()
        meeting = agenda.meeting

        with stage("parse captions", logger):
            parsed = self.parser.parse(payload)
        cues = parsed.cues
        if not cues:
            raise CaptionError(f"No caption cues found for meeting {meeting.meeting_id}")
        if self.config.captions.premerge_cues:
            cues = merge_cues(cues, self.config.captions.premerge_gap_seconds)

        with stage("align", logger):
            segments = self.aligner.align(cues, agenda.items)
            if self.config.alignment.fill_speaker_gaps:
                segments = self.aligner.fill_speaker_gaps(segments)
            if self.config.alignment.merge_short_segments:
                segments = self.aligner.merge_short_segments(segments)
        logger.info(f"Post-processing complete: {len(cues)} cues -> {len(segments)} segments")

        stats = self.aligner.compute_stats(segments, agenda.items)
        self._log_stats(meeting.meeting_id, stats)

        validation = validate_alignment(
            segments,
            min_speaker_rate=self.config.validation.min_speaker_rate,
            min_agenda_rate=self.config.validation.min_agenda_rate,
        )
        if not validation.valid:
            logger.error(f"Alignment validation failed: {validation.errors}")
        validation.raise_for_errors()
        if validation.warnings:
            logger.warning(f"Alignment warnings: {validation.warnings}")
            if self.config.validation.fail_on_warnings:
                validation.raise_for_warnings()

        document = self._build_document(agenda, segments, source_file)
        elapsed_ms = (time.perf_counter() - started) * 1000

        return TranscriptResult(
            meeting_id=meeting.meeting_id,
            segments=segments,
            stats=stats,
            validation=validation,
            document=document,
            diagnostics=[*agenda.issues, *parsed.issues],
            processing_time_ms=elapsed_ms,
        )

    def run(
        self,
        caption_source: str | Path | None,
        agenda_path: Path | str,
        output_path: Path | str | None = None,
    ) -> TranscriptResult:
        """Load inputs, process them and optionally write the document.

        With no caption source the meeting is treated as not yet held and a
        future-meeting document is produced.
        """
        agenda = load_agenda(agenda_path)

        if caption_source is None:
            logger.info(f"No caption source for {agenda.meeting.meeting_id}, building future meeting document")
            result = self._future_meeting(agenda)
        else:
            payload = load_caption_payload(caption_source, self.config.source)
            result = self.process(payload, agenda, source_file=Path(str(caption_source)).name)

        if output_path is not None:
            result.output_path = self.builder.save_document(result.document, output_path)
        return result

    def default_output_path(self, meeting_id: str) -> Path:
        return Path(self.config.output.output_dir) / f"{meeting_id}.json"

    def _build_document(
        self,
        agenda: AgendaDocument,
        segments: list[Segment],
        source_file: str | None,
    ) -> BaseModel | dict[str, Any]:
        if self.config.output.format == "simplified":
            return self.builder.build_simplified_document(agenda.meeting, agenda.items, segments)

        document = self.builder.build_transcript_document(
            agenda.meeting,
            segments,
            source_file=source_file,
            conversion_notes=f"Converted from WebVTT {source_file}" if source_file else None,
        )
        return self.builder.optimize(document) if self.config.output.optimize else document

    def _future_meeting(self, agenda: AgendaDocument) -> TranscriptResult:
        if self.config.output.format == "simplified":
            document = self.builder.build_simplified_document(
                agenda.meeting, agenda.items, [], video_available=False
            )
        else:
            document = self.builder.build_future_meeting_document(agenda.meeting)

        return TranscriptResult(
            meeting_id=agenda.meeting.meeting_id,
            segments=[],
            stats=AlignmentStats(),
            validation=ValidationResult(valid=True),
            document=document,
            video_available=False,
            diagnostics=list(agenda.issues),
        )

    @staticmethod
    def _log_stats(meeting_id: str, stats: AlignmentStats) -> None:
        summary = stats.to_dict()
        logger.info(
            f"Alignment for {meeting_id}: {summary['total_segments']} segments, "
            f"speakers {summary['speaker_alignment']}, agenda {summary['agenda_alignment']}, "
            f"{summary['unique_speakers']} unique speakers"
        )
        uncovered = [c.title for c in stats.agenda_coverage if not c.covered]
        if uncovered:
            logger.debug(f"Agenda items without segments: {uncovered}")
