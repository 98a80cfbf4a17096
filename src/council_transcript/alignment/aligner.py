"""Cue-to-speaker alignment and segment post-processing.

For each caption cue the aligner picks the best covering speaker window and
the agenda item the cue belongs to, then emits a Segment. Two passes follow:
gap fill (unattributed runs flanked by the same speaker) and short-segment
merge. The aligner does no I/O and keeps no state between calls; it returns
segments and statistics and leaves logging of outcomes to the caller.
"""

import math
from dataclasses import dataclass, field, replace
from typing import Sequence

from council_transcript.alignment.index import flatten_windows
from council_transcript.alignment.timing import (
    DEFAULT_GRACE_WINDOW,
    best_window,
    in_window,
    round_half_up,
    seconds_to_timestamp,
)
from council_transcript.core import AgendaItem, Cue, IndexedWindow, Segment
from council_transcript.utils import get_logger

logger = get_logger(__name__)

SEGMENT_TYPE = "spoken"
DEFAULT_MIN_SEGMENT_SECONDS = 2
DEFAULT_MAX_MERGE_GAP_SECONDS = 5


@dataclass
class SpeakerStats:
    """Per-speaker totals over the final segments."""
    name: str
    segments: int
    duration_seconds: int


@dataclass
class AgendaCoverage:
    """How many segments landed on an agenda item."""
    title: str
    segments: int

    @property
    def covered(self) -> bool:
        return self.segments > 0


@dataclass
class AlignmentStats:
    """Summary of an alignment run, assembled once from the final segments."""
    total_segments: int = 0
    aligned_speakers: int = 0
    aligned_agenda_items: int = 0
    speakers: list[SpeakerStats] = field(default_factory=list)  # most segments first
    agenda_coverage: list[AgendaCoverage] = field(default_factory=list)

    @property
    def speaker_rate(self) -> float:
        return self.aligned_speakers / self.total_segments if self.total_segments else 0.0

    @property
    def agenda_rate(self) -> float:
        return self.aligned_agenda_items / self.total_segments if self.total_segments else 0.0

    @property
    def unique_speakers(self) -> int:
        return len(self.speakers)

    def to_dict(self) -> dict:
        return {
            "total_segments": self.total_segments,
            "aligned_speakers": self.aligned_speakers,
            "aligned_agenda_items": self.aligned_agenda_items,
            "speaker_alignment": f"{round_half_up(self.speaker_rate * 100)}%",
            "agenda_alignment": f"{round_half_up(self.agenda_rate * 100)}%",
            "unique_speakers": self.unique_speakers,
            "top_speakers": [
                {"name": s.name, "segments": s.segments, "duration": s.duration_seconds}
                for s in self.speakers[:5]
            ],
            "agenda_item_coverage": [
                {"agenda_item": c.title, "segments": c.segments, "covered": c.covered}
                for c in self.agenda_coverage
            ],
        }


def count_words(text: str) -> int:
    return len(text.split())


class TranscriptAligner:
    """Attribute caption cues to speakers and agenda items.

    Args:
        grace_window_seconds: Symmetric tolerance applied to both window edges
        min_segment_seconds: Segments shorter than this absorb their successor
        max_merge_gap_seconds: Largest gap (exclusive) bridged by a merge
    """

    def __init__(
        self,
        grace_window_seconds: float = DEFAULT_GRACE_WINDOW,
        min_segment_seconds: int = DEFAULT_MIN_SEGMENT_SECONDS,
        max_merge_gap_seconds: int = DEFAULT_MAX_MERGE_GAP_SECONDS,
    ):
        if grace_window_seconds < 0:
            raise ValueError("grace_window_seconds must be non-negative")
        self.grace_window = grace_window_seconds
        self.min_segment_seconds = min_segment_seconds
        self.max_merge_gap_seconds = max_merge_gap_seconds

    def align(self, cues: Sequence[Cue], agenda_items: Sequence[AgendaItem]) -> list[Segment]:
        """Emit one Segment per cue, in cue order.

        Cues are expected in ascending start order (the caption parser
        guarantees this); they are not re-sorted here.
        """
        windows = flatten_windows(agenda_items)
        items_by_id = {item.id: item for item in agenda_items}

        segments = []
        for number, cue in enumerate(cues, 1):
            matched = best_window(cue.start, windows, self.grace_window)
            agenda_item = self._resolve_agenda_item(cue, agenda_items, items_by_id, matched)
            segments.append(self._build_segment(number, cue, matched, agenda_item))

        logger.debug(f"Aligned {len(segments)} cues against {len(windows)} speaker windows")
        return segments

    def _resolve_agenda_item(
        self,
        cue: Cue,
        agenda_items: Sequence[AgendaItem],
        items_by_id: dict[str, AgendaItem],
        matched: IndexedWindow | None,
    ) -> AgendaItem | None:
        # A matched speaker window is authoritative for agenda placement.
        if matched is not None and matched.agenda_item_id in items_by_id:
            return items_by_id[matched.agenda_item_id]

        # Otherwise any window of an item covering the cue counts, whoever speaks.
        for item in agenda_items:
            if any(
                in_window(cue.start, window.start_sec, window.end_sec, self.grace_window)
                for window in item.speakers
            ):
                return item

        return agenda_items[0] if agenda_items else None

    @staticmethod
    def _build_segment(
        number: int,
        cue: Cue,
        matched: IndexedWindow | None,
        agenda_item: AgendaItem | None,
    ) -> Segment:
        return Segment(
            segment_id=f"{number:03d}",
            speaker_name=matched.speaker_name if matched else None,
            transcript_text=cue.text,
            video_seconds=math.floor(cue.start),
            timestamp_start=seconds_to_timestamp(cue.start),
            timestamp_end=seconds_to_timestamp(cue.end),
            duration_seconds=round_half_up(cue.end - cue.start),
            word_count=count_words(cue.text),
            char_count=len(cue.text),
            segment_type=SEGMENT_TYPE,
            agenda_item=agenda_item.title if agenda_item else None,
        )

    def post_process(self, segments: list[Segment]) -> list[Segment]:
        """Run gap fill, then short-segment merge."""
        filled = self.fill_speaker_gaps(segments)
        return self.merge_short_segments(filled)

    @staticmethod
    def fill_speaker_gaps(segments: list[Segment]) -> list[Segment]:
        """Attribute unspeakered runs enclosed by the same speaker on both sides.

        A run of consecutive `None` speakers is filled only when the segment
        right before the run and the one right after it name the same speaker.
        Runs touching either end of the list are left alone. Segments are
        updated in place; the same list is returned.
        """
        i = 0
        n = len(segments)
        while i < n:
            if segments[i].speaker_name is not None:
                i += 1
                continue

            run_end = i
            while run_end < n and segments[run_end].speaker_name is None:
                run_end += 1

            before = segments[i - 1].speaker_name if i > 0 else None
            after = segments[run_end].speaker_name if run_end < n else None
            if before is not None and before == after:
                for segment in segments[i:run_end]:
                    segment.speaker_name = before
                logger.debug(
                    f"Filled speaker gap {segments[i].segment_id}..{segments[run_end - 1].segment_id}: {before}"
                )

            i = run_end

        return segments

    def merge_short_segments(self, segments: list[Segment]) -> list[Segment]:
        """Fold short segments into their successor when speaker and agenda agree.

        Single forward pass over an accumulator copy; the input segments are
        not modified.
        """
        if not segments:
            return []

        result: list[Segment] = []
        current = replace(segments[0])

        for next_segment in segments[1:]:
            if self._should_merge(current, next_segment):
                current.transcript_text = f"{current.transcript_text} {next_segment.transcript_text}"
                current.timestamp_end = next_segment.timestamp_end
                current.duration_seconds = (
                    next_segment.video_seconds + next_segment.duration_seconds - current.video_seconds
                )
                current.word_count += next_segment.word_count
                current.char_count += next_segment.char_count
            else:
                result.append(current)
                current = replace(next_segment)

        result.append(current)
        return result

    def _should_merge(self, current: Segment, next_segment: Segment) -> bool:
        gap = next_segment.video_seconds - (current.video_seconds + current.duration_seconds)
        return (
            current.speaker_name == next_segment.speaker_name
            and current.agenda_item == next_segment.agenda_item
            and current.duration_seconds < self.min_segment_seconds
            and gap < self.max_merge_gap_seconds
        )

    @staticmethod
    def compute_stats(segments: Sequence[Segment], agenda_items: Sequence[AgendaItem]) -> AlignmentStats:
        """Build the statistics record for a finished segment list."""
        per_speaker: dict[str, SpeakerStats] = {}
        per_agenda: dict[str, int] = {}

        for segment in segments:
            if segment.speaker_name is not None:
                stats = per_speaker.setdefault(
                    segment.speaker_name, SpeakerStats(segment.speaker_name, 0, 0)
                )
                stats.segments += 1
                stats.duration_seconds += segment.duration_seconds
            if segment.agenda_item is not None:
                per_agenda[segment.agenda_item] = per_agenda.get(segment.agenda_item, 0) + 1

        return AlignmentStats(
            total_segments=len(segments),
            aligned_speakers=sum(1 for s in segments if s.speaker_name is not None),
            aligned_agenda_items=sum(1 for s in segments if s.agenda_item is not None),
            speakers=sorted(per_speaker.values(), key=lambda s: s.segments, reverse=True),
            agenda_coverage=[
                AgendaCoverage(title=item.title, segments=per_agenda.get(item.title, 0))
                for item in agenda_items
            ],
        )
