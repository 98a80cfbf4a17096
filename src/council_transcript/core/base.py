"""Data classes shared by the tokenizer, the aligner and the builders."""

from dataclasses import dataclass, field, asdict
from typing import Any


@dataclass(frozen=True)
class Cue:
    """A timestamped unit of caption text."""
    start: float  # seconds
    end: float  # seconds
    text: str

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class SpeakerWindow:
    """A declared [start_sec, end_sec) interval in which a speaker holds the floor."""
    start_sec: float
    end_sec: float
    speaker_name: str


@dataclass(frozen=True)
class AgendaItem:
    """An ordered agenda topic owning zero or more speaker windows."""
    id: str
    title: str
    order: int  # 1-based
    speakers: tuple[SpeakerWindow, ...] = ()


@dataclass(frozen=True)
class IndexedWindow:
    """A speaker window in the global index, tagged with its owning agenda item."""
    window: SpeakerWindow
    agenda_item_id: str

    @property
    def start_sec(self) -> float:
        return self.window.start_sec

    @property
    def end_sec(self) -> float:
        return self.window.end_sec

    @property
    def speaker_name(self) -> str:
        return self.window.speaker_name


@dataclass
class Segment:
    """An attributed transcript segment, the unit handed to serialization."""
    segment_id: str
    speaker_name: str | None
    transcript_text: str
    video_seconds: int
    timestamp_start: str
    timestamp_end: str
    duration_seconds: int
    word_count: int
    char_count: int
    segment_type: str = "spoken"
    agenda_item: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class MeetingInfo:
    """Meeting metadata carried through to the output documents."""
    meeting_id: str
    title: str
    date: str | None = None
    location: str | None = None
    chairperson: str | None = None
    agenda_url: str | None = None
    description: str | None = None
    duration: str | None = None  # e.g. "02:52:03"
    url: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)
