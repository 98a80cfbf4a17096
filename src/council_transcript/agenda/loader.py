"""Structured agenda input: speaker lines and agenda files.

An agenda file is YAML (or JSON) shaped like::

    meeting:
      id: gemeentelansingerland_20250327_1
      title: Gemeenteraad
      date: "2025-03-27"
    agenda:
      - id: "1"
        title: Opening
        speakers:
          - "00:01:16 - 00:07:34 - Jules Bijl"
          - {start: "00:07:34", end: "00:09:02", name: "Anna de Vries"}
          - {start_sec: 542, end_sec: 610, speaker_name: "Piet Jansen"}

Speaker entries that cannot be parsed are skipped and reported in
`AgendaDocument.issues`.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from council_transcript.alignment.timing import parse_time_literal
from council_transcript.core import AgendaError, AgendaItem, FormatError, MeetingInfo, SpeakerWindow
from council_transcript.utils import get_logger

logger = get_logger(__name__)

_SPEAKER_LINE = re.compile(
    r"^\s*(\d{1,2}:\d{2}(?::\d{2})?)\s*-\s*(\d{1,2}:\d{2}(?::\d{2})?)\s*-\s*(\S.*?)\s*$"
)


@dataclass
class AgendaDocument:
    meeting: MeetingInfo
    items: list[AgendaItem] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)


def parse_speaker_line(line: str) -> SpeakerWindow:
    """Parse `HH:MM:SS - HH:MM:SS - Name` (or the MM:SS forms).

    Raises:
        FormatError: If the line is not a speaker line or ends before it starts
    """
    match = _SPEAKER_LINE.match(line)
    if not match:
        raise FormatError(f"Invalid speaker line: {line!r}")

    start, end, name = match.groups()
    return _window(parse_time_literal(start), parse_time_literal(end), name.strip())


def _window(start: float, end: float, name: str) -> SpeakerWindow:
    if end < start:
        raise FormatError(f"Inverted speaker window for {name}: {start} > {end}")
    return SpeakerWindow(start_sec=start, end_sec=end, speaker_name=name)


def _entry_seconds(value: Any) -> float:
    # PyYAML reads unquoted 12:30 as a base-60 int, so numbers are already seconds.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        return parse_time_literal(value)
    raise FormatError(f"Invalid speaker time: {value!r}")


def _parse_speaker_entry(entry: Any) -> SpeakerWindow:
    if isinstance(entry, str):
        return parse_speaker_line(entry)

    if not isinstance(entry, Mapping):
        raise FormatError(f"Unsupported speaker entry: {entry!r}")

    name = entry.get("speaker_name", entry.get("name"))
    if not name or not str(name).strip():
        raise FormatError(f"Speaker entry without a name: {dict(entry)!r}")

    if "start_sec" in entry or "end_sec" in entry:
        try:
            start, end = float(entry["start_sec"]), float(entry["end_sec"])
        except (KeyError, TypeError, ValueError) as e:
            raise FormatError(f"Invalid speaker seconds in {dict(entry)!r}") from e
    else:
        start = _entry_seconds(entry.get("start"))
        end = _entry_seconds(entry.get("end"))

    return _window(start, end, str(name).strip())


def agenda_from_dict(data: Mapping[str, Any]) -> AgendaDocument:
    """Build an AgendaDocument from an already-parsed mapping.

    Raises:
        AgendaError: If the mapping lacks the meeting or agenda structure
    """
    if not isinstance(data, Mapping):
        raise AgendaError(f"Agenda data must be a mapping, got {type(data).__name__}")

    meeting_data = data.get("meeting") or {}
    if not isinstance(meeting_data, Mapping):
        raise AgendaError("'meeting' must be a mapping")
    meeting_id = meeting_data.get("id") or meeting_data.get("meeting_id")
    if not meeting_id:
        raise AgendaError("Agenda file is missing meeting.id")

    known = {"id", "meeting_id", "title", "date", "location", "chairperson",
             "agenda_url", "description", "duration", "url"}
    meeting = MeetingInfo(
        meeting_id=str(meeting_id),
        title=str(meeting_data.get("title") or meeting_id),
        date=_optional_str(meeting_data.get("date")),
        location=_optional_str(meeting_data.get("location")),
        chairperson=_optional_str(meeting_data.get("chairperson")),
        agenda_url=_optional_str(meeting_data.get("agenda_url")),
        description=_optional_str(meeting_data.get("description")),
        duration=_optional_str(meeting_data.get("duration")),
        url=_optional_str(meeting_data.get("url")),
        extra={k: v for k, v in meeting_data.items() if k not in known},
    )

    raw_items = data.get("agenda") or []
    if not isinstance(raw_items, list):
        raise AgendaError("'agenda' must be a list of agenda items")

    document = AgendaDocument(meeting=meeting)
    seen_ids: set[str] = set()

    for position, raw in enumerate(raw_items, 1):
        if not isinstance(raw, Mapping) or not raw.get("title"):
            raise AgendaError(f"Agenda item {position} must be a mapping with a title")

        item_id = str(raw.get("id", position))
        if item_id in seen_ids:
            raise AgendaError(f"Duplicate agenda item id: {item_id}")
        seen_ids.add(item_id)

        try:
            order = int(raw.get("order", position))
        except (TypeError, ValueError) as e:
            raise AgendaError(f"Agenda item {item_id} has a non-integer order") from e

        speakers = []
        for entry in raw.get("speakers") or []:
            try:
                speakers.append(_parse_speaker_entry(entry))
            except FormatError as e:
                message = f"Agenda item {item_id}: {e}"
                logger.warning(f"Skipping speaker entry: {message}")
                document.issues.append(message)

        document.items.append(
            AgendaItem(
                id=item_id,
                title=str(raw["title"]).strip(),
                order=order,
                speakers=tuple(speakers),
            )
        )

    document.items.sort(key=lambda item: item.order)
    logger.info(
        f"Loaded agenda for {meeting.meeting_id}: {len(document.items)} items, "
        f"{sum(len(i.speakers) for i in document.items)} speaker windows"
    )
    return document


def load_agenda(path: Path | str) -> AgendaDocument:
    """Load an agenda file (YAML or JSON).

    Raises:
        AgendaError: If the file is missing, unparsable or malformed
    """
    path = Path(path)
    if not path.is_file():
        raise AgendaError(f"Agenda file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise AgendaError(f"Invalid agenda file {path}: {e}") from e

    return agenda_from_dict(data or {})


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)
