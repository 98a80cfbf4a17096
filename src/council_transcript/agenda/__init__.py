"""Agenda input loading."""

from council_transcript.agenda.loader import (
    AgendaDocument,
    parse_speaker_line,
    agenda_from_dict,
    load_agenda,
)

__all__ = [
    "AgendaDocument",
    "parse_speaker_line",
    "agenda_from_dict",
    "load_agenda",
]
