"""Shared test fixtures."""

import pytest

from council_transcript.core import AgendaItem, MeetingInfo, Segment, SpeakerWindow


SAMPLE_VTT = """WEBVTT
Kind: captions
Language: nl

NOTE exported by the webcast player

1
0:01:23.200 --> 0:01:25.000
Dames en heren

2
0:01:25.500 --> 0:01:31.000 align:start position:10%
<v Jules Bijl>welkom bij de</v>
<b>vergadering</b> van de raad.

3
0:07:40.000 --> 0:07:46.500
Dank u, voorzitter.
"""

SAMPLE_AGENDA_YAML = """
meeting:
  id: gemeentelansingerland_20250327_1
  title: Gemeenteraad 27 maart 2025
  date: "2025-03-27"
  location: Raadzaal
  chairperson: Pieter van Vliet
  duration: "02:52:03"
agenda:
  - id: "1"
    title: Opening
    speakers:
      - "00:01:16 - 00:07:34 - Jules Bijl"
  - id: "2"
    title: Vaststellen agenda
    speakers:
      - {start: "00:07:34", end: "00:09:02", name: "Anna de Vries"}
      - "not a speaker line"
"""


@pytest.fixture
def sample_vtt():
    return SAMPLE_VTT


@pytest.fixture
def agenda_file(tmp_path):
    path = tmp_path / "agenda.yaml"
    path.write_text(SAMPLE_AGENDA_YAML, encoding="utf-8")
    return path


@pytest.fixture
def vtt_file(tmp_path):
    path = tmp_path / "meeting.vtt"
    path.write_text(SAMPLE_VTT, encoding="utf-8")
    return path


@pytest.fixture
def agenda_items():
    """Two agenda items, each with one speaker window."""
    return [
        AgendaItem(
            id="1",
            title="Opening",
            order=1,
            speakers=(SpeakerWindow(76, 454, "Jules Bijl"),),
        ),
        AgendaItem(
            id="2",
            title="Vaststellen agenda",
            order=2,
            speakers=(SpeakerWindow(454, 542, "Anna de Vries"),),
        ),
    ]


@pytest.fixture
def meeting():
    return MeetingInfo(
        meeting_id="gemeentelansingerland_20250327_1",
        title="Gemeenteraad 27 maart 2025",
        date="2025-03-27",
        location="Raadzaal",
        chairperson="Pieter van Vliet",
        agenda_url="https://example.org/Agenda/Index/8f592da7",
        duration="02:52:03",
    )


@pytest.fixture
def make_segment():
    """Build a Segment with sensible defaults; override any field by keyword."""
    counter = {"n": 0}

    def factory(**overrides):
        counter["n"] += 1
        text = overrides.pop("transcript_text", "woord")
        fields = {
            "segment_id": f"{counter['n']:03d}",
            "speaker_name": "A",
            "transcript_text": text,
            "video_seconds": 0,
            "timestamp_start": "00:00:00",
            "timestamp_end": "00:00:01",
            "duration_seconds": 1,
            "word_count": len(text.split()),
            "char_count": len(text),
            "agenda_item": "X",
        }
        fields.update(overrides)
        return Segment(**fields)
    return factory
