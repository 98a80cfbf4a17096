"""Tests for the WebVTT tokenizer and cue helpers."""

import pytest

from council_transcript.captions import (
    CaptionParser,
    clean_cue_text,
    filter_cues_by_time_range,
    merge_cues,
    parse_interval,
)
from council_transcript.core import Cue, FormatError


class TestCleanCueText:
    def test_strips_tags_and_collapses_whitespace(self):
        assert clean_cue_text("<v Jan>Goede   <i>avond</i></v>  ") == "Goede avond"

    def test_decodes_entities(self):
        assert clean_cue_text("Tom &amp; Jerry &lt;3") == "Tom & Jerry <3"


class TestParseInterval:
    def test_with_settings(self):
        assert parse_interval("00:00:01.500 --> 00:00:04.000 align:start line:90%") == (1.5, 4.0)

    def test_short_forms(self):
        assert parse_interval("01:02.5 --> 01:03,250") == (62.5, pytest.approx(63.25))

    @pytest.mark.parametrize(
        "line",
        ["00:00:01.000 00:00:02.000", "00:00:01.000 -->", "--> 00:00:02.000", "x --> 00:00:02.000"],
    )
    def test_malformed(self, line):
        with pytest.raises(FormatError):
            parse_interval(line)


class TestCaptionParser:
    def test_parses_sample(self, sample_vtt):
        parsed = CaptionParser().parse(sample_vtt)

        assert parsed.issues == []
        assert parsed.cues == [
            Cue(83.2, 85.0, "Dames en heren"),
            Cue(85.5, 91.0, "welkom bij de vergadering van de raad."),
            Cue(460.0, 466.5, "Dank u, voorzitter."),
        ]

    def test_missing_header(self):
        parsed = CaptionParser().parse("00:00:01.000 --> 00:00:02.000\nhallo\n")
        assert parsed.cues == []
        assert parsed.issues == ["Missing WEBVTT header"]

    def test_byte_order_mark_and_crlf(self):
        payload = "\ufeffWEBVTT\r\n\r\n00:00:01.000 --> 00:00:02.000\r\nhallo\r\n"
        assert CaptionParser().parse(payload).cues == [Cue(1.0, 2.0, "hallo")]

    def test_cue_right_after_header(self):
        payload = "WEBVTT\n00:00:01.000 --> 00:00:02.000\nhallo\n"
        assert CaptionParser().parse(payload).cues == [Cue(1.0, 2.0, "hallo")]

    def test_malformed_block_is_skipped(self):
        payload = (
            "WEBVTT\n\n"
            "1\n00:00:01.000 --> 00:00:02.000\neen\n\n"
            "2\n00:00:xx.000 --> 00:00:03.000\nkapot\n\n"
            "3\n00:00:04.000 --> 00:00:05.000\ndrie\n"
        )
        parsed = CaptionParser().parse(payload)
        assert [c.text for c in parsed.cues] == ["een", "drie"]
        assert len(parsed.issues) == 1
        assert "Invalid time literal" in parsed.issues[0]

    def test_inverted_cue_dropped_zero_duration_kept(self):
        payload = (
            "WEBVTT\n\n"
            "00:00:05.000 --> 00:00:04.000\nachteruit\n\n"
            "00:00:06.000 --> 00:00:06.000\nnul\n"
        )
        parsed = CaptionParser().parse(payload)
        assert parsed.cues == [Cue(6.0, 6.0, "nul")]
        assert parsed.issues[0].startswith("Inverted cue dropped")

    def test_style_and_region_blocks_skipped(self):
        payload = (
            "WEBVTT\n\n"
            "STYLE\n::cue { color: yellow }\n\n"
            "REGION\nid:fred width:40%\n\n"
            "NOTE\nmeerdere\nregels\n\n"
            "00:00:01.000 --> 00:00:02.000\nhallo\n"
        )
        parsed = CaptionParser().parse(payload)
        assert parsed.cues == [Cue(1.0, 2.0, "hallo")]
        assert parsed.issues == []

    def test_tab_separated_note_skipped(self):
        payload = (
            "WEBVTT\n\n"
            "NOTE\tfirst\nsecond\n\n"
            "00:00:01.000 --> 00:00:02.000\nhallo\n"
        )
        parsed = CaptionParser().parse(payload)
        assert parsed.cues == [Cue(1.0, 2.0, "hallo")]
        assert parsed.issues == []

    def test_note_prefix_of_identifier_is_not_a_block(self):
        payload = "WEBVTT\n\nNOTES-1\n00:00:01.000 --> 00:00:02.000\nhallo\n"
        assert CaptionParser().parse(payload).cues == [Cue(1.0, 2.0, "hallo")]

    def test_empty_text_cues_dropped(self):
        payload = "WEBVTT\n\n00:00:01.000 --> 00:00:02.000\n<b></b>\n"
        assert CaptionParser().parse(payload).cues == []

    def test_out_of_order_cues_sorted(self):
        payload = (
            "WEBVTT\n\n"
            "00:00:10.000 --> 00:00:11.000\nlater\n\n"
            "00:00:01.000 --> 00:00:02.000\neerder\n"
        )
        parsed = CaptionParser().parse(payload)
        assert [c.text for c in parsed.cues] == ["eerder", "later"]
        assert parsed.issues == ["Cues were out of order and have been sorted by start time"]

    def test_out_of_order_cues_kept_when_sorting_disabled(self):
        payload = (
            "WEBVTT\n\n"
            "00:00:10.000 --> 00:00:11.000\nlater\n\n"
            "00:00:01.000 --> 00:00:02.000\neerder\n"
        )
        parsed = CaptionParser(sort_cues=False).parse(payload)
        assert [c.text for c in parsed.cues] == ["later", "eerder"]
        assert parsed.issues == ["Cues are out of order"]


class TestValidate:
    def test_valid_payload(self, sample_vtt):
        assert CaptionParser.validate(sample_vtt) == (True, [])

    def test_missing_header_and_cues(self):
        valid, errors = CaptionParser.validate("hallo")
        assert not valid
        assert errors == ["Missing WEBVTT header", "No cues found in caption payload"]

    def test_only_invalid_timings(self):
        valid, errors = CaptionParser.validate("WEBVTT\n\nab --> cd\nx\n")
        assert not valid
        assert errors == [
            "Invalid timing format at line 3: ab --> cd",
            "No valid cues found in caption payload",
        ]


class TestStats:
    def test_stats(self):
        cues = [Cue(10.0, 12.0, "een twee"), Cue(20.0, 24.0, "drie")]
        stats = CaptionParser.stats(cues)
        assert stats.total_cues == 2
        assert stats.total_duration == pytest.approx(14.0)
        assert stats.average_cue_duration == pytest.approx(3.0)
        assert stats.total_words == 3
        assert stats.average_words_per_cue == pytest.approx(1.5)
        assert (stats.first_cue_start, stats.last_cue_end) == (10.0, 24.0)

    def test_empty(self):
        assert CaptionParser.stats([]).total_cues == 0


class TestCueHelpers:
    def test_filter_by_time_range(self):
        inside = Cue(12, 14, "in")
        ending = Cue(8, 11, "eind")
        spanning = Cue(5, 30, "over")
        outside = Cue(25, 26, "uit")
        result = filter_cues_by_time_range([inside, ending, spanning, outside], 10, 20)
        assert result == [inside, ending, spanning]

    def test_merge_cues(self):
        cues = [Cue(0, 1, "a"), Cue(1.3, 2, "b"), Cue(1.5, 3, "c"), Cue(5, 6, "d")]
        assert merge_cues(cues, max_gap_seconds=0.5) == [Cue(0, 3, "a b c"), Cue(5, 6, "d")]

    def test_merge_cues_empty(self):
        assert merge_cues([]) == []
