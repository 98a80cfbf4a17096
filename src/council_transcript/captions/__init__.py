"""Caption track loading and tokenization."""

from council_transcript.captions.parser import (
    CaptionParser,
    CaptionStats,
    ParsedCaptions,
    clean_cue_text,
    parse_interval,
    filter_cues_by_time_range,
    merge_cues,
)
from council_transcript.captions.source import load_caption_payload, is_url

__all__ = [
    "CaptionParser",
    "CaptionStats",
    "ParsedCaptions",
    "clean_cue_text",
    "parse_interval",
    "filter_cues_by_time_range",
    "merge_cues",
    "load_caption_payload",
    "is_url",
]
