"""Council Transcript - align caption tracks with agenda speaker windows.

Usage:
    from council_transcript import TranscriptPipeline

    pipeline = TranscriptPipeline.from_config(env="development")
    result = pipeline.run("meeting.vtt", "agenda.yaml", output_path="output/meeting.json")
    print(result.stats.speaker_rate, result.validation.warnings)
"""

from council_transcript.pipeline import TranscriptPipeline, TranscriptResult
from council_transcript.config import TranscriptConfig, load_config
from council_transcript.alignment import TranscriptAligner, validate_alignment
from council_transcript.captions import CaptionParser

__version__ = "0.1.0"

__all__ = [
    "TranscriptPipeline",
    "TranscriptResult",
    "TranscriptConfig",
    "TranscriptAligner",
    "CaptionParser",
    "validate_alignment",
    "load_config",
]
