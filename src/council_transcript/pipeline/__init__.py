"""Pipeline module - end-to-end transcript orchestration."""

from council_transcript.pipeline.orchestrator import TranscriptPipeline, TranscriptResult

__all__ = [
    "TranscriptPipeline",
    "TranscriptResult",
]
