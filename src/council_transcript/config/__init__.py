"""Configuration management."""

from council_transcript.config.schema import (
    TranscriptConfig,
    CaptionConfig,
    AlignmentConfig,
    ValidationConfig,
    OutputConfig,
    SourceConfig,
)
from council_transcript.config.loader import load_config, load_yaml, deep_merge, apply_env_overrides

__all__ = [
    # Main config
    "TranscriptConfig",
    "load_config",
    # Sub-configs
    "CaptionConfig",
    "AlignmentConfig",
    "ValidationConfig",
    "OutputConfig",
    "SourceConfig",
    # Utilities
    "load_yaml",
    "deep_merge",
    "apply_env_overrides",
]
