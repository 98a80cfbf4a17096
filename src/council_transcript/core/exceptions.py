"""Custom exceptions for the transcript alignment system."""


class TranscriptError(Exception):
    """Base exception for all transcript errors."""
    pass


class ConfigError(TranscriptError):
    """Configuration loading or validation error."""
    pass


class FormatError(TranscriptError):
    """A time literal, interval line or speaker line could not be parsed."""
    pass


class CaptionError(TranscriptError):
    """Caption payload missing, unreadable or without usable cues."""
    pass


class AgendaError(TranscriptError):
    """Agenda file missing or structurally invalid."""
    pass


class AlignmentError(TranscriptError):
    """Cue-to-speaker alignment error."""
    pass


class AlignmentFailure(AlignmentError):
    """Validation rejected the aligned segments (empty or out of order)."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(f"Alignment validation failed: {', '.join(self.errors)}")


class AlignmentShortfall(AlignmentError):
    """Attribution coverage fell below the configured rates."""

    def __init__(self, warnings: list[str]):
        self.warnings = list(warnings)
        super().__init__(f"Alignment coverage too low: {', '.join(self.warnings)}")


class OutputError(TranscriptError):
    """Transcript document failed structural validation."""
    pass


class PipelineError(TranscriptError):
    """Pipeline orchestration error."""
    pass
