"""Diagnostic checks over an aligned segment list."""

from dataclasses import dataclass, field
from typing import Sequence

from council_transcript.alignment.timing import round_half_up
from council_transcript.core import Segment, AlignmentFailure, AlignmentShortfall

DEFAULT_MIN_SPEAKER_RATE = 0.5
DEFAULT_MIN_AGENDA_RATE = 0.3


@dataclass
class ValidationResult:
    """Outcome of validate_alignment. Errors make the result invalid."""
    valid: bool
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def raise_for_errors(self) -> None:
        if self.errors:
            raise AlignmentFailure(self.errors)

    def raise_for_warnings(self) -> None:
        if self.warnings:
            raise AlignmentShortfall(self.warnings)


def validate_alignment(
    segments: Sequence[Segment],
    min_speaker_rate: float = DEFAULT_MIN_SPEAKER_RATE,
    min_agenda_rate: float = DEFAULT_MIN_AGENDA_RATE,
) -> ValidationResult:
    """Check ordering and attribution coverage without modifying segments."""
    warnings: list[str] = []
    errors: list[str] = []

    if not segments:
        errors.append("No segments generated")
        return ValidationResult(valid=False, warnings=warnings, errors=errors)

    total = len(segments)

    speaker_rate = sum(1 for s in segments if s.speaker_name is not None) / total
    if speaker_rate < min_speaker_rate:
        warnings.append(f"Low speaker alignment rate: {round_half_up(speaker_rate * 100)}%")

    agenda_rate = sum(1 for s in segments if s.agenda_item is not None) / total
    if agenda_rate < min_agenda_rate:
        warnings.append(f"Low agenda item alignment rate: {round_half_up(agenda_rate * 100)}%")

    for current, following in zip(segments, segments[1:]):
        if current.video_seconds > following.video_seconds:
            errors.append(
                f"Timing inconsistency at segment {current.segment_id}: "
                f"{current.video_seconds} > {following.video_seconds}"
            )

    return ValidationResult(valid=not errors, warnings=warnings, errors=errors)
