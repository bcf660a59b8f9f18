"""Range and consistency checks for TranscodeOptions.

Command synthesis never consults these checks; it degrades gracefully on
bad input. They exist so front ends can tell the user what will be ignored
or clamped before a job starts.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ffconv.domain import (
    MAX_CRF,
    MAX_SPEED,
    MIN_CRF,
    MIN_SPEED,
    VALID_AUDIO_BITRATES,
    SizeConstraintMode,
    TranscodeOptions,
)


class OptionsValidationError(Exception):
    """Error raised when user-supplied options are unusable."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


@dataclass(frozen=True)
class ValidationIssue:
    """A single problem found in an option set."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


def validate_options(
    options: TranscodeOptions,
    source_duration: float = 0.0,
) -> list[ValidationIssue]:
    """Check options against their documented ranges.

    Args:
        options: Options to check.
        source_duration: Known source duration in seconds (0 = unknown).
            Trim bounds are only checked against it when known.

    Returns:
        List of issues, empty when the options are fully valid.
    """
    issues: list[ValidationIssue] = []
    fmt = options.output_format

    if not fmt.is_audio_only and not fmt.is_gif:
        if not MIN_CRF <= options.quality_crf <= MAX_CRF:
            issues.append(
                ValidationIssue(
                    "quality_crf",
                    f"must be between {MIN_CRF} and {MAX_CRF}, "
                    f"got {options.quality_crf}",
                )
            )

    if not MIN_SPEED <= options.speed_factor <= MAX_SPEED:
        issues.append(
            ValidationIssue(
                "speed_factor",
                f"must be between {MIN_SPEED} and {MAX_SPEED}, "
                f"got {options.speed_factor}",
            )
        )

    if options.trim_start_seconds < 0:
        issues.append(
            ValidationIssue("trim_start_seconds", "must not be negative")
        )
    elif source_duration > 0 and options.trim_start_seconds >= source_duration:
        issues.append(
            ValidationIssue(
                "trim_start_seconds",
                f"must be before the end of the source ({source_duration:g}s)",
            )
        )

    if options.trim_end_seconds is not None:
        if options.trim_end_seconds <= options.trim_start_seconds:
            issues.append(
                ValidationIssue(
                    "trim_end_seconds",
                    "must be after trim_start_seconds; it will be ignored",
                )
            )

    if (
        options.size_constraint_mode is SizeConstraintMode.TARGET_SIZE
        and not (math.isfinite(options.target_size_mb) and options.target_size_mb > 0)
    ):
        issues.append(
            ValidationIssue(
                "target_size_mb",
                "must be a positive number; a fixed quality will be used instead",
            )
        )

    if fmt.is_lossy_audio and options.audio_bitrate_kbps not in VALID_AUDIO_BITRATES:
        allowed = ", ".join(str(b) for b in VALID_AUDIO_BITRATES)
        issues.append(
            ValidationIssue(
                "audio_bitrate_kbps",
                f"must be one of {allowed}, got {options.audio_bitrate_kbps}",
            )
        )

    return issues

