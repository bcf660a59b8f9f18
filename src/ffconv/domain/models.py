"""Domain models for ffconv.

These are immutable value objects passed between the option layer, the
command synthesizer and the job runner. None of them performs I/O.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from pathlib import Path

from ffconv.domain.enums import (
    GifPaletteMode,
    OutputFormat,
    Resolution,
    SizeConstraintMode,
)

# Option ranges exposed by the option panel
MIN_CRF = 18
MAX_CRF = 51
MIN_SPEED = 0.5
MAX_SPEED = 2.0


@dataclass(frozen=True)
class TranscodeOptions:
    """User-selected settings for a single transcode job.

    Construction never rejects values: range checking is done by
    ``ffconv.options.validate_options`` so that command synthesis can always
    produce a runnable command, treating nonsensical values as absent.
    """

    output_format: OutputFormat = OutputFormat.MP4
    """Target container/codec family."""

    resolution: Resolution = Resolution.ORIGINAL
    """Target height preset. Ignored for audio-only formats."""

    quality_crf: int = 23
    """Constant rate factor (18-51, lower is better)."""

    speed_factor: float = 1.0
    """Playback speed multiplier (0.5-2.0)."""

    remove_audio: bool = False
    """Drop the audio stream. Implied for GIF output."""

    trim_start_seconds: float = 0.0
    """Start of the clip in source seconds."""

    trim_end_seconds: float | None = None
    """End of the clip in source seconds, or None for end of source."""

    gif_palette_mode: GifPaletteMode = GifPaletteMode.BASIC
    """Palette strategy, only meaningful for GIF output."""

    size_constraint_mode: SizeConstraintMode = SizeConstraintMode.CONSTANT_QUALITY
    """Rate control strategy for video outputs."""

    target_size_mb: float = 25.0
    """Desired output size in MiB for target-size mode."""

    audio_bitrate_kbps: int = 192
    """Audio bitrate for mp3/m4a outputs."""

    def with_changes(self, **changes: object) -> TranscodeOptions:
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)  # type: ignore[arg-type]

    @property
    def keeps_audio(self) -> bool:
        """True if an audio stream ends up in the output.

        Audio-only formats always carry audio; GIF never does.
        """
        if self.output_format.is_audio_only:
            return True
        return not self.remove_audio and not self.output_format.is_gif

    @property
    def changes_speed(self) -> bool:
        """True for a usable factor other than 1.0.

        Zero, negative and non-finite factors leave playback speed alone.
        """
        speed = self.speed_factor
        return math.isfinite(speed) and speed > 0 and speed != 1.0

    @property
    def has_valid_trim_end(self) -> bool:
        """True if trim end is set and lies after trim start."""
        return (
            self.trim_end_seconds is not None
            and self.trim_end_seconds > self.trim_start_seconds
        )

    @property
    def clip_duration_seconds(self) -> float | None:
        """Length of the trimmed clip, or None if no valid trim end is set."""
        end = self.trim_end_seconds
        if end is None or end <= self.trim_start_seconds:
            return None
        return end - self.trim_start_seconds


DEFAULT_OPTIONS = TranscodeOptions()


@dataclass(frozen=True)
class SourceDescriptor:
    """Input media file plus its duration when already known."""

    path: Path
    duration_seconds: float = 0.0
    """Container duration in seconds (0 = unknown)."""

    def __post_init__(self) -> None:
        if not isinstance(self.path, Path):
            object.__setattr__(self, "path", Path(self.path))

    @property
    def has_known_duration(self) -> bool:
        return self.duration_seconds > 0

    def with_duration(self, duration_seconds: float) -> SourceDescriptor:
        """Return a copy carrying the given duration."""
        return dataclasses.replace(self, duration_seconds=duration_seconds)
