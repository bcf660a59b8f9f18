"""Shared transcode option flags.

Every command that synthesizes an encode accepts the same flags. They are
applied on top of an optional YAML preset, so a flag always wins over the
preset value. Flags are not range-checked here; ``validate_options`` reports
problems so that ``--force`` can override them.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from ffconv.domain import (
    DEFAULT_OPTIONS,
    GifPaletteMode,
    OutputFormat,
    Resolution,
    SizeConstraintMode,
    TranscodeOptions,
)
from ffconv.options import load_preset

F = TypeVar("F", bound=Callable[..., Any])

_OPTION_DECORATORS = (
    click.option(
        "--format",
        "output_format",
        type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
        default=None,
        help="Output container/format (default: mp4).",
    ),
    click.option(
        "--resolution",
        type=click.Choice([r.value for r in Resolution], case_sensitive=False),
        default=None,
        help="Output height (ignored for audio-only formats).",
    ),
    click.option(
        "--crf",
        type=int,
        default=None,
        help="Constant rate factor, 18-51 (lower = better quality).",
    ),
    click.option(
        "--speed",
        type=float,
        default=None,
        help="Playback speed factor, 0.5-2.0.",
    ),
    click.option(
        "--remove-audio/--keep-audio",
        "remove_audio",
        default=None,
        help="Drop the audio track (always dropped for gif).",
    ),
    click.option(
        "--trim-start",
        type=float,
        default=None,
        help="Start of the clip in seconds.",
    ),
    click.option(
        "--trim-end",
        type=float,
        default=None,
        help="End of the clip in seconds.",
    ),
    click.option(
        "--gif-mode",
        type=click.Choice([m.value for m in GifPaletteMode], case_sensitive=False),
        default=None,
        help="GIF palette mode: basic or pro (two-pass palette).",
    ),
    click.option(
        "--target-size",
        type=float,
        default=None,
        help="Target output size in MB (switches to target-size mode).",
    ),
    click.option(
        "--audio-bitrate",
        type=int,
        default=None,
        help="Audio bitrate in kbps for mp3/m4a (128, 192, 256, 320).",
    ),
)


def transcode_options(func: F) -> F:
    """Attach the shared transcode flags to a click command."""
    for decorator in reversed(_OPTION_DECORATORS):
        func = decorator(func)
    return func


def build_options(
    preset: Path | None = None,
    *,
    output_format: str | None = None,
    resolution: str | None = None,
    crf: int | None = None,
    speed: float | None = None,
    remove_audio: bool | None = None,
    trim_start: float | None = None,
    trim_end: float | None = None,
    gif_mode: str | None = None,
    target_size: float | None = None,
    audio_bitrate: int | None = None,
) -> TranscodeOptions:
    """Combine a preset with flag overrides.

    Raises:
        OptionsValidationError: If the preset is invalid.
        FileNotFoundError: If the preset does not exist.
    """
    base = load_preset(preset) if preset is not None else DEFAULT_OPTIONS

    overrides: dict[str, Any] = {}
    if output_format is not None:
        overrides["output_format"] = OutputFormat(output_format.lower())
    if resolution is not None:
        overrides["resolution"] = Resolution(resolution.lower())
    if crf is not None:
        overrides["quality_crf"] = crf
    if speed is not None:
        overrides["speed_factor"] = speed
    if remove_audio is not None:
        overrides["remove_audio"] = remove_audio
    if trim_start is not None:
        overrides["trim_start_seconds"] = trim_start
    if trim_end is not None:
        overrides["trim_end_seconds"] = trim_end
    if gif_mode is not None:
        overrides["gif_palette_mode"] = GifPaletteMode(gif_mode.lower())
    if target_size is not None:
        overrides["size_constraint_mode"] = SizeConstraintMode.TARGET_SIZE
        overrides["target_size_mb"] = target_size
    if audio_bitrate is not None:
        overrides["audio_bitrate_kbps"] = audio_bitrate

    if not overrides:
        return base
    return base.with_changes(**overrides)
