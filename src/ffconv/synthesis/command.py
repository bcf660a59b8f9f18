"""FFmpeg/FFprobe argument synthesis.

This module turns a ``SourceDescriptor`` plus ``TranscodeOptions`` into the
argument lists handed to ffprobe and ffmpeg. Every function here is a pure
mapping: no I/O, no logging, no mutation of its inputs. Invalid or
degenerate option combinations resolve to a fallback instead of an error so
that a runnable command is always produced.

Argument order for an encode:

1. ``-ss`` start seek (before the input, fast seek)
2. ``-i`` input
3. ``-t`` clip duration
4. ``-filter_complex`` (only when at least one stage exists)
5. ``-vn`` / ``-map`` stream selection
6. rate control (``-crf`` or ``-b:v/-maxrate/-bufsize``, ``-b:a``)
7. ``-y`` and the destination path
"""

from __future__ import annotations

import math
from pathlib import Path

from ffconv.core.formatting import format_fixed, format_number
from ffconv.domain import (
    GifPaletteMode,
    OutputFormat,
    SizeConstraintMode,
    SourceDescriptor,
    TranscodeOptions,
)

from .durations import effective_clip_duration
from .filter_graph import Filter, FilterGraph

# Rate control constants
FALLBACK_CRF = 23
AUDIO_RESERVE_BPS = 128_000
AUDIO_RESERVE_BITRATE = "128k"
MIN_VIDEO_BITRATE_BPS = 100_000
BITS_PER_MEGABYTE = 8 * 1024 * 1024

# Filter graph pad names
VIDEO_PROCESSED_PAD = "v_processed"
VIDEO_PALETTE_PAD = "v_final"
AUDIO_PROCESSED_PAD = "a_processed"

SCALE_FLAGS = "lanczos"

# Thumbnail extraction
THUMBNAIL_OFFSET = "00:00:01"
THUMBNAIL_JPEG_QUALITY = 2


def build_probe_args(source: SourceDescriptor | Path | str) -> list[str]:
    """Build ffprobe arguments that print only the container duration.

    Output is a single bare decimal line, parseable with ``float()``.

    Args:
        source: Media file to probe.

    Returns:
        Argument list (without the ffprobe executable).
    """
    path = source.path if isinstance(source, SourceDescriptor) else Path(source)
    return [
        "-v",
        "error",
        "-show_entries",
        "format=duration",
        "-of",
        "default=noprint_wrappers=1:nokey=1",
        str(path),
    ]


def build_filter_graph(options: TranscodeOptions) -> FilterGraph:
    """Build the filter graph for the given options.

    Stage order is fixed: video speed/scale chain, GIF palette stages, then
    the audio tempo chain. The palette runs after scaling so it is computed
    from the final pixels.

    Args:
        options: Transcode options.

    Returns:
        FilterGraph whose ``video_pad``/``audio_pad`` point at the final pads.
    """
    graph = FilterGraph()
    fmt = options.output_format

    if not fmt.is_audio_only:
        video_filters: list[Filter] = []
        if options.changes_speed:
            pts_scale = format_fixed(1 / options.speed_factor, 2)
            video_filters.append(Filter("setpts", f"{pts_scale}*PTS"))
        height = options.resolution.height
        if height is not None:
            video_filters.append(Filter("scale", f"-2:{height}:flags={SCALE_FLAGS}"))
        graph.add_video_chain(video_filters, VIDEO_PROCESSED_PAD)

        if fmt is OutputFormat.GIF and options.gif_palette_mode is GifPaletteMode.PRO:
            graph.add_palette_stages(VIDEO_PALETTE_PAD)

    if options.keeps_audio and options.changes_speed:
        # atempo handles 0.5-2.0 in a single stage; wider factors are not chained
        graph.add_audio_chain(
            [Filter("atempo", format_number(options.speed_factor))],
            AUDIO_PROCESSED_PAD,
        )

    return graph


def build_stream_map_args(options: TranscodeOptions, graph: FilterGraph) -> list[str]:
    """Build ``-vn``/``-map`` arguments selecting the final pads.

    Args:
        options: Transcode options.
        graph: Filter graph produced by ``build_filter_graph``.

    Returns:
        Stream selection arguments.
    """
    args: list[str] = []
    if options.output_format.is_audio_only:
        args.append("-vn")
        args.extend(["-map", graph.audio_pad.map_label])
        return args

    args.extend(["-map", graph.video_pad.map_label])
    if options.keeps_audio:
        args.extend(["-map", graph.audio_pad.map_label])
    return args


def compute_target_video_bitrate(
    target_size_mb: float,
    duration_seconds: float,
    keep_audio: bool,
) -> int | None:
    """Compute the video bitrate that fits a size budget.

    Args:
        target_size_mb: Desired file size in MiB.
        duration_seconds: Output clip length.
        keep_audio: Reserve ``AUDIO_RESERVE_BPS`` for the audio stream.

    Returns:
        Video bitrate in bits per second (never below
        ``MIN_VIDEO_BITRATE_BPS``), or None when duration or size is not a
        positive finite number.
    """
    for value in (duration_seconds, target_size_mb):
        if not math.isfinite(value) or value <= 0:
            return None
    total_bps = math.floor(target_size_mb * BITS_PER_MEGABYTE / duration_seconds)
    video_bps = total_bps - (AUDIO_RESERVE_BPS if keep_audio else 0)
    return max(video_bps, MIN_VIDEO_BITRATE_BPS)


def build_rate_control_args(
    options: TranscodeOptions,
    known_duration: float = 0.0,
) -> list[str]:
    """Build quality/bitrate arguments.

    - Lossy audio-only formats: ``-b:a <kbps>k``.
    - Lossless audio-only formats and GIF: nothing.
    - Constant quality: ``-crf <value>``.
    - Target size: ``-b:v``/``-maxrate``/``-bufsize`` (plus ``-b:a 128k`` when
      audio is kept), falling back to ``-crf 23`` when the clip length is
      unknown or the size is not positive.

    Args:
        options: Transcode options.
        known_duration: Probed source duration in seconds (0 = unknown).

    Returns:
        Rate control arguments.
    """
    fmt = options.output_format
    if fmt.is_audio_only:
        if fmt.is_lossy_audio:
            return ["-b:a", f"{options.audio_bitrate_kbps}k"]
        return []
    if fmt is OutputFormat.GIF:
        return []

    if options.size_constraint_mode is not SizeConstraintMode.TARGET_SIZE:
        return ["-crf", str(options.quality_crf)]

    keep_audio = options.keeps_audio
    video_bps = compute_target_video_bitrate(
        options.target_size_mb,
        effective_clip_duration(options, known_duration),
        keep_audio,
    )
    if video_bps is None:
        return ["-crf", str(FALLBACK_CRF)]

    args = [
        "-b:v",
        str(video_bps),
        "-maxrate",
        str(video_bps),
        "-bufsize",
        str(video_bps * 2),
    ]
    if keep_audio:
        args.extend(["-b:a", AUDIO_RESERVE_BITRATE])
    return args


def build_encoder_args(
    source: SourceDescriptor,
    options: TranscodeOptions,
    destination: Path | str,
    known_duration: float | None = None,
) -> list[str]:
    """Build the complete ffmpeg argument list for a transcode.

    Args:
        source: Input media.
        options: Transcode options.
        destination: Output file path.
        known_duration: Source duration in seconds. Defaults to the duration
            carried by ``source``.

    Returns:
        Argument list (without the ffmpeg executable). The overwrite flag and
        destination are always last.
    """
    duration = source.duration_seconds if known_duration is None else known_duration
    args: list[str] = []

    if options.trim_start_seconds > 0:
        args.extend(["-ss", format_number(options.trim_start_seconds)])

    args.extend(["-i", str(source.path)])

    clip = options.clip_duration_seconds
    if clip is not None:
        args.extend(["-t", format_number(clip)])

    graph = build_filter_graph(options)
    if not graph.is_empty:
        args.extend(["-filter_complex", graph.serialize()])

    args.extend(build_stream_map_args(options, graph))
    args.extend(build_rate_control_args(options, duration))

    args.extend(["-y", str(destination)])
    return args


def build_thumbnail_args(
    source: SourceDescriptor | Path | str,
    output_path: Path | str,
    offset: str = THUMBNAIL_OFFSET,
) -> list[str]:
    """Build ffmpeg arguments that extract a single JPEG frame.

    Args:
        source: Input media.
        output_path: Where to write the frame.
        offset: Seek position (``HH:MM:SS``).

    Returns:
        Argument list (without the ffmpeg executable).
    """
    path = source.path if isinstance(source, SourceDescriptor) else Path(source)
    return [
        "-y",
        "-ss",
        offset,
        "-i",
        str(path),
        "-vframes",
        "1",
        "-q:v",
        str(THUMBNAIL_JPEG_QUALITY),
        str(output_path),
    ]


def default_output_path(source: Path | str, output_format: OutputFormat) -> Path:
    """Suggest ``<stem>_converted.<ext>`` next to the source."""
    src = Path(source)
    return src.with_name(f"{src.stem}_converted.{output_format.extension}")

