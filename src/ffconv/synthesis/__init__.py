"""Command synthesis for ffprobe/ffmpeg.

Module organization:
- filter_graph.py: Typed filter graph stages and pad references
- durations.py: Clip/output duration arithmetic
- command.py: Probe, encode and thumbnail argument construction

Usage:
    from ffconv.synthesis import build_encoder_args, build_probe_args
"""

from .command import (
    AUDIO_RESERVE_BPS,
    FALLBACK_CRF,
    MIN_VIDEO_BITRATE_BPS,
    build_encoder_args,
    build_filter_graph,
    build_probe_args,
    build_rate_control_args,
    build_stream_map_args,
    build_thumbnail_args,
    compute_target_video_bitrate,
    default_output_path,
)
from .durations import effective_clip_duration, expected_output_duration
from .filter_graph import (
    RAW_AUDIO,
    RAW_VIDEO,
    Filter,
    FilterGraph,
    FilterStage,
    PadRef,
    StageKind,
)

__all__ = [
    # Filter graph
    "Filter",
    "FilterGraph",
    "FilterStage",
    "PadRef",
    "StageKind",
    "RAW_AUDIO",
    "RAW_VIDEO",
    # Durations
    "effective_clip_duration",
    "expected_output_duration",
    # Command building
    "AUDIO_RESERVE_BPS",
    "FALLBACK_CRF",
    "MIN_VIDEO_BITRATE_BPS",
    "build_encoder_args",
    "build_filter_graph",
    "build_probe_args",
    "build_rate_control_args",
    "build_stream_map_args",
    "build_thumbnail_args",
    "compute_target_video_bitrate",
    "default_output_path",
]
