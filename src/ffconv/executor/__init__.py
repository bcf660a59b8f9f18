"""External process execution: tool lookup, probing, encoding, thumbnails."""

from .encoder import DEFAULT_CANCEL_GRACE_SECONDS, EncoderError, EncoderProcess
from .probe import DEFAULT_PROBE_TIMEOUT, ProbeError, parse_probe_output, probe_duration
from .thumbnail import ThumbnailError, generate_thumbnail
from .tools import (
    SUPPORTED_TOOLS,
    ToolNotFoundError,
    check_tool_availability,
    find_tool,
    refresh_tool_paths,
    require_tool,
)

__all__ = [
    "DEFAULT_CANCEL_GRACE_SECONDS",
    "DEFAULT_PROBE_TIMEOUT",
    "EncoderError",
    "EncoderProcess",
    "ProbeError",
    "SUPPORTED_TOOLS",
    "ThumbnailError",
    "ToolNotFoundError",
    "check_tool_availability",
    "find_tool",
    "generate_thumbnail",
    "parse_probe_output",
    "probe_duration",
    "refresh_tool_paths",
    "require_tool",
]
