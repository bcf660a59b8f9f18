"""External tool resolution.

Tool paths come from configuration (CLI flag, FFCONV_* environment
variable or config file) and fall back to a PATH lookup. Resolved paths are
cached per process; ``refresh_tool_paths()`` forgets them.
"""

from __future__ import annotations

import logging
import os
import shutil
import threading
from pathlib import Path

logger = logging.getLogger(__name__)

SUPPORTED_TOOLS = ("ffmpeg", "ffprobe")

_INSTALL_HINT = (
    "Install FFmpeg (https://ffmpeg.org/download.html) or set "
    "FFCONV_{upper}_PATH / [tools] {name} in the config file."
)

_resolved: dict[str, Path] = {}
_resolved_lock = threading.Lock()


class ToolNotFoundError(RuntimeError):
    """Raised when a required external tool cannot be located."""

    def __init__(self, tool_name: str, message: str | None = None) -> None:
        self.tool_name = tool_name
        super().__init__(
            message
            or f"Required tool not available: {tool_name}. "
            + _INSTALL_HINT.format(upper=tool_name.upper(), name=tool_name)
        )


def _configured_path(tool_name: str) -> Path | None:
    from ffconv.config import get_config

    config = get_config()
    return getattr(config.tools, tool_name, None)


def _is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def find_tool(tool_name: str) -> Path | None:
    """Locate a tool without raising.

    Args:
        tool_name: ``ffmpeg`` or ``ffprobe``.

    Returns:
        Path to the executable, or None if unavailable.
    """
    configured = _configured_path(tool_name)
    if configured is not None:
        if _is_executable(configured):
            return configured
        logger.warning(
            "Configured %s path is not executable: %s; falling back to PATH",
            tool_name,
            configured,
        )

    found = shutil.which(tool_name)
    return Path(found) if found else None


def require_tool(tool_name: str) -> Path:
    """Get path to a required tool.

    Args:
        tool_name: ``ffmpeg`` or ``ffprobe``.

    Returns:
        Path to the tool executable.

    Raises:
        ToolNotFoundError: If the tool is not available.
    """
    if tool_name not in SUPPORTED_TOOLS:
        raise ValueError(f"Unsupported tool: {tool_name}")

    with _resolved_lock:
        cached = _resolved.get(tool_name)
    if cached is not None:
        return cached

    path = find_tool(tool_name)
    if path is None:
        raise ToolNotFoundError(tool_name)

    logger.debug("Resolved %s to %s", tool_name, path)
    with _resolved_lock:
        _resolved[tool_name] = path
    return path


def refresh_tool_paths() -> None:
    """Forget cached tool paths."""
    with _resolved_lock:
        _resolved.clear()


def check_tool_availability() -> dict[str, Path | None]:
    """Map each supported tool to its location, or None when missing."""
    return {name: find_tool(name) for name in SUPPORTED_TOOLS}
