"""Single-frame thumbnail extraction."""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - needed for TimeoutExpired
from pathlib import Path

from ffconv.core.subprocess_utils import run_command
from ffconv.domain import SourceDescriptor
from ffconv.synthesis import build_thumbnail_args
from ffconv.synthesis.command import THUMBNAIL_OFFSET

from .tools import require_tool

logger = logging.getLogger(__name__)


class ThumbnailError(Exception):
    """Raised when a thumbnail could not be produced."""


def generate_thumbnail(
    source: SourceDescriptor | Path | str,
    output_path: Path,
    offset: str = THUMBNAIL_OFFSET,
    timeout: float | None = 60,
) -> Path:
    """Extract one frame from ``source`` into ``output_path``.

    Args:
        source: Input media.
        output_path: JPEG destination (overwritten if present).
        offset: Seek position (``HH:MM:SS``).
        timeout: Seconds before the extraction is abandoned.

    Returns:
        ``output_path``.

    Raises:
        ToolNotFoundError: If ffmpeg is not available.
        ThumbnailError: If ffmpeg fails or writes nothing.
    """
    ffmpeg = require_tool("ffmpeg")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    args = build_thumbnail_args(source, output_path, offset=offset)

    try:
        _, stderr, returncode = run_command([ffmpeg, *args], timeout=timeout)
    except subprocess.TimeoutExpired as e:
        raise ThumbnailError(f"Thumbnail extraction timed out after {timeout}s") from e
    except OSError as e:
        raise ThumbnailError(f"Could not run ffmpeg: {e}") from e

    if returncode != 0:
        raise ThumbnailError(
            f"Thumbnail extraction failed with code {returncode}: "
            f"{stderr.strip()[-200:]}"
        )
    if not output_path.exists() or output_path.stat().st_size == 0:
        raise ThumbnailError(f"ffmpeg produced no thumbnail at {output_path}")

    logger.debug("Wrote thumbnail %s", output_path)
    return output_path
