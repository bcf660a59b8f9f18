"""Source duration probing via ffprobe."""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - needed for TimeoutExpired
from pathlib import Path

from ffconv.core.subprocess_utils import run_command
from ffconv.domain import SourceDescriptor
from ffconv.synthesis import build_probe_args

from .tools import require_tool

logger = logging.getLogger(__name__)

DEFAULT_PROBE_TIMEOUT = 60


class ProbeError(Exception):
    """Raised when the duration of a source cannot be determined."""

    def __init__(self, message: str, exit_code: int | None = None) -> None:
        self.exit_code = exit_code
        super().__init__(message)


def parse_probe_output(stdout: str) -> float:
    """Parse the single-number output of the duration probe.

    Args:
        stdout: ffprobe standard output.

    Returns:
        Duration in seconds.

    Raises:
        ProbeError: If the output is not a finite, non-negative number.
    """
    text = stdout.strip()
    try:
        duration = float(text)
    except ValueError as e:
        raise ProbeError(f"Unexpected ffprobe output: {text!r}") from e
    if duration != duration or duration < 0 or duration == float("inf"):
        raise ProbeError(f"Unexpected ffprobe duration: {text!r}")
    return duration


def probe_duration(
    source: SourceDescriptor | Path | str,
    timeout: float | None = DEFAULT_PROBE_TIMEOUT,
) -> float:
    """Ask ffprobe for the container duration of ``source``.

    Args:
        source: Media file to probe.
        timeout: Seconds before the probe is abandoned.

    Returns:
        Duration in seconds.

    Raises:
        ToolNotFoundError: If ffprobe is not available.
        ProbeError: If ffprobe fails, times out or prints something other
            than a number.
    """
    ffprobe = require_tool("ffprobe")
    args = build_probe_args(source)

    try:
        stdout, stderr, returncode = run_command([ffprobe, *args], timeout=timeout)
    except subprocess.TimeoutExpired as e:
        raise ProbeError(f"ffprobe timed out after {timeout}s") from e
    except OSError as e:
        raise ProbeError(f"Could not run ffprobe: {e}") from e

    if returncode != 0:
        detail = stderr.strip().splitlines()[-1] if stderr.strip() else ""
        raise ProbeError(
            f"ffprobe exited with code {returncode}"
            + (f": {detail}" if detail else ""),
            exit_code=returncode,
        )

    duration = parse_probe_output(stdout)
    logger.debug("Probed duration %.3fs for %s", duration, args[-1])
    return duration
