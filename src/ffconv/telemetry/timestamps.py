"""Timestamp grammar for encoder log lines.

FFmpeg announces the input length as ``Duration: HH:MM:SS.ff`` and the
current output position as ``time=HH:MM:SS.ff``. Only that exact shape is
accepted: hour and minute fields must be two digits and the seconds must
carry a fractional part. Anything else is treated as plain log text.
"""

import re

_TIMESTAMP = r"(\d{2}):(\d{2}):(\d{2}\.\d{2})"

DURATION_PATTERN = re.compile(r"Duration:\s*" + _TIMESTAMP)
POSITION_PATTERN = re.compile(r"time=" + _TIMESTAMP)


def _to_seconds(match: re.Match[str]) -> float:
    hours = int(match.group(1))
    minutes = int(match.group(2))
    seconds = float(match.group(3))
    return hours * 3600 + minutes * 60 + seconds


def parse_timestamp(text: str) -> float | None:
    """Convert a bare ``HH:MM:SS.ff`` string to seconds.

    Args:
        text: Timestamp text.

    Returns:
        Seconds, or None if the text does not follow the grammar.
    """
    match = re.fullmatch(_TIMESTAMP + r"\d*", text.strip())
    if match is None:
        return None
    return _to_seconds(match)


def find_duration(line: str) -> float | None:
    """Return the duration announced on ``line`` in seconds, if any."""
    match = DURATION_PATTERN.search(line)
    if match is None:
        return None
    return _to_seconds(match)


def find_position(line: str) -> float | None:
    """Return the output position announced on ``line`` in seconds, if any."""
    match = POSITION_PATTERN.search(line)
    if match is None:
        return None
    return _to_seconds(match)
