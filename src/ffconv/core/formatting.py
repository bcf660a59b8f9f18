"""Formatting utilities.

Pure functions that render numbers and durations the way encoder arguments
and terminal output expect them.
"""

import math
import shlex
from decimal import ROUND_HALF_UP, Context, Decimal

# Wide enough to quantize any finite float to a few decimals
_FIXED_CONTEXT = Context(prec=400)


def format_number(value: float) -> str:
    """Render a number without a redundant fractional part.

    Integral values lose their ``.0`` so that ``5.0`` becomes ``"5"`` while
    ``2.5`` stays ``"2.5"``.

    Args:
        value: Number to render.

    Returns:
        Shortest faithful decimal representation.
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_fixed(value: float, decimals: int = 2) -> str:
    """Render a number with a fixed count of decimals (e.g. ``"0.67"``).

    Ties round away from zero, so ``0.625`` renders as ``"0.63"``.
    """
    if not math.isfinite(value):
        return str(value)
    quantum = Decimal(1).scaleb(-decimals)
    fixed = Decimal(repr(value)).quantize(
        quantum, rounding=ROUND_HALF_UP, context=_FIXED_CONTEXT
    )
    return str(fixed)


def format_clock(seconds: float) -> str:
    """Format seconds as ``HH:MM:SS`` for display.

    Negative or non-finite input renders as ``00:00:00``.
    """
    if seconds != seconds or seconds < 0 or seconds == float("inf"):
        return "00:00:00"
    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes.

    Returns:
        Formatted string (e.g., "4.2 GB", "128 MB", "1.5 KB").
    """
    if size_bytes >= 1024**3:
        return f"{size_bytes / (1024**3):.1f} GB"
    elif size_bytes >= 1024**2:
        return f"{size_bytes / (1024**2):.1f} MB"
    elif size_bytes >= 1024:
        return f"{size_bytes / 1024:.1f} KB"
    else:
        return f"{size_bytes} B"


def format_command(program: str, args: list[str]) -> str:
    """Render a command line for logs, quoting arguments that need it."""
    return shlex.join([program, *args])
