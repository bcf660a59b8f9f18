"""Core utilities package.

Pure helpers with no ffconv dependencies: number/time formatting and the
standard subprocess wrapper.
"""

from ffconv.core.formatting import (
    format_clock,
    format_command,
    format_file_size,
    format_fixed,
    format_number,
)
from ffconv.core.subprocess_utils import run_command

__all__ = [
    "format_clock",
    "format_command",
    "format_file_size",
    "format_fixed",
    "format_number",
    "run_command",
]
