"""Encoder output telemetry.

Turns raw encoder/prober output lines into structured events:
- timestamps.py: ``HH:MM:SS.ff`` grammar for Duration/time announcements
- events.py: Event types
- interpreter.py: ProgressState transitions and the thread-safe wrapper
- transcript.py: Bounded transcript buffer
"""

from .events import (
    DurationDiscovered,
    LineLogged,
    ProcessCompleted,
    ProgressUpdated,
    TelemetryEvent,
)
from .interpreter import (
    ProgressState,
    TelemetryInterpreter,
    TelemetryPhase,
    interpret_exit,
    interpret_line,
    new_progress_state,
)
from .timestamps import find_duration, find_position, parse_timestamp
from .transcript import DEFAULT_TRANSCRIPT_LINES, TranscriptBuffer

__all__ = [
    # Events
    "DurationDiscovered",
    "LineLogged",
    "ProcessCompleted",
    "ProgressUpdated",
    "TelemetryEvent",
    # Interpreter
    "ProgressState",
    "TelemetryInterpreter",
    "TelemetryPhase",
    "interpret_exit",
    "interpret_line",
    "new_progress_state",
    # Grammar
    "find_duration",
    "find_position",
    "parse_timestamp",
    # Transcript
    "DEFAULT_TRANSCRIPT_LINES",
    "TranscriptBuffer",
]
