"""Incremental interpretation of encoder output.

The interpreter is a pure state transition: ``interpret_line`` takes the
current ``ProgressState`` and one raw line and returns the next state plus
the events the line produced. Nothing is buffered, so it can run once per
line as output arrives. ``TelemetryInterpreter`` wraps one state per job for
callers that feed lines from a reader thread.

Phases::

    AWAITING_DURATION --Duration: seen--> TRACKING --exit--> FINISHED
"""

from __future__ import annotations

import dataclasses
import logging
import math
import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .events import (
    DurationDiscovered,
    LineLogged,
    ProcessCompleted,
    ProgressUpdated,
    TelemetryEvent,
)
from .timestamps import find_duration, find_position

logger = logging.getLogger(__name__)

# Logged progress lines are limited to one per 10% band
LOG_BAND_PERCENT = 10


class TelemetryPhase(Enum):
    """Lifecycle of a single job's telemetry."""

    AWAITING_DURATION = "awaiting_duration"
    TRACKING = "tracking"
    FINISHED = "finished"


@dataclass(frozen=True)
class ProgressState:
    """Progress of one job. Replaced, never mutated."""

    total_duration_seconds: float = 0.0
    """Duration used as the 100% mark (0 until known)."""

    last_logged_decile: int = 0
    """Last percentage band (0, 10, ... 100) reported with ``logged=True``."""

    current_fraction: float = 0.0
    """Completion in [0, 1]; never decreases within a job."""

    phase: TelemetryPhase = TelemetryPhase.AWAITING_DURATION

    exit_code: int | None = None
    """Process exit code once finished."""

    @property
    def percent(self) -> int:
        return _round_percent(self.current_fraction)

    @property
    def is_finished(self) -> bool:
        return self.phase is TelemetryPhase.FINISHED


def new_progress_state(expected_duration: float = 0.0) -> ProgressState:
    """Create the state for a new job.

    Args:
        expected_duration: Output duration known ahead of time (e.g. a
            trimmed clip). When positive, tracking starts immediately and
            ``Duration:`` announcements are ignored.

    Returns:
        Fresh ProgressState at 0%.
    """
    if expected_duration > 0:
        return ProgressState(
            total_duration_seconds=expected_duration,
            phase=TelemetryPhase.TRACKING,
        )
    return ProgressState()


def interpret_line(
    state: ProgressState, line: str
) -> tuple[ProgressState, list[TelemetryEvent]]:
    """Advance ``state`` by one raw output line.

    The duration announcement is evaluated before the position announcement,
    so a line carrying both starts tracking and reports progress at once.
    Lines that match nothing only produce a ``LineLogged`` event.

    Args:
        state: Current progress state.
        line: One line of encoder or prober output.

    Returns:
        Tuple of (next state, events in emission order).
    """
    text = line.rstrip("\r\n")
    events: list[TelemetryEvent] = [LineLogged(text)]

    if state.phase is TelemetryPhase.FINISHED:
        return state, events

    if state.phase is TelemetryPhase.AWAITING_DURATION:
        duration = find_duration(text)
        if duration is not None and duration > 0:
            state = dataclasses.replace(
                state,
                total_duration_seconds=duration,
                phase=TelemetryPhase.TRACKING,
            )
            events.append(DurationDiscovered(duration))

    if state.phase is TelemetryPhase.TRACKING:
        position = find_position(text)
        if position is not None:
            state, update = _apply_position(state, position)
            events.append(update)

    return state, events


def interpret_exit(
    state: ProgressState, exit_code: int
) -> tuple[ProgressState, list[TelemetryEvent]]:
    """Finish the job with the subprocess exit code.

    A zero exit forces progress to 100%. Finishing twice is a no-op.

    Args:
        state: Current progress state.
        exit_code: Subprocess return code.

    Returns:
        Tuple of (finished state, events).
    """
    if state.phase is TelemetryPhase.FINISHED:
        return state, []

    events: list[TelemetryEvent] = []
    if exit_code == 0:
        logged = state.last_logged_decile < 100
        state = dataclasses.replace(
            state,
            current_fraction=1.0,
            last_logged_decile=100,
        )
        events.append(ProgressUpdated(1.0, 100, logged=logged))

    state = dataclasses.replace(
        state, phase=TelemetryPhase.FINISHED, exit_code=exit_code
    )
    events.append(ProcessCompleted(exit_code))
    return state, events


def _apply_position(
    state: ProgressState, position: float
) -> tuple[ProgressState, ProgressUpdated]:
    fraction = min(1.0, max(0.0, position / state.total_duration_seconds))
    fraction = max(fraction, state.current_fraction)
    percent = _round_percent(fraction)
    decile = percent - percent % LOG_BAND_PERCENT

    logged = decile > state.last_logged_decile
    if logged:
        state = dataclasses.replace(state, last_logged_decile=decile)
    state = dataclasses.replace(state, current_fraction=fraction)
    return state, ProgressUpdated(fraction, percent, logged=logged)


def _round_percent(fraction: float) -> int:
    # Half-up rounding; round() would use banker's rounding
    return int(math.floor(fraction * 100 + 0.5))


class TelemetryInterpreter:
    """Thread-safe holder for one job's ``ProgressState``.

    Lines may be fed from a reader thread while another thread reads
    ``state``. An optional listener receives every event as it is produced.
    """

    def __init__(
        self,
        expected_duration: float = 0.0,
        listener: Callable[[TelemetryEvent], None] | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._state = new_progress_state(expected_duration)
        self._listener = listener

    @property
    def state(self) -> ProgressState:
        with self._lock:
            return self._state

    def reset(self, expected_duration: float = 0.0) -> None:
        """Discard the current state and start a new job."""
        with self._lock:
            self._state = new_progress_state(expected_duration)

    def feed(self, line: str) -> list[TelemetryEvent]:
        """Interpret one line and return its events."""
        with self._lock:
            self._state, events = interpret_line(self._state, line)
        self._dispatch(events)
        return events

    def finish(self, exit_code: int) -> list[TelemetryEvent]:
        """Record the process exit and return the terminal events."""
        with self._lock:
            self._state, events = interpret_exit(self._state, exit_code)
        self._dispatch(events)
        return events

    def _dispatch(self, events: list[TelemetryEvent]) -> None:
        if self._listener is None:
            return
        for event in events:
            try:
                self._listener(event)
            except Exception as e:
                logger.warning("Telemetry listener error: %s", e)
