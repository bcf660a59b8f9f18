"""Structured events emitted by the telemetry interpreter."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LineLogged:
    """A raw output line, emitted for every line received."""

    line: str


@dataclass(frozen=True)
class DurationDiscovered:
    """The total duration became known."""

    seconds: float


@dataclass(frozen=True)
class ProgressUpdated:
    """Completion fraction changed.

    ``logged`` is set on the updates that cross into a new 10% band; callers
    that write progress to a log should only do so for those.
    """

    fraction: float
    percent: int
    logged: bool = False


@dataclass(frozen=True)
class ProcessCompleted:
    """The subprocess exited."""

    exit_code: int

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


TelemetryEvent = LineLogged | DurationDiscovered | ProgressUpdated | ProcessCompleted
