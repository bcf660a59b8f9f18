"""Progress reporting abstraction for conversion jobs.

This module provides a unified protocol for progress reporting across
different execution contexts (interactive CLI, quiet/JSON CLI, tests).
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import Protocol, TextIO

logger = logging.getLogger(__name__)


class ProgressReporter(Protocol):
    """Protocol for progress reporting during a conversion.

    Implementations provide context-specific progress display:
    - CLI: in-place stderr progress line
    - Tests: null/silent reporter
    """

    def on_start(self, description: str) -> None:
        """Signal that the encode is starting.

        Args:
            description: Short description of the job (source -> destination).
        """
        ...

    def on_progress(self, percent: int, message: str = "") -> None:
        """Update progress percentage.

        Args:
            percent: Progress percentage (0-100).
            message: Optional status message.
        """
        ...

    def on_log(self, line: str) -> None:
        """Receive one raw transcript line from the encoder.

        Args:
            line: Line text without trailing newline.
        """
        ...

    def on_complete(self, success: bool, exit_code: int) -> None:
        """Signal that the encoder process has exited.

        Args:
            success: Whether the encode succeeded.
            exit_code: Process exit code.
        """
        ...


class StderrProgressReporter:
    """Progress reporter that writes to stderr with in-place updates.

    Transcript lines are not echoed unless ``show_transcript`` is set; they
    are always available from the job result.
    """

    def __init__(
        self,
        enabled: bool = True,
        show_transcript: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        """Initialize stderr progress reporter.

        Args:
            enabled: If False, suppresses output (for JSON mode or tests).
            show_transcript: Echo raw encoder lines as they arrive.
            stream: Output stream, defaults to ``sys.stderr``.
        """
        self.enabled = enabled
        self.show_transcript = show_transcript
        self.stream = stream
        self.description = ""
        self.percent = 0
        self._lock = threading.Lock()

    def _out(self) -> TextIO:
        return self.stream if self.stream is not None else sys.stderr

    def on_start(self, description: str) -> None:
        """Reset state and show the initial line."""
        with self._lock:
            self.description = description
            self.percent = 0
        self._update_display()

    def on_progress(self, percent: int, message: str = "") -> None:
        """Redraw the progress line if the percentage moved."""
        with self._lock:
            if percent < self.percent:
                logger.debug(
                    "Progress went backwards (%d -> %d); ignoring",
                    self.percent,
                    percent,
                )
                return
            changed = percent != self.percent
            self.percent = percent
        if changed:
            self._update_display()

    def on_log(self, line: str) -> None:
        """Echo a transcript line above the progress line."""
        if not (self.enabled and self.show_transcript):
            return
        out = self._out()
        out.write(f"\r{line}\n")
        out.flush()
        self._update_display()

    def on_complete(self, success: bool, exit_code: int) -> None:
        """Finish the progress line with a newline and status."""
        if not self.enabled:
            return
        status = "done" if success else f"failed (exit code {exit_code})"
        out = self._out()
        out.write(f" {status}\n")
        out.flush()

    def _update_display(self) -> None:
        """Update progress display on stderr."""
        if not self.enabled:
            return

        with self._lock:
            description = self.description
            percent = self.percent

        out = self._out()
        out.write(f"\rConverting {description}: {percent:3d}%")
        out.flush()


class NullProgressReporter:
    """No-op progress reporter for JSON mode or tests.

    All methods are no-ops, suitable for contexts where progress
    reporting is not needed.
    """

    def on_start(self, description: str) -> None:
        """No-op."""
        pass

    def on_progress(self, percent: int, message: str = "") -> None:
        """No-op."""
        pass

    def on_log(self, line: str) -> None:
        """No-op."""
        pass

    def on_complete(self, success: bool, exit_code: int) -> None:
        """No-op."""
        pass
