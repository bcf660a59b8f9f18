"""Bounded transcript of process output lines."""

from __future__ import annotations

import threading
from collections import deque

DEFAULT_TRANSCRIPT_LINES = 100


class TranscriptBuffer:
    """Keeps the most recent ``max_lines`` lines of a job transcript."""

    def __init__(self, max_lines: int = DEFAULT_TRANSCRIPT_LINES) -> None:
        if max_lines < 1:
            raise ValueError(f"max_lines must be positive, got {max_lines}")
        self._lines: deque[str] = deque(maxlen=max_lines)
        self._lock = threading.Lock()

    @property
    def max_lines(self) -> int:
        return self._lines.maxlen or 0

    def append(self, line: str) -> None:
        with self._lock:
            self._lines.append(line)

    def clear(self) -> None:
        with self._lock:
            self._lines.clear()

    def lines(self) -> list[str]:
        """Snapshot of the retained lines, oldest first."""
        with self._lock:
            return list(self._lines)

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)
