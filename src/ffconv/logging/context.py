"""Job context for structured logging.

Uses contextvars so every record logged while a job runs carries its id,
including records from the threads the job starts with a copied context.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_job_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "job_id", default=None
)
_source_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "source_path", default=None
)


def set_job_context(job_id: str, source_path: Path | str | None = None) -> None:
    """Set the current job context."""
    _job_id.set(job_id)
    _source_path.set(str(source_path) if source_path is not None else None)


def clear_job_context() -> None:
    """Clear the current job context."""
    _job_id.set(None)
    _source_path.set(None)


@contextmanager
def job_context(
    job_id: str,
    source_path: Path | str | None = None,
) -> Generator[None, None, None]:
    """Set job context on entry and restore the previous one on exit.

    Example:
        with job_context("a1b2c3d4", "/videos/in.mov"):
            logger.info("Starting conversion")  # carries job_id
    """
    old_job_id = _job_id.get()
    old_source_path = _source_path.get()
    try:
        set_job_context(job_id, source_path)
        yield
    finally:
        _job_id.set(old_job_id)
        _source_path.set(old_source_path)


def get_job_context() -> tuple[str | None, str | None]:
    """Return (job_id, source_path); either may be None."""
    return _job_id.get(), _source_path.get()


class JobContextFilter(logging.Filter):
    """Logging filter that injects the job context into log records.

    Adds ``job_id`` and ``source_path`` for JSON output and a compact
    ``job_tag`` such as ``[job a1b2c3d4] `` for text output.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        job_id, source_path = get_job_context()
        record.job_id = job_id
        record.source_path = source_path
        record.job_tag = f"[job {job_id}] " if job_id else ""
        return True
