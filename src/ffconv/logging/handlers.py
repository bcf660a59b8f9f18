"""JSON log lines for ffconv.

Each record becomes one JSON object per line, for example::

    {"time": "2024-05-01T10:00:00.123+00:00", "level": "INFO",
     "logger": "ffconv.jobs.runner", "message": "Progress: 50%",
     "job": {"id": "a1b2c3d4", "source": "/videos/in.mov"}}

Attributes passed with ``extra=`` are collected under ``"extra"``.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord carries; anything else came from extra= or a filter
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

# Set by JobContextFilter and reported under "job"
_JOB_ATTRS = frozenset({"job_id", "source_path", "job_tag"})


def _job_fields(record: logging.LogRecord) -> dict[str, str]:
    job: dict[str, str] = {}
    job_id = getattr(record, "job_id", None)
    source = getattr(record, "source_path", None)
    if job_id:
        job["id"] = job_id
    if source:
        job["source"] = source
    return job


class JSONFormatter(logging.Formatter):
    """Render log records as single-line JSON objects tagged with their job."""

    def formatTime(  # noqa: N802 - overrides logging.Formatter
        self, record: logging.LogRecord, datefmt: str | None = None
    ) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return created.isoformat(timespec="milliseconds")

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        job = _job_fields(record)
        if job:
            entry["job"] = job

        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS
            and key not in _JOB_ATTRS
            and not key.startswith("_")
        }
        if extra:
            entry["extra"] = extra

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
