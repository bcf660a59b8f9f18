"""Structured logging module for ffconv.

Provides configurable logging with JSON format support, file rotation and
per-job context injection.
"""

from ffconv.logging.config import configure_logging
from ffconv.logging.context import (
    JobContextFilter,
    clear_job_context,
    get_job_context,
    job_context,
    set_job_context,
)
from ffconv.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "JobContextFilter",
    "clear_job_context",
    "configure_logging",
    "get_job_context",
    "job_context",
    "set_job_context",
]
