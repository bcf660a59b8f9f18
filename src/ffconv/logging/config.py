"""Root logger setup for ffconv.

Progress lines reach the terminal through the job's progress reporter, so
log output goes to a rotating file when one is configured and to stderr
otherwise (or additionally, with ``include_stderr``).
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from ffconv.logging.context import JobContextFilter
from ffconv.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from ffconv.config.models import LoggingConfig

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(job_tag)s%(name)s: %(message)s"


def _build_formatter(config: LoggingConfig) -> logging.Formatter:
    if config.format.lower() == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def _open_log_file(config: LoggingConfig) -> logging.Handler | None:
    """Rotating handler for ``config.file``; None (with a warning) on failure."""
    log_path = Path(config.file).expanduser() if config.file else None
    if log_path is None:
        return None
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            log_path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"Warning: Could not open log file {log_path}: {e}\n")
        return None


def configure_logging(config: LoggingConfig) -> list[logging.Handler]:
    """Replace the root logger's handlers according to ``config``.

    Every handler tags records with the current job (see ``job_context``).

    Args:
        config: Logging configuration.

    Returns:
        The handlers installed on the root logger.
    """
    handlers: list[logging.Handler] = []
    file_handler = _open_log_file(config)
    if file_handler is not None:
        handlers.append(file_handler)
    if config.include_stderr or file_handler is None:
        handlers.append(logging.StreamHandler(sys.stderr))

    formatter = _build_formatter(config)
    job_filter = JobContextFilter()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(job_filter)

    root = logging.getLogger()
    for old in root.handlers[:]:
        root.removeHandler(old)
    root.setLevel(getattr(logging, config.level.upper()))
    for handler in handlers:
        root.addHandler(handler)
    return handlers
