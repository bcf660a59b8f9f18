"""Apply the ``ffconv --log-*`` flags on top of the configured logging."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

from ffconv.config.models import LoggingConfig

logger = logging.getLogger(__name__)


def apply_logging_flags(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    json_format: bool = False,
) -> LoggingConfig:
    """Return ``base`` with the command-line logging flags applied.

    Flags left at their defaults keep the configured value. The result is
    validated again, so an unknown level raises ValueError.
    """
    changes: dict[str, object] = {}
    if level:
        changes["level"] = level
    if file is not None:
        changes["file"] = file
    if json_format:
        changes["format"] = "json"
    return dataclasses.replace(base, **changes)


def configure_logging_from_cli(
    *,
    level: str | None = None,
    file: Path | None = None,
    json_format: bool = False,
) -> LoggingConfig:
    """Configure logging for one ``ffconv`` invocation.

    Raises:
        ConfigError: If the config file holds invalid values.
        ValueError: If a flag value is invalid.
    """
    from ffconv.config.loader import get_config
    from ffconv.logging import configure_logging

    config = apply_logging_flags(
        get_config().logging, level=level, file=file, json_format=json_format
    )
    configure_logging(config)
    logger.debug(
        "Logging at %s as %s%s",
        config.level,
        config.format,
        f" to {config.file}" if config.file else "",
    )
    return config
