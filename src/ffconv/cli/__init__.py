"""CLI module for ffconv."""

import logging
from pathlib import Path

import click

from ffconv.cli.exit_codes import ExitCode
from ffconv.cli.output import error_exit

_logging_configured: bool = False

logger = logging.getLogger(__name__)


def _configure_logging(
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from CLI options.

    Args:
        log_level: Override log level (debug, info, warning, error).
        log_file: Override log file path.
        log_json: Use JSON log format.
    """
    global _logging_configured
    if _logging_configured:
        return

    from ffconv.config.logging_factory import configure_logging_from_cli

    configure_logging_from_cli(level=log_level, file=log_file, json_format=log_json)
    _logging_configured = True


@click.group()
@click.version_option(package_name="ffconv")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
def main(
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """ffconv - Convert, trim, resize and compress media with ffmpeg."""
    from ffconv.config import ConfigError

    try:
        _configure_logging(log_level, log_file, log_json)
    except (ConfigError, ValueError) as e:
        error_exit(f"Invalid logging configuration: {e}", ExitCode.CONFIG_ERROR)


# Defer import to avoid circular dependency
def _register_commands():
    from ffconv.cli.convert import convert_command
    from ffconv.cli.doctor import doctor_command
    from ffconv.cli.plan import plan_command
    from ffconv.cli.probe import probe_command
    from ffconv.cli.thumbnail import thumbnail_command

    main.add_command(probe_command)
    main.add_command(plan_command)
    main.add_command(convert_command)
    main.add_command(thumbnail_command)
    main.add_command(doctor_command)


_register_commands()
