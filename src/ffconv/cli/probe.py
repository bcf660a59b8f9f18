"""``ffconv probe``: report a source file's duration."""

import logging
from pathlib import Path

import click

from ffconv.cli.exit_codes import ExitCode
from ffconv.cli.output import CLIResult, error_exit, success_output
from ffconv.config import ConfigError, get_config
from ffconv.core.formatting import format_clock
from ffconv.executor import ProbeError, ToolNotFoundError, probe_duration

logger = logging.getLogger(__name__)


@click.command("probe")
@click.argument("path", type=click.Path(path_type=Path))
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output result as JSON",
)
def probe_command(path: Path, json_output: bool) -> None:
    """Print the duration of PATH in seconds."""
    if not path.exists():
        error_exit(f"File not found: {path}", ExitCode.TARGET_NOT_FOUND, json_output)

    try:
        timeout = get_config().jobs.probe_timeout
        duration = probe_duration(path, timeout=timeout)
    except ConfigError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR, json_output)
    except ToolNotFoundError as e:
        error_exit(str(e), ExitCode.TOOL_NOT_AVAILABLE, json_output)
    except ProbeError as e:
        error_exit(str(e), ExitCode.PROBE_FAILED, json_output)

    success_output(
        CLIResult(
            success=True,
            message=f"{duration:g} ({format_clock(duration)})",
            data={"path": str(path), "duration_seconds": duration},
        ),
        json_output,
    )
