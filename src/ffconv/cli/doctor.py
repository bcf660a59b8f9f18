"""``ffconv doctor``: report whether ffmpeg and ffprobe can be found."""

from pathlib import Path

import click

from ffconv.cli.exit_codes import ExitCode
from ffconv.cli.output import CLIResult, error_exit, success_output
from ffconv.config import ConfigError
from ffconv.executor import check_tool_availability, refresh_tool_paths


def _format_status(path: Path | None) -> str:
    return str(path) if path is not None else "not found"


@click.command("doctor")
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output results as JSON",
)
def doctor_command(json_output: bool) -> None:
    """Check external tool availability.

    Exit codes:
      0  - ffmpeg and ffprobe are available
      30 - At least one tool is missing
    """
    refresh_tool_paths()
    try:
        tools = check_tool_availability()
    except ConfigError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR, json_output)

    lines = [f"{name}: {_format_status(path)}" for name, path in tools.items()]
    data = {name: str(path) if path else None for name, path in tools.items()}
    missing = [name for name, path in tools.items() if path is None]
    if missing:
        if not json_output:
            click.echo("\n".join(lines))
        error_exit(
            f"Missing tools: {', '.join(missing)}",
            ExitCode.TOOL_NOT_AVAILABLE,
            json_output,
        )

    success_output(
        CLIResult(success=True, message="\n".join(lines), data={"tools": data}),
        json_output,
    )
