"""``ffconv thumbnail``: extract a preview frame."""

from pathlib import Path

import click

from ffconv.cli.exit_codes import ExitCode
from ffconv.cli.output import error_exit
from ffconv.config import ConfigError, get_config
from ffconv.executor import ThumbnailError, ToolNotFoundError, generate_thumbnail


@click.command("thumbnail")
@click.argument("path", type=click.Path(path_type=Path))
@click.argument("output", type=click.Path(path_type=Path))
@click.option(
    "--offset",
    default=None,
    help="Seek position as HH:MM:SS (default: 00:00:01).",
)
def thumbnail_command(path: Path, output: Path, offset: str | None) -> None:
    """Write one JPEG frame of PATH to OUTPUT."""
    if not path.exists():
        error_exit(f"File not found: {path}", ExitCode.TARGET_NOT_FOUND)

    try:
        jobs_config = get_config().jobs
        generate_thumbnail(
            path,
            output,
            offset=offset or jobs_config.thumbnail_offset,
            timeout=jobs_config.probe_timeout,
        )
    except ConfigError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR)
    except ToolNotFoundError as e:
        error_exit(str(e), ExitCode.TOOL_NOT_AVAILABLE)
    except ThumbnailError as e:
        error_exit(str(e), ExitCode.OPERATION_FAILED)

    click.echo(str(output))
