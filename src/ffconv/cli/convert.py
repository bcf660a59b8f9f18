"""``ffconv convert``: run a conversion with live progress."""

import logging
from pathlib import Path

import click

from ffconv.cli.exit_codes import ExitCode
from ffconv.cli.options import build_options, transcode_options
from ffconv.cli.output import (
    CLIResult,
    error_exit,
    failure_exit,
    success_output,
    warning_output,
)
from ffconv.config import ConfigError, get_config
from ffconv.executor import EncoderError, ToolNotFoundError
from ffconv.jobs import ConversionJob, NullProgressReporter, StderrProgressReporter
from ffconv.options import OptionsValidationError, validate_options

logger = logging.getLogger(__name__)


@click.command("convert")
@click.argument("path", type=click.Path(path_type=Path))
@transcode_options
@click.option(
    "--preset",
    type=click.Path(path_type=Path),
    default=None,
    help="YAML preset with option defaults.",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Destination file (default: <name>_converted.<ext> beside PATH).",
)
@click.option(
    "--force",
    is_flag=True,
    help="Run even when options fail validation.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Echo encoder output while converting.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output result as JSON (disables progress display)",
)
def convert_command(
    path: Path,
    preset: Path | None,
    output_path: Path | None,
    force: bool,
    verbose: bool,
    json_output: bool,
    **flags: object,
) -> None:
    """Convert PATH with ffmpeg.

    Exit codes:
      0  - Conversion succeeded
      10 - Options failed validation (use --force to run anyway)
      20 - Source or preset not found
      30 - ffmpeg/ffprobe not available
      40 - ffmpeg exited with an error
    """
    if not path.exists():
        error_exit(f"File not found: {path}", ExitCode.TARGET_NOT_FOUND, json_output)

    try:
        options = build_options(preset, **flags)  # type: ignore[arg-type]
        jobs_config = get_config().jobs
    except FileNotFoundError as e:
        error_exit(str(e), ExitCode.TARGET_NOT_FOUND, json_output)
    except OptionsValidationError as e:
        error_exit(str(e), ExitCode.OPTIONS_VALIDATION_ERROR, json_output)
    except ConfigError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR, json_output)

    reporter = (
        NullProgressReporter()
        if json_output
        else StderrProgressReporter(show_transcript=verbose)
    )
    job = ConversionJob(
        path,
        options,
        destination=output_path,
        reporter=reporter,
        transcript_lines=jobs_config.transcript_lines,
        probe_timeout=jobs_config.probe_timeout,
        cancel_grace_seconds=jobs_config.cancel_grace_seconds,
    )

    try:
        duration = job.resolve_duration()
    except ToolNotFoundError as e:
        error_exit(str(e), ExitCode.TOOL_NOT_AVAILABLE, json_output)

    issues = validate_options(options, duration)
    if issues:
        message = "; ".join(str(issue) for issue in issues)
        if not force:
            error_exit(
                f"Invalid options: {message}",
                ExitCode.OPTIONS_VALIDATION_ERROR,
                json_output,
            )
        warning_output(f"Running with invalid options: {message}", json_output)

    try:
        result = job.run()
    except KeyboardInterrupt:
        error_exit("Conversion interrupted", ExitCode.INTERRUPTED, json_output)
    except ToolNotFoundError as e:
        error_exit(str(e), ExitCode.TOOL_NOT_AVAILABLE, json_output)
    except EncoderError as e:
        error_exit(str(e), ExitCode.OPERATION_FAILED, json_output)

    report = CLIResult.from_conversion(result, source_path=path)
    if not report.success:
        failure_exit(report, json_output)
    success_output(report, json_output)
