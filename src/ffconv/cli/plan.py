"""``ffconv plan``: show the commands a conversion would run.

Nothing is executed. The source duration used for target-size rate control
comes from ``--duration``; without it the duration is treated as unknown.
"""

import logging
from pathlib import Path

import click

from ffconv.cli.exit_codes import ExitCode
from ffconv.cli.options import build_options, transcode_options
from ffconv.cli.output import CLIResult, error_exit, success_output, warning_output
from ffconv.core.formatting import format_command
from ffconv.domain import SourceDescriptor
from ffconv.options import OptionsValidationError, dump_preset, validate_options
from ffconv.synthesis import build_encoder_args, build_probe_args, default_output_path

logger = logging.getLogger(__name__)


@click.command("plan")
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
    "--duration",
    type=float,
    default=0.0,
    help="Known source duration in seconds (0 = unknown).",
)
@click.option(
    "--save-preset",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the effective options to a YAML preset.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output result as JSON",
)
def plan_command(
    path: Path,
    preset: Path | None,
    output_path: Path | None,
    duration: float,
    save_preset: Path | None,
    json_output: bool,
    **flags: object,
) -> None:
    """Print the ffprobe and ffmpeg commands for converting PATH."""
    try:
        options = build_options(preset, **flags)  # type: ignore[arg-type]
    except FileNotFoundError as e:
        error_exit(str(e), ExitCode.TARGET_NOT_FOUND, json_output)
    except OptionsValidationError as e:
        error_exit(str(e), ExitCode.OPTIONS_VALIDATION_ERROR, json_output)

    source = SourceDescriptor(path, max(duration, 0.0))
    destination = output_path or default_output_path(path, options.output_format)

    issues = validate_options(options, source.duration_seconds)
    for issue in issues:
        warning_output(str(issue), json_output)

    probe_args = build_probe_args(source)
    encode_args = build_encoder_args(source, options, destination)
    logger.debug("Planned %d encoder arguments for %s", len(encode_args), path)

    if save_preset is not None:
        try:
            save_preset.write_text(dump_preset(options), encoding="utf-8")
        except OSError as e:
            error_exit(
                f"Could not write preset {save_preset}: {e}",
                ExitCode.GENERAL_ERROR,
                json_output,
            )
        logger.info("Saved preset to %s", save_preset)

    success_output(
        CLIResult(
            success=True,
            message="\n".join(
                [
                    format_command("ffprobe", probe_args),
                    format_command("ffmpeg", encode_args),
                ]
            ),
            data={
                "probe": probe_args,
                "encode": encode_args,
                "output_path": str(destination),
                "issues": [str(issue) for issue in issues],
            },
        ),
        json_output,
    )
