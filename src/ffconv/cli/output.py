"""Result reporting shared by the ffconv commands.

Text mode prints the message, on stdout for success and on stderr for
failure. JSON mode prints a single document; conversion results carry a
``job`` block and failed conversions add the tail of the ffmpeg transcript.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, NoReturn

import click

from .exit_codes import ExitCode

if TYPE_CHECKING:
    from ffconv.jobs import ConversionResult

# Transcript lines reported for a failed conversion
TRANSCRIPT_TAIL_LINES = 10


@dataclass
class CLIResult:
    """What a command reports when it finishes."""

    success: bool
    message: str
    data: dict[str, Any] = field(default_factory=dict)
    exit_code: ExitCode | int = ExitCode.SUCCESS
    job_id: str | None = None
    source_path: Path | None = None
    transcript: list[str] = field(default_factory=list)

    @classmethod
    def from_conversion(
        cls, result: ConversionResult, source_path: Path | None = None
    ) -> CLIResult:
        """Report a finished conversion, successful or not."""
        data = result.to_dict()
        data.pop("job_id", None)
        if result.success:
            return cls(
                success=True,
                message=str(result.output_path),
                data=data,
                job_id=result.job_id or None,
                source_path=source_path,
            )
        return cls(
            success=False,
            message=f"ffmpeg exited with code {result.exit_code}",
            data=data,
            exit_code=ExitCode.OPERATION_FAILED,
            job_id=result.job_id or None,
            source_path=source_path,
            transcript=list(result.transcript),
        )

    def transcript_tail(self) -> list[str]:
        return self.transcript[-TRANSCRIPT_TAIL_LINES:]

    def to_dict(self) -> dict[str, Any]:
        output: dict[str, Any]
        if self.success:
            output = {"status": "completed", "message": self.message}
        else:
            output = {
                "status": "failed",
                "error": {"code": _code_name(self.exit_code), "message": self.message},
            }
        job: dict[str, str] = {}
        if self.job_id:
            job["id"] = self.job_id
        if self.source_path is not None:
            job["source"] = str(self.source_path)
        if job:
            output["job"] = job
        output.update(self.data)
        if not self.success and self.transcript:
            output["transcript"] = self.transcript_tail()
        return output

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


def _code_name(code: ExitCode | int) -> str:
    if isinstance(code, ExitCode):
        return code.name
    return "UNKNOWN_ERROR"


def failure_exit(result: CLIResult, json_output: bool = False) -> NoReturn:
    """Report a failed command on stderr and exit with its code.

    In text mode the transcript tail comes first so the ``Error:`` line is
    the last thing printed.
    """
    if json_output:
        click.echo(result.to_json(), err=True)
    else:
        for line in result.transcript_tail():
            click.echo(line, err=True)
        click.echo(f"Error: {result.message}", err=True)

    sys.exit(int(result.exit_code))


def error_exit(
    message: str,
    code: ExitCode | int,
    json_output: bool = False,
) -> NoReturn:
    """Exit with ``message`` and ``code``; shorthand for failure_exit."""
    failure_exit(CLIResult(success=False, message=message, exit_code=code), json_output)


def success_output(
    result: CLIResult,
    json_output: bool = False,
) -> None:
    if json_output:
        click.echo(result.to_json())
    else:
        click.echo(result.message)


def warning_output(
    message: str,
    json_output: bool = False,
) -> None:
    """Print a warning on stderr; JSON mode stays silent."""
    if not json_output:
        click.echo(f"Warning: {message}", err=True)
