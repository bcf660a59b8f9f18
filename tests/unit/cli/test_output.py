"""Tests for cli/output.py module."""

import json
from pathlib import Path

import pytest

from ffconv.cli.exit_codes import ExitCode
from ffconv.cli.output import (
    CLIResult,
    error_exit,
    failure_exit,
    success_output,
    warning_output,
)
from ffconv.jobs import ConversionResult


class TestCLIResult:
    """Tests for CLIResult serialization."""

    def test_success_json(self) -> None:
        result = CLIResult(success=True, message="out.mp4", data={"exit_code": 0})
        parsed = json.loads(result.to_json())
        assert parsed == {"status": "completed", "message": "out.mp4", "exit_code": 0}

    def test_failure_json_carries_error_code(self) -> None:
        result = CLIResult(
            success=False,
            message="ffmpeg exited with code 1",
            exit_code=ExitCode.OPERATION_FAILED,
        )
        parsed = json.loads(result.to_json())
        assert parsed["status"] == "failed"
        assert parsed["error"] == {
            "code": "OPERATION_FAILED",
            "message": "ffmpeg exited with code 1",
        }

    def test_no_job_block_without_job(self) -> None:
        parsed = json.loads(CLIResult(success=True, message="ok").to_json())
        assert "job" not in parsed
        assert "transcript" not in parsed


class TestFromConversion:
    """Tests for CLIResult.from_conversion."""

    def test_success_reports_output_and_job(self) -> None:
        done = ConversionResult(
            success=True,
            exit_code=0,
            output_path=Path("/v/clip_converted.mp4"),
            source_duration=10.0,
            job_id="a1b2",
        )
        report = CLIResult.from_conversion(done, source_path=Path("/v/clip.mov"))

        assert report.success
        assert report.message == "/v/clip_converted.mp4"
        parsed = report.to_dict()
        assert parsed["job"] == {"id": "a1b2", "source": "/v/clip.mov"}
        assert parsed["source_duration"] == 10.0
        assert "job_id" not in parsed

    def test_failure_keeps_transcript_tail(self) -> None:
        failed = ConversionResult(
            success=False,
            exit_code=1,
            output_path=Path("/v/x.mp4"),
            transcript=[f"line {i}" for i in range(15)],
            job_id="a1b2",
        )
        report = CLIResult.from_conversion(failed)

        assert report.exit_code == ExitCode.OPERATION_FAILED
        parsed = report.to_dict()
        assert parsed["error"]["message"] == "ffmpeg exited with code 1"
        assert parsed["transcript"] == [f"line {i}" for i in range(5, 15)]
        assert len(report.transcript) == 15


class TestErrorExit:
    """Tests for error_exit function."""

    def test_human_format_exit(self, capsys) -> None:
        """Human format should print 'Error: message' and exit."""
        with pytest.raises(SystemExit) as exc_info:
            error_exit("Something failed", ExitCode.GENERAL_ERROR, json_output=False)

        assert exc_info.value.code == 1
        assert "Error: Something failed" in capsys.readouterr().err

    def test_json_format_exit(self, capsys) -> None:
        """JSON format should print JSON error and exit."""
        with pytest.raises(SystemExit) as exc_info:
            error_exit("No such file", ExitCode.TARGET_NOT_FOUND, json_output=True)

        assert exc_info.value.code == 20
        parsed = json.loads(capsys.readouterr().err)
        assert parsed["status"] == "failed"
        assert parsed["error"]["code"] == "TARGET_NOT_FOUND"
        assert parsed["error"]["message"] == "No such file"

    def test_int_exit_code(self, capsys) -> None:
        """Plain integers exit with that code and an unknown error name."""
        with pytest.raises(SystemExit) as exc_info:
            error_exit("Failed", 42, json_output=True)

        assert exc_info.value.code == 42
        assert json.loads(capsys.readouterr().err)["error"]["code"] == "UNKNOWN_ERROR"


class TestFailureExit:
    """Tests for failure_exit."""

    def test_text_prints_tail_before_error(self, capsys) -> None:
        result = CLIResult(
            success=False,
            message="ffmpeg exited with code 1",
            exit_code=ExitCode.OPERATION_FAILED,
            transcript=["Unknown encoder 'libx265'", "Conversion failed!"],
        )
        with pytest.raises(SystemExit) as exc_info:
            failure_exit(result)

        assert exc_info.value.code == 40
        assert capsys.readouterr().err.splitlines() == [
            "Unknown encoder 'libx265'",
            "Conversion failed!",
            "Error: ffmpeg exited with code 1",
        ]

    def test_json_carries_job_and_transcript(self, capsys) -> None:
        result = CLIResult(
            success=False,
            message="ffmpeg exited with code 1",
            exit_code=ExitCode.OPERATION_FAILED,
            job_id="a1b2",
            transcript=["Conversion failed!"],
        )
        with pytest.raises(SystemExit):
            failure_exit(result, json_output=True)

        parsed = json.loads(capsys.readouterr().err)
        assert parsed["job"] == {"id": "a1b2"}
        assert parsed["transcript"] == ["Conversion failed!"]


class TestSuccessOutput:
    """Tests for success_output function."""

    def test_human_prints_message(self, capsys) -> None:
        success_output(CLIResult(success=True, message="done", data={"x": 1}))
        assert capsys.readouterr().out == "done\n"

    def test_json_prints_document(self, capsys) -> None:
        success_output(CLIResult(success=True, message="done", data={"x": 1}), True)
        assert json.loads(capsys.readouterr().out)["x"] == 1


class TestWarningOutput:
    """Tests for warning_output function."""

    def test_human_warning_output(self, capsys) -> None:
        warning_output("This is a warning", json_output=False)
        assert "Warning: This is a warning" in capsys.readouterr().err

    def test_json_warning_suppressed(self, capsys) -> None:
        """JSON mode should suppress warning output."""
        warning_output("This is a warning", json_output=True)

        captured = capsys.readouterr()
        assert captured.err == ""
        assert captured.out == ""
