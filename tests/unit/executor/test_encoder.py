"""Tests for the streaming encoder runner.

A Python one-liner stands in for ffmpeg so that real pipes and exit codes
are exercised.
"""

import sys
import threading
import time
from pathlib import Path

import pytest

from ffconv.executor import EncoderError, EncoderProcess
from ffconv.telemetry import (
    LineLogged,
    ProcessCompleted,
    ProgressUpdated,
    TelemetryInterpreter,
)

PYTHON = Path(sys.executable)

FAKE_ENCODE = (
    "import sys\n"
    "print('Input #0, mov', file=sys.stderr)\n"
    "print('  Duration: 00:00:10.00, start: 0.0', file=sys.stderr)\n"
    "print('frame=1 time=00:00:05.00 bitrate=1k', file=sys.stderr)\n"
    "print('stdout line')\n"
    "sys.exit(int(sys.argv[1]))\n"
)


def _collecting_interpreter():
    events = []
    return TelemetryInterpreter(listener=events.append), events


class TestEncoderProcess:
    """Tests for EncoderProcess."""

    def test_success_streams_lines_and_exit(self) -> None:
        """Lines from both pipes reach the interpreter, then the exit code."""
        interpreter, events = _collecting_interpreter()
        process = EncoderProcess(["-c", FAKE_ENCODE, "0"], interpreter, program=PYTHON)

        assert process.run() == 0

        lines = [e.line for e in events if isinstance(e, LineLogged)]
        assert "  Duration: 00:00:10.00, start: 0.0" in lines
        assert "stdout line" in lines
        assert isinstance(events[-1], ProcessCompleted)
        assert events[-1].succeeded
        fractions = [e.fraction for e in events if isinstance(e, ProgressUpdated)]
        assert 0.5 in fractions
        assert fractions[-1] == 1.0
        assert interpreter.state.is_finished

    def test_failure_exit_code(self) -> None:
        interpreter, events = _collecting_interpreter()
        process = EncoderProcess(["-c", FAKE_ENCODE, "3"], interpreter, program=PYTHON)

        assert process.run() == 3
        assert events[-1] == ProcessCompleted(3)
        assert process.exit_code == 3

    def test_command_prepends_program(self) -> None:
        interpreter, _ = _collecting_interpreter()
        process = EncoderProcess(["-i", "in.mov"], interpreter, program=PYTHON)
        assert process.command == [str(PYTHON), "-i", "in.mov"]

    def test_wait_before_start(self) -> None:
        interpreter, _ = _collecting_interpreter()
        with pytest.raises(EncoderError, match="not started"):
            EncoderProcess([], interpreter, program=PYTHON).wait()

    def test_start_twice(self) -> None:
        interpreter, _ = _collecting_interpreter()
        process = EncoderProcess(["-c", "pass"], interpreter, program=PYTHON)
        process.start()
        try:
            with pytest.raises(EncoderError, match="already started"):
                process.start()
        finally:
            process.wait()

    def test_unrunnable_program(self, tmp_path: Path) -> None:
        interpreter, _ = _collecting_interpreter()
        process = EncoderProcess([], interpreter, program=tmp_path / "missing")
        with pytest.raises(EncoderError, match="Could not start"):
            process.start()

    def test_cancel_terminates(self) -> None:
        """cancel() stops a hung process and wait() returns its exit code."""
        interpreter, events = _collecting_interpreter()
        process = EncoderProcess(
            ["-c", "import time; time.sleep(30)"],
            interpreter,
            program=PYTHON,
            cancel_grace_seconds=2.0,
        )
        process.start()
        assert process.running

        canceller = threading.Timer(0.2, process.cancel)
        canceller.start()
        started = time.monotonic()
        code = process.wait()
        canceller.join()

        assert time.monotonic() - started < 10
        assert process.cancelled
        assert code != 0
        assert not events[-1].succeeded

    def test_cancel_before_start_is_noop(self) -> None:
        interpreter, _ = _collecting_interpreter()
        process = EncoderProcess(["-c", "pass"], interpreter, program=PYTHON)
        process.cancel()
        assert process.cancelled
        assert not process.running
