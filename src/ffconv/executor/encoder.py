"""Streaming ffmpeg runner.

Runs one encoder subprocess, delivers every output line to a
``TelemetryInterpreter`` as it arrives and reports the exit code as the
terminal event. stdout and stderr are each drained by a daemon reader
thread into a shared queue; the thread calling ``wait()`` feeds the
interpreter so listeners always run on the caller's thread.

No timeout is imposed: a hung encode blocks until ``cancel()`` is called.
"""

from __future__ import annotations

import logging
import queue
import subprocess  # nosec B404 - subprocess is required for FFmpeg invocation
import threading
from pathlib import Path
from typing import IO

from ffconv.telemetry import TelemetryInterpreter

from .tools import require_tool

logger = logging.getLogger(__name__)

DEFAULT_CANCEL_GRACE_SECONDS = 5.0

# Queue item marking the end of one reader's stream
_EOF = None


class EncoderError(Exception):
    """Raised when the encoder process cannot be started or driven."""


class EncoderProcess:
    """A single ffmpeg invocation with line-by-line telemetry."""

    def __init__(
        self,
        args: list[str],
        interpreter: TelemetryInterpreter,
        program: Path | None = None,
        cancel_grace_seconds: float = DEFAULT_CANCEL_GRACE_SECONDS,
    ) -> None:
        """Prepare the invocation.

        Args:
            args: Encoder arguments (without the program).
            interpreter: Receives every output line and the exit code.
            program: Encoder executable. Resolved with ``require_tool`` when
                None.
            cancel_grace_seconds: Time between terminate and kill on cancel.
        """
        self.args = list(args)
        self.interpreter = interpreter
        self._program = program
        self._cancel_grace = cancel_grace_seconds
        self._process: subprocess.Popen[str] | None = None
        self._lines: queue.Queue[str | None] = queue.Queue()
        self._readers: list[threading.Thread] = []
        self._cancel_event = threading.Event()
        self._exit_code: int | None = None

    @property
    def command(self) -> list[str]:
        program = self._program or require_tool("ffmpeg")
        return [str(program), *self.args]

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    @property
    def exit_code(self) -> int | None:
        return self._exit_code

    @property
    def running(self) -> bool:
        return self._process is not None and self._process.poll() is None

    def start(self) -> None:
        """Spawn the process and its reader threads.

        Raises:
            EncoderError: If already started or the executable cannot run.
            ToolNotFoundError: If ffmpeg cannot be located.
        """
        if self._process is not None:
            raise EncoderError("Encoder process already started")

        cmd = self.command
        logger.debug("Starting encoder: %s", " ".join(cmd))
        try:
            self._process = subprocess.Popen(  # nosec B603 - no shell
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
            )
        except OSError as e:
            raise EncoderError(f"Could not start {cmd[0]}: {e}") from e

        streams = {"stdout": self._process.stdout, "stderr": self._process.stderr}
        for name, stream in streams.items():
            if stream is None:
                continue
            reader = threading.Thread(
                target=self._read_stream,
                args=(stream, name),
                name=f"encoder-{name}",
                daemon=True,
            )
            reader.start()
            self._readers.append(reader)

    def _read_stream(self, stream: IO[str], name: str) -> None:
        """Push lines from one pipe onto the shared queue."""
        try:
            for line in stream:
                self._lines.put(line)
        except (ValueError, OSError) as e:
            # Pipe closed under us, e.g. after cancel
            logger.debug("Encoder %s reader stopped: %s", name, e)
        finally:
            self._lines.put(_EOF)

    def wait(self) -> int:
        """Deliver output lines until both streams end, then the exit code.

        Returns:
            Process exit code (negative signal number on POSIX when killed).

        Raises:
            EncoderError: If the process was never started.
        """
        if self._process is None:
            raise EncoderError("Encoder process not started")
        if self._exit_code is not None:
            return self._exit_code

        open_streams = len(self._readers)
        while open_streams:
            line = self._lines.get()
            if line is _EOF:
                open_streams -= 1
                continue
            self.interpreter.feed(line)

        returncode = self._process.wait()
        for reader in self._readers:
            reader.join(timeout=1.0)

        self._exit_code = returncode
        if self.cancelled:
            logger.info("Encoder cancelled (exit code %d)", returncode)
        self.interpreter.finish(returncode)
        return returncode

    def run(self) -> int:
        """Start the process and wait for it."""
        self.start()
        return self.wait()

    def cancel(self) -> None:
        """Terminate the process, killing it if it ignores the request.

        Partial output files are left in place.
        """
        self._cancel_event.set()
        process = self._process
        if process is None or process.poll() is not None:
            return
        logger.info("Cancelling encoder (pid %d)", process.pid)
        process.terminate()
        try:
            process.wait(timeout=self._cancel_grace)
        except subprocess.TimeoutExpired:
            logger.warning(
                "Encoder did not exit within %.1fs of terminate; killing",
                self._cancel_grace,
            )
            process.kill()

