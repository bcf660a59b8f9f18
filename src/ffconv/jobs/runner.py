"""Single-file conversion workflow.

``ConversionJob`` ties the pieces together for one source file:

1. Probe the source duration (unless the descriptor already carries one)
2. Synthesize the encoder arguments
3. Run the encoder, feeding every output line to a ``TelemetryInterpreter``
4. Report the outcome as a ``ConversionResult``

A failed probe is not fatal: the job continues with an unknown duration,
which makes target-size encodes fall back to constant quality and leaves
progress waiting for the encoder's own duration announcement.
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from pathlib import Path

from ffconv.core.formatting import format_clock, format_command, format_file_size
from ffconv.domain import DEFAULT_OPTIONS, SourceDescriptor, TranscodeOptions
from ffconv.executor import (
    DEFAULT_CANCEL_GRACE_SECONDS,
    DEFAULT_PROBE_TIMEOUT,
    EncoderProcess,
    ProbeError,
    probe_duration,
    require_tool,
)
from ffconv.logging import job_context
from ffconv.synthesis import (
    build_encoder_args,
    default_output_path,
    expected_output_duration,
)
from ffconv.telemetry import (
    DEFAULT_TRANSCRIPT_LINES,
    DurationDiscovered,
    LineLogged,
    ProcessCompleted,
    ProgressUpdated,
    TelemetryEvent,
    TelemetryInterpreter,
    TranscriptBuffer,
)

from .progress import NullProgressReporter, ProgressReporter

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Outcome of one conversion."""

    success: bool
    exit_code: int
    output_path: Path
    transcript: list[str] = field(default_factory=list)
    source_duration: float = 0.0
    cancelled: bool = False
    job_id: str = ""

    def to_dict(self) -> dict[str, object]:
        return {
            "job_id": self.job_id,
            "success": self.success,
            "exit_code": self.exit_code,
            "output_path": str(self.output_path),
            "source_duration": self.source_duration,
            "cancelled": self.cancelled,
        }


class ConversionJob:
    """Convert one source file with live progress.

    Example:
        job = ConversionJob("clip.mov", options, reporter=StderrProgressReporter())
        result = job.run()
        if not result.success:
            print("\\n".join(result.transcript))
    """

    def __init__(
        self,
        source: SourceDescriptor | Path | str,
        options: TranscodeOptions = DEFAULT_OPTIONS,
        destination: Path | str | None = None,
        reporter: ProgressReporter | None = None,
        *,
        transcript_lines: int = DEFAULT_TRANSCRIPT_LINES,
        probe_timeout: float | None = DEFAULT_PROBE_TIMEOUT,
        cancel_grace_seconds: float = DEFAULT_CANCEL_GRACE_SECONDS,
        job_id: str | None = None,
    ) -> None:
        if not isinstance(source, SourceDescriptor):
            source = SourceDescriptor(Path(source))
        self.source = source
        self.options = options
        self.destination = (
            Path(destination)
            if destination is not None
            else default_output_path(source.path, options.output_format)
        )
        self.reporter: ProgressReporter = reporter or NullProgressReporter()
        self.job_id = job_id or uuid.uuid4().hex[:8]
        self.transcript = TranscriptBuffer(transcript_lines)
        self._probe_timeout = probe_timeout
        self._cancel_grace = cancel_grace_seconds
        self._interpreter = TelemetryInterpreter(listener=self._on_event)
        self._encoder: EncoderProcess | None = None
        self._lock = threading.Lock()
        self._cancel_requested = False
        self._resolved_duration: float | None = None

    @property
    def interpreter(self) -> TelemetryInterpreter:
        return self._interpreter

    def resolve_duration(self) -> float:
        """Source duration in seconds, probing when not already known.

        Returns 0 when the probe fails. The result is remembered, so the
        probe runs at most once per job.
        """
        if self._resolved_duration is not None:
            return self._resolved_duration
        if self.source.has_known_duration:
            self._resolved_duration = self.source.duration_seconds
            return self._resolved_duration
        try:
            duration = probe_duration(self.source, timeout=self._probe_timeout)
        except ProbeError as e:
            logger.warning(
                "Could not determine duration of %s: %s", self.source.path, e
            )
            duration = 0.0
        else:
            logger.info("Source duration: %s", format_clock(duration))
        self._resolved_duration = duration
        return duration

    def build_args(self, duration: float) -> list[str]:
        """Encoder arguments for this job given the source duration."""
        return build_encoder_args(
            self.source, self.options, self.destination, known_duration=duration
        )

    def run(self) -> ConversionResult:
        """Run the conversion to completion.

        Raises:
            ToolNotFoundError: If ffmpeg or ffprobe is not available.
            EncoderError: If the encoder process cannot be started.
        """
        with job_context(self.job_id, self.source.path):
            return self._run()

    def _run(self) -> ConversionResult:
        ffmpeg = require_tool("ffmpeg")
        duration = self.resolve_duration()
        self.source = self.source.with_duration(duration)

        args = self.build_args(duration)
        self.transcript.clear()
        self._interpreter.reset(expected_output_duration(self.options, duration))

        logger.info(
            "Starting conversion: %s -> %s", self.source.path, self.destination
        )
        logger.info("Command: %s", format_command(str(ffmpeg), args))

        encoder = EncoderProcess(
            args,
            self._interpreter,
            program=ffmpeg,
            cancel_grace_seconds=self._cancel_grace,
        )
        with self._lock:
            if self._cancel_requested:
                logger.info("Conversion cancelled before start")
                return self._result(-1, duration, cancelled=True)
            self._encoder = encoder
            encoder.start()

        self.reporter.on_start(
            f"{self.source.path.name} -> {self.destination.name}"
        )
        try:
            exit_code = encoder.wait()
        except KeyboardInterrupt:
            encoder.cancel()
            raise
        finally:
            with self._lock:
                self._encoder = None

        if encoder.cancelled:
            self._interpreter.reset()
            logger.warning(
                "Conversion cancelled; partial output left at %s", self.destination
            )
            return self._result(exit_code, duration, cancelled=True)

        if exit_code == 0:
            logger.info("Conversion successful")
            if self.destination.exists():
                logger.info(
                    "Output size: %s",
                    format_file_size(self.destination.stat().st_size),
                )
        else:
            logger.error("Error: Process finished with code %d", exit_code)
        return self._result(exit_code, duration)

    def cancel(self) -> None:
        """Stop the running encode. Safe to call from another thread."""
        with self._lock:
            self._cancel_requested = True
            encoder = self._encoder
        if encoder is not None:
            encoder.cancel()

    def _result(
        self, exit_code: int, duration: float, cancelled: bool = False
    ) -> ConversionResult:
        return ConversionResult(
            success=exit_code == 0 and not cancelled,
            exit_code=exit_code,
            output_path=self.destination,
            transcript=self.transcript.lines(),
            source_duration=duration,
            cancelled=cancelled,
            job_id=self.job_id,
        )

    def _on_event(self, event: TelemetryEvent) -> None:
        if isinstance(event, LineLogged):
            self.transcript.append(event.line)
            self.reporter.on_log(event.line)
        elif isinstance(event, DurationDiscovered):
            logger.debug("Encoder reported duration %s", format_clock(event.seconds))
        elif isinstance(event, ProgressUpdated):
            self.reporter.on_progress(event.percent)
            if event.logged:
                logger.info("Progress: %d%%", event.percent)
        elif isinstance(event, ProcessCompleted):
            self.reporter.on_complete(event.succeeded, event.exit_code)
