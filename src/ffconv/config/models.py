"""Configuration data models.

This module defines dataclasses for ffconv configuration options.
"""

from dataclasses import dataclass, field
from pathlib import Path

from ffconv.telemetry.transcript import DEFAULT_TRANSCRIPT_LINES


@dataclass
class ToolPathsConfig:
    """Configuration for external tool paths.

    All paths are optional. If not specified, tools are looked up in PATH.
    """

    ffmpeg: Path | None = None
    ffprobe: Path | None = None


@dataclass
class LoggingConfig:
    """Configuration for application logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )
        if self.max_bytes < 0 or self.backup_count < 0:
            raise ValueError("max_bytes and backup_count must not be negative")


@dataclass
class JobsConfig:
    """Configuration for conversion jobs."""

    # Number of transcript lines retained per job
    transcript_lines: int = DEFAULT_TRANSCRIPT_LINES

    # Seek offset for thumbnail extraction (HH:MM:SS)
    thumbnail_offset: str = "00:00:01"

    # Timeout for probe and thumbnail invocations, in seconds
    probe_timeout: int = 60

    # Seconds to wait after terminate() before killing a cancelled encode
    cancel_grace_seconds: float = 5.0

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.transcript_lines < 1:
            raise ValueError(
                f"transcript_lines must be positive, got {self.transcript_lines}"
            )
        if self.probe_timeout < 1:
            raise ValueError(
                f"probe_timeout must be positive, got {self.probe_timeout}"
            )


@dataclass
class FfconvConfig:
    """Main configuration container."""

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    jobs: JobsConfig = field(default_factory=JobsConfig)
