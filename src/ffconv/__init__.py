"""ffconv: option-driven FFmpeg transcoding with live progress telemetry."""

__version__ = "0.1.0"
