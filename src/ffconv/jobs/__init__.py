"""Conversion job orchestration and progress reporting."""

from .progress import NullProgressReporter, ProgressReporter, StderrProgressReporter
from .runner import ConversionJob, ConversionResult

__all__ = [
    "ConversionJob",
    "ConversionResult",
    "NullProgressReporter",
    "ProgressReporter",
    "StderrProgressReporter",
]
