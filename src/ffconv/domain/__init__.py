"""Domain types shared by every ffconv layer."""

from ffconv.domain.enums import (
    AUDIO_ONLY_FORMATS,
    LOSSY_AUDIO_FORMATS,
    VALID_AUDIO_BITRATES,
    GifPaletteMode,
    OutputFormat,
    Resolution,
    SizeConstraintMode,
)
from ffconv.domain.models import (
    DEFAULT_OPTIONS,
    MAX_CRF,
    MAX_SPEED,
    MIN_CRF,
    MIN_SPEED,
    SourceDescriptor,
    TranscodeOptions,
)

__all__ = [
    # Enums
    "GifPaletteMode",
    "OutputFormat",
    "Resolution",
    "SizeConstraintMode",
    "AUDIO_ONLY_FORMATS",
    "LOSSY_AUDIO_FORMATS",
    "VALID_AUDIO_BITRATES",
    # Models
    "DEFAULT_OPTIONS",
    "SourceDescriptor",
    "TranscodeOptions",
    "MIN_CRF",
    "MAX_CRF",
    "MIN_SPEED",
    "MAX_SPEED",
]
