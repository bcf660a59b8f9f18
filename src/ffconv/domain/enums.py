"""Domain enums for ffconv.

Enum values are the exact strings accepted from presets and the CLI, so
``OutputFormat("mp4")`` round-trips the user-facing spelling.
"""

from enum import Enum


class OutputFormat(str, Enum):
    """Container/codec family of the produced artifact."""

    MP4 = "mp4"
    MKV = "mkv"
    AVI = "avi"
    MOV = "mov"
    WEBM = "webm"
    GIF = "gif"
    MP3 = "mp3"
    M4A = "m4a"
    WAV = "wav"
    FLAC = "flac"

    @property
    def is_audio_only(self) -> bool:
        """True for formats that carry no video stream."""
        return self in AUDIO_ONLY_FORMATS

    @property
    def is_lossy_audio(self) -> bool:
        """True for audio-only formats that take a bitrate."""
        return self in LOSSY_AUDIO_FORMATS

    @property
    def is_gif(self) -> bool:
        return self is OutputFormat.GIF

    @property
    def extension(self) -> str:
        return self.value


AUDIO_ONLY_FORMATS = frozenset(
    {OutputFormat.MP3, OutputFormat.M4A, OutputFormat.WAV, OutputFormat.FLAC}
)
LOSSY_AUDIO_FORMATS = frozenset({OutputFormat.MP3, OutputFormat.M4A})


class Resolution(str, Enum):
    """Output frame height preset."""

    ORIGINAL = "original"
    P1080 = "1080p"
    P720 = "720p"
    P480 = "480p"

    @property
    def height(self) -> int | None:
        """Target height in pixels, or None to keep the source size."""
        if self is Resolution.ORIGINAL:
            return None
        return int(self.value.removesuffix("p"))


class GifPaletteMode(str, Enum):
    """Color quantization strategy for GIF output."""

    BASIC = "basic"  # single-pass auto quantization
    PRO = "pro"  # palettegen + paletteuse


class SizeConstraintMode(str, Enum):
    """Bitrate strategy for video outputs."""

    CONSTANT_QUALITY = "constantQuality"
    TARGET_SIZE = "targetSize"


# Bitrates offered for lossy audio-only outputs (kbps)
VALID_AUDIO_BITRATES = (128, 192, 256, 320)
