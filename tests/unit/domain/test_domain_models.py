"""Tests for domain enums and value objects."""

import math
from pathlib import Path

import pytest

from ffconv.domain import (
    DEFAULT_OPTIONS,
    GifPaletteMode,
    OutputFormat,
    Resolution,
    SizeConstraintMode,
    SourceDescriptor,
    TranscodeOptions,
)


class TestOutputFormat:
    """Tests for OutputFormat properties."""

    @pytest.mark.parametrize("fmt", ["mp3", "m4a", "wav", "flac"])
    def test_audio_only_formats(self, fmt: str) -> None:
        """Audio formats report is_audio_only."""
        assert OutputFormat(fmt).is_audio_only

    @pytest.mark.parametrize("fmt", ["mp4", "mkv", "avi", "mov", "webm", "gif"])
    def test_video_formats_are_not_audio_only(self, fmt: str) -> None:
        """Video formats and gif carry a video stream."""
        assert not OutputFormat(fmt).is_audio_only

    def test_lossy_audio(self) -> None:
        """Only mp3 and m4a take a bitrate."""
        lossy = {f for f in OutputFormat if f.is_lossy_audio}
        assert lossy == {OutputFormat.MP3, OutputFormat.M4A}

    def test_extension_matches_value(self) -> None:
        """Extension is the format name."""
        assert OutputFormat.WEBM.extension == "webm"


class TestResolution:
    """Tests for Resolution.height."""

    def test_original_has_no_height(self) -> None:
        """Original keeps the source size."""
        assert Resolution.ORIGINAL.height is None

    @pytest.mark.parametrize(
        ("resolution", "height"),
        [(Resolution.P1080, 1080), (Resolution.P720, 720), (Resolution.P480, 480)],
    )
    def test_heights(self, resolution: Resolution, height: int) -> None:
        """Presets map to pixel heights."""
        assert resolution.height == height

    def test_wire_values(self) -> None:
        """Values match the user-facing spellings."""
        assert Resolution("1080p") is Resolution.P1080
        assert SizeConstraintMode("targetSize") is SizeConstraintMode.TARGET_SIZE
        assert GifPaletteMode("pro") is GifPaletteMode.PRO


class TestTranscodeOptions:
    """Tests for TranscodeOptions."""

    def test_defaults(self) -> None:
        """Defaults describe a plain mp4 re-encode at CRF 23."""
        opts = TranscodeOptions()
        assert opts.output_format is OutputFormat.MP4
        assert opts.resolution is Resolution.ORIGINAL
        assert opts.quality_crf == 23
        assert opts.speed_factor == 1.0
        assert opts.remove_audio is False
        assert opts.trim_start_seconds == 0.0
        assert opts.trim_end_seconds is None
        assert opts.size_constraint_mode is SizeConstraintMode.CONSTANT_QUALITY
        assert opts.target_size_mb == 25.0
        assert opts.audio_bitrate_kbps == 192

    def test_is_frozen(self) -> None:
        """Options cannot be mutated in place."""
        with pytest.raises(AttributeError):
            DEFAULT_OPTIONS.quality_crf = 30  # type: ignore[misc]

    def test_with_changes_returns_copy(self) -> None:
        """with_changes leaves the original untouched."""
        changed = DEFAULT_OPTIONS.with_changes(quality_crf=30)
        assert changed.quality_crf == 30
        assert DEFAULT_OPTIONS.quality_crf == 23

    def test_construction_accepts_out_of_range_values(self) -> None:
        """Range checking is left to validate_options."""
        opts = TranscodeOptions(quality_crf=99, speed_factor=10.0)
        assert opts.quality_crf == 99

    def test_gif_never_keeps_audio(self) -> None:
        """GIF drops audio even when remove_audio is False."""
        opts = TranscodeOptions(output_format=OutputFormat.GIF, remove_audio=False)
        assert not opts.keeps_audio

    def test_remove_audio_drops_audio_for_video(self) -> None:
        """remove_audio drops the audio stream of video outputs."""
        assert not TranscodeOptions(remove_audio=True).keeps_audio
        assert TranscodeOptions().keeps_audio

    def test_audio_only_always_keeps_audio(self) -> None:
        """Audio-only outputs ignore remove_audio."""
        opts = TranscodeOptions(output_format=OutputFormat.MP3, remove_audio=True)
        assert opts.keeps_audio

    @pytest.mark.parametrize("speed", [0.5, 1.6, 2.0])
    def test_changes_speed(self, speed: float) -> None:
        assert TranscodeOptions(speed_factor=speed).changes_speed

    @pytest.mark.parametrize("speed", [1.0, 0.0, -2.0, math.nan, math.inf])
    def test_unusable_or_unit_speed_is_no_change(self, speed: float) -> None:
        assert not TranscodeOptions(speed_factor=speed).changes_speed

    def test_clip_duration_with_valid_trim(self) -> None:
        """Clip length is end minus start."""
        opts = TranscodeOptions(trim_start_seconds=5.0, trim_end_seconds=12.5)
        assert opts.has_valid_trim_end
        assert opts.clip_duration_seconds == 7.5

    @pytest.mark.parametrize("end", [None, 5.0, 3.0])
    def test_clip_duration_absent_for_invalid_trim(self, end: float | None) -> None:
        """Missing or non-increasing trim end yields no clip length."""
        opts = TranscodeOptions(trim_start_seconds=5.0, trim_end_seconds=end)
        assert not opts.has_valid_trim_end
        assert opts.clip_duration_seconds is None


class TestSourceDescriptor:
    """Tests for SourceDescriptor."""

    def test_coerces_string_path(self) -> None:
        """String paths become Path objects."""
        src = SourceDescriptor("/videos/in.mov")  # type: ignore[arg-type]
        assert src.path == Path("/videos/in.mov")

    def test_unknown_duration_by_default(self) -> None:
        """Duration 0 means unknown."""
        assert not SourceDescriptor(Path("a.mp4")).has_known_duration

    def test_with_duration(self) -> None:
        """with_duration returns a copy carrying the duration."""
        src = SourceDescriptor(Path("a.mp4"))
        updated = src.with_duration(42.0)
        assert updated.has_known_duration
        assert updated.duration_seconds == 42.0
        assert src.duration_seconds == 0.0
