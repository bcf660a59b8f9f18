"""Tests for EnvReader."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from ffconv.config import EnvReader


class TestEnvReaderText:
    """Tests for EnvReader.text."""

    def test_reads_prefixed_name(self) -> None:
        reader = EnvReader({"FFCONV_LOG_LEVEL": "debug"})
        assert reader.text("LOG_LEVEL") == "debug"

    def test_unset_and_empty_read_as_none(self) -> None:
        """Empty values fall through like unset ones."""
        reader = EnvReader({"FFCONV_LOG_FORMAT": ""})
        assert reader.text("LOG_FORMAT") is None
        assert reader.text("LOG_LEVEL") is None

    def test_custom_prefix(self) -> None:
        assert EnvReader({"X_LOG_LEVEL": "error"}, prefix="X_").text("LOG_LEVEL") == (
            "error"
        )


class TestEnvReaderInteger:
    """Tests for EnvReader.integer."""

    def test_parses_value(self) -> None:
        assert EnvReader({"FFCONV_PROBE_TIMEOUT": "30"}).integer("PROBE_TIMEOUT") == 30

    def test_malformed_value_is_logged_and_ignored(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        reader = EnvReader({"FFCONV_PROBE_TIMEOUT": "soon"})
        with caplog.at_level(logging.WARNING):
            assert reader.integer("PROBE_TIMEOUT") is None
        assert "FFCONV_PROBE_TIMEOUT='soon': not an integer" in caplog.text


class TestEnvReaderPath:
    """Tests for EnvReader.path and tool_path."""

    def test_existing_path(self, tmp_path: Path) -> None:
        reader = EnvReader({"FFCONV_LOG_FILE": str(tmp_path)})
        assert reader.path("LOG_FILE") == tmp_path

    def test_missing_path_ignored_unless_allowed(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        reader = EnvReader({"FFCONV_LOG_FILE": str(tmp_path / "logs" / "ffconv.log")})
        with caplog.at_level(logging.WARNING):
            assert reader.path("LOG_FILE") is None
        assert "does not exist" in caplog.text
        assert reader.path("LOG_FILE", must_exist=False) == (
            tmp_path / "logs" / "ffconv.log"
        )

    def test_tool_path(self, tmp_path: Path) -> None:
        ffprobe = tmp_path / "ffprobe"
        ffprobe.touch()
        reader = EnvReader({"FFCONV_FFPROBE_PATH": str(ffprobe)})
        assert reader.tool_path("ffprobe") == ffprobe
        assert reader.tool_path("ffmpeg") is None
