"""Tests for configuration loading and precedence."""

import os
from pathlib import Path

import pytest

from ffconv.config import (
    ConfigError,
    EnvReader,
    LoggingConfig,
    clear_config_cache,
    get_config,
    get_default_config_path,
    load_config_file,
)
from ffconv.config.models import JobsConfig


class TestConfigModels:
    """Tests for config dataclass validation."""

    def test_logging_defaults(self) -> None:
        config = LoggingConfig()
        assert config.level == "info"
        assert config.format == "text"
        assert config.file is None

    def test_invalid_level(self) -> None:
        with pytest.raises(ValueError, match="level"):
            LoggingConfig(level="verbose")

    def test_invalid_format(self) -> None:
        with pytest.raises(ValueError, match="format"):
            LoggingConfig(format="xml")

    def test_jobs_defaults(self) -> None:
        config = JobsConfig()
        assert config.transcript_lines == 100
        assert config.thumbnail_offset == "00:00:01"

    def test_jobs_rejects_empty_transcript(self) -> None:
        with pytest.raises(ValueError, match="transcript_lines"):
            JobsConfig(transcript_lines=0)


class TestConfigFile:
    """Tests for config file location and caching."""

    def test_default_path_honors_env(self, isolated_config: Path) -> None:
        assert get_default_config_path() == isolated_config

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert load_config_file(tmp_path / "missing.toml") == {}

    def test_invalid_toml_is_ignored_unless_strict(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("[logging\nlevel = ")
        assert load_config_file(path) == {}

        clear_config_cache()
        with pytest.raises(ConfigError):
            load_config_file(path, strict=True)

    def test_cache_reloads_on_change(self, tmp_path: Path) -> None:
        """A changed file is re-read."""
        path = tmp_path / "config.toml"
        path.write_text('[jobs]\ntranscript_lines = 10\n')
        assert load_config_file(path)["jobs"]["transcript_lines"] == 10

        path.write_text('[jobs]\ntranscript_lines = 20\n')
        stat = path.stat()
        os.utime(path, (stat.st_atime, stat.st_mtime + 5))
        assert load_config_file(path)["jobs"]["transcript_lines"] == 20


class TestGetConfig:
    """Tests for get_config precedence."""

    def _write(self, path: Path, text: str) -> Path:
        path.write_text(text)
        clear_config_cache()
        return path

    def test_defaults(self, tmp_path: Path) -> None:
        config = get_config(config_path=tmp_path / "none.toml", env_reader=EnvReader({}))
        assert config.tools.ffmpeg is None
        assert config.logging.level == "info"
        assert config.jobs.transcript_lines == 100

    def test_file_values(self, tmp_path: Path) -> None:
        path = self._write(
            tmp_path / "c.toml",
            '[logging]\nlevel = "debug"\nformat = "json"\n'
            '[jobs]\ntranscript_lines = 50\nthumbnail_offset = "00:00:05"\n'
            '[tools]\nffmpeg = "/opt/ffmpeg/bin/ffmpeg"\n',
        )
        config = get_config(config_path=path, env_reader=EnvReader({}))
        assert config.logging.level == "debug"
        assert config.logging.format == "json"
        assert config.jobs.transcript_lines == 50
        assert config.jobs.thumbnail_offset == "00:00:05"
        assert config.tools.ffmpeg == Path("/opt/ffmpeg/bin/ffmpeg")

    def test_env_overrides_file(self, tmp_path: Path) -> None:
        path = self._write(
            tmp_path / "c.toml", '[logging]\nlevel = "debug"\n[jobs]\nprobe_timeout = 5\n'
        )
        env = EnvReader({"FFCONV_LOG_LEVEL": "error", "FFCONV_PROBE_TIMEOUT": "9"})
        config = get_config(config_path=path, env_reader=env)
        assert config.logging.level == "error"
        assert config.jobs.probe_timeout == 9

    def test_cli_overrides_env(self, tmp_path: Path) -> None:
        ffmpeg = tmp_path / "ffmpeg-env"
        ffmpeg.touch()
        env = EnvReader({"FFCONV_FFMPEG_PATH": str(ffmpeg)})
        config = get_config(
            config_path=tmp_path / "none.toml",
            ffmpeg_path=Path("/cli/ffmpeg"),
            env_reader=env,
        )
        assert config.tools.ffmpeg == Path("/cli/ffmpeg")

    def test_invalid_value_raises_config_error(self, tmp_path: Path) -> None:
        path = self._write(tmp_path / "c.toml", '[logging]\nlevel = "loud"\n')
        with pytest.raises(ConfigError, match="Invalid configuration"):
            get_config(config_path=path, env_reader=EnvReader({}))
