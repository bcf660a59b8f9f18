"""Shared test fixtures for ffconv."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from ffconv.config import clear_config_cache
from ffconv.domain import SourceDescriptor
from ffconv.executor import refresh_tool_paths

_TOOL_ENV_VARS = (
    "FFCONV_FFMPEG_PATH",
    "FFCONV_FFPROBE_PATH",
    "FFCONV_LOG_LEVEL",
    "FFCONV_LOG_FILE",
    "FFCONV_LOG_FORMAT",
    "FFCONV_TRANSCRIPT_LINES",
    "FFCONV_PROBE_TIMEOUT",
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path):
    """Point every test at an empty config file and forget cached state.

    The fixture is autouse=True so a developer's own ~/.ffconv/config.toml or
    FFCONV_* environment never leaks into a test.
    """
    config_dir = tmp_path / ".ffconv"
    config_dir.mkdir(parents=True, exist_ok=True)
    config_file = config_dir / "config.toml"
    config_file.write_text('[logging]\nlevel = "info"\n')

    env = {k: v for k, v in os.environ.items() if k not in _TOOL_ENV_VARS}
    env["FFCONV_CONFIG_PATH"] = str(config_file)

    clear_config_cache()
    refresh_tool_paths()
    with patch.dict(os.environ, env, clear=True):
        yield config_file
    clear_config_cache()
    refresh_tool_paths()


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    """Create an (empty) source media file."""
    path = tmp_path / "clip.mov"
    path.write_bytes(b"\x00")
    return path


@pytest.fixture
def source(source_file: Path) -> SourceDescriptor:
    """Source descriptor with a known 100 s duration."""
    return SourceDescriptor(source_file, 100.0)
