"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (FFCONV_*)
3. Config file (~/.ffconv/config.toml)
4. Default values

Environment variables:
- FFCONV_CONFIG_PATH: Path to config file (overrides default location)
- FFCONV_FFMPEG_PATH: Path to ffmpeg executable
- FFCONV_FFPROBE_PATH: Path to ffprobe executable
- FFCONV_LOG_LEVEL: Log level (debug, info, warning, error)
- FFCONV_LOG_FILE: Log file path
- FFCONV_LOG_FORMAT: Log format (text, json)
- FFCONV_TRANSCRIPT_LINES: Transcript lines retained per job
- FFCONV_PROBE_TIMEOUT: Probe/thumbnail timeout in seconds
"""

from __future__ import annotations

import logging
import threading
import tomllib
from pathlib import Path
from typing import Any

from ffconv.config.env import EnvReader
from ffconv.config.models import (
    FfconvConfig,
    JobsConfig,
    LoggingConfig,
    ToolPathsConfig,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".ffconv"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

# path -> (parsed dict, mtime); reloaded when the file changes
_config_cache: dict[Path, tuple[dict[str, Any], float]] = {}
_config_cache_lock = threading.Lock()


class ConfigError(Exception):
    """Raised when the configuration file or values are invalid."""


def get_default_config_path() -> Path:
    """Get the config file path, honoring FFCONV_CONFIG_PATH."""
    return (
        EnvReader().path("CONFIG_PATH", must_exist=False) or DEFAULT_CONFIG_FILE
    )


def load_toml_file(path: Path, *, strict: bool = False) -> dict[str, Any]:
    """Load and parse a TOML file.

    Args:
        path: Path to the TOML file.
        strict: If True, raise ConfigError on parse failures.

    Returns:
        Parsed dictionary. Empty if the file doesn't exist, or on parse
        failure when not strict.
    """
    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as e:
        if strict:
            raise ConfigError(f"Could not read config file {path}: {e}") from e
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Load configuration from TOML file with mtime-based caching.

    Args:
        path: Path to config file. If None, uses default location.
        strict: If True, raise ConfigError on parse failures.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist.
    """
    if path is None:
        path = get_default_config_path()

    try:
        current_mtime = path.stat().st_mtime
    except FileNotFoundError:
        current_mtime = 0.0

    with _config_cache_lock:
        if path in _config_cache:
            cached_config, cached_mtime = _config_cache[path]
            if current_mtime == cached_mtime:
                return cached_config

        result = load_toml_file(path, strict=strict)
        _config_cache[path] = (result, current_mtime)
        return result


def clear_config_cache() -> None:
    """Clear the config file cache. Primarily useful for testing."""
    with _config_cache_lock:
        _config_cache.clear()


def _optional_path(value: Any) -> Path | None:
    if value is None or value == "":
        return None
    return Path(str(value)).expanduser()


def get_config(
    config_path: Path | None = None,
    ffmpeg_path: Path | None = None,
    ffprobe_path: Path | None = None,
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> FfconvConfig:
    """Get configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides FFCONV_CONFIG_PATH).
        ffmpeg_path: CLI override for ffmpeg path.
        ffprobe_path: CLI override for ffprobe path.
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, raise ConfigError on config file parse failures.

    Returns:
        FfconvConfig with merged configuration.

    Raises:
        ConfigError: If a merged value is invalid, or the file cannot be
            parsed in strict mode.
    """
    reader = env_reader or EnvReader()
    file_config = load_config_file(config_path, strict=strict)

    tools_file = file_config.get("tools", {})
    logging_file = file_config.get("logging", {})
    jobs_file = file_config.get("jobs", {})

    try:
        tools = ToolPathsConfig(
            ffmpeg=ffmpeg_path
            or reader.tool_path("ffmpeg")
            or _optional_path(tools_file.get("ffmpeg")),
            ffprobe=ffprobe_path
            or reader.tool_path("ffprobe")
            or _optional_path(tools_file.get("ffprobe")),
        )

        log_defaults = LoggingConfig()
        logging_config = LoggingConfig(
            level=reader.text("LOG_LEVEL")
            or logging_file.get("level", log_defaults.level),
            file=reader.path("LOG_FILE", must_exist=False)
            or _optional_path(logging_file.get("file")),
            format=reader.text("LOG_FORMAT")
            or logging_file.get("format", log_defaults.format),
            include_stderr=bool(
                logging_file.get("include_stderr", log_defaults.include_stderr)
            ),
            max_bytes=int(logging_file.get("max_bytes", log_defaults.max_bytes)),
            backup_count=int(
                logging_file.get("backup_count", log_defaults.backup_count)
            ),
        )

        job_defaults = JobsConfig()
        jobs = JobsConfig(
            transcript_lines=reader.integer("TRANSCRIPT_LINES")
            or int(jobs_file.get("transcript_lines", job_defaults.transcript_lines)),
            thumbnail_offset=str(
                jobs_file.get("thumbnail_offset", job_defaults.thumbnail_offset)
            ),
            probe_timeout=reader.integer("PROBE_TIMEOUT")
            or int(jobs_file.get("probe_timeout", job_defaults.probe_timeout)),
            cancel_grace_seconds=float(
                jobs_file.get(
                    "cancel_grace_seconds", job_defaults.cancel_grace_seconds
                )
            ),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    return FfconvConfig(tools=tools, logging=logging_config, jobs=jobs)
