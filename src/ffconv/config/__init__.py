"""Configuration management for ffconv.

Precedence, highest first: CLI flags, environment variables (FFCONV_*),
config file (~/.ffconv/config.toml), defaults.
"""

from ffconv.config.env import EnvReader
from ffconv.config.loader import (
    ConfigError,
    clear_config_cache,
    get_config,
    get_default_config_path,
    load_config_file,
)
from ffconv.config.logging_factory import (
    apply_logging_flags,
    configure_logging_from_cli,
)
from ffconv.config.models import (
    FfconvConfig,
    JobsConfig,
    LoggingConfig,
    ToolPathsConfig,
)

__all__ = [
    # Models
    "FfconvConfig",
    "JobsConfig",
    "LoggingConfig",
    "ToolPathsConfig",
    # Loader
    "ConfigError",
    "EnvReader",
    "clear_config_cache",
    "get_config",
    "get_default_config_path",
    "load_config_file",
    # Logging
    "apply_logging_flags",
    "configure_logging_from_cli",
]
