"""``FFCONV_*`` environment overrides.

Names are given without the prefix (``reader.integer("PROBE_TIMEOUT")``
reads ``FFCONV_PROBE_TIMEOUT``). Tests pass an explicit mapping instead of
touching ``os.environ``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

ENV_PREFIX = "FFCONV_"


class EnvReader:
    """Reads ffconv settings from the environment.

    Unset and empty variables read as None so callers can fall through to
    the config file with ``or``.

    Example:
        reader = EnvReader({"FFCONV_FFMPEG_PATH": "/opt/ffmpeg/bin/ffmpeg"})
        reader.tool_path("ffmpeg")  # Path("/opt/ffmpeg/bin/ffmpeg") if present
    """

    def __init__(
        self, env: Mapping[str, str] | None = None, prefix: str = ENV_PREFIX
    ) -> None:
        self._env: Mapping[str, str] = env if env is not None else os.environ
        self.prefix = prefix

    def _raw(self, name: str) -> str | None:
        return self._env.get(self.prefix + name) or None

    def text(self, name: str) -> str | None:
        return self._raw(name)

    def integer(self, name: str) -> int | None:
        """Read a whole number; malformed values are logged and ignored."""
        value = self._raw(name)
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            logger.warning(
                "Ignoring %s%s=%r: not an integer", self.prefix, name, value
            )
            return None

    def path(self, name: str, *, must_exist: bool = True) -> Path | None:
        """Read a filesystem path with ``~`` expanded.

        With ``must_exist``, a path that is not there is logged and ignored.
        """
        value = self._raw(name)
        if value is None:
            return None
        path = Path(value).expanduser()
        if must_exist and not path.exists():
            logger.warning(
                "Ignoring %s%s: %s does not exist", self.prefix, name, path
            )
            return None
        return path

    def tool_path(self, tool_name: str) -> Path | None:
        """Location override for an external tool (``FFCONV_FFMPEG_PATH``)."""
        return self.path(f"{tool_name.upper()}_PATH")
