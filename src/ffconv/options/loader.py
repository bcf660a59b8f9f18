"""Preset file loading and validation.

Presets are YAML mappings of option names to values. Keys may be written in
snake_case (``trim_start_seconds``) or in the camelCase used by the desktop
front end (``trimStart``). They are validated with a Pydantic model and
converted into a ``TranscodeOptions`` value.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ffconv.domain import (
    VALID_AUDIO_BITRATES,
    GifPaletteMode,
    OutputFormat,
    Resolution,
    SizeConstraintMode,
    TranscodeOptions,
)

from .validation import OptionsValidationError

# camelCase spellings accepted in presets
_KEY_ALIASES: dict[str, str] = {
    "format": "output_format",
    "outputFormat": "output_format",
    "quality": "quality_crf",
    "qualityCRF": "quality_crf",
    "speed": "speed_factor",
    "speedFactor": "speed_factor",
    "removeAudio": "remove_audio",
    "trimStart": "trim_start_seconds",
    "trimStartSeconds": "trim_start_seconds",
    "trimEnd": "trim_end_seconds",
    "trimEndSeconds": "trim_end_seconds",
    "gifMode": "gif_palette_mode",
    "gifPaletteMode": "gif_palette_mode",
    "compressionMode": "size_constraint_mode",
    "sizeConstraintMode": "size_constraint_mode",
    "targetSize": "target_size_mb",
    "targetSizeMB": "target_size_mb",
    "audioBitrate": "audio_bitrate_kbps",
    "audioBitrateKbps": "audio_bitrate_kbps",
}

# Front-end spellings of the size constraint modes
_MODE_ALIASES: dict[str, str] = {
    "quality": SizeConstraintMode.CONSTANT_QUALITY.value,
    "target": SizeConstraintMode.TARGET_SIZE.value,
}


class TranscodeOptionsModel(BaseModel):
    """Pydantic model for a transcode preset."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    output_format: OutputFormat = OutputFormat.MP4
    resolution: Resolution = Resolution.ORIGINAL
    quality_crf: int = Field(default=23, ge=18, le=51)
    speed_factor: float = Field(default=1.0, ge=0.5, le=2.0)
    remove_audio: bool = False
    trim_start_seconds: float = Field(default=0.0, ge=0)
    trim_end_seconds: float | None = Field(default=None, gt=0)
    gif_palette_mode: GifPaletteMode = GifPaletteMode.BASIC
    size_constraint_mode: SizeConstraintMode = SizeConstraintMode.CONSTANT_QUALITY
    target_size_mb: float = Field(default=25.0, gt=0)
    audio_bitrate_kbps: int = 192

    @model_validator(mode="before")
    @classmethod
    def normalize_keys(cls, data: Any) -> Any:
        """Map camelCase keys and front-end mode names onto field names."""
        if not isinstance(data, dict):
            return data
        normalized: dict[str, Any] = {}
        for key, value in data.items():
            name = _KEY_ALIASES.get(key, key)
            if name in normalized:
                raise ValueError(f"Option '{name}' is specified more than once")
            normalized[name] = value
        mode = normalized.get("size_constraint_mode")
        if isinstance(mode, str) and mode in _MODE_ALIASES:
            normalized["size_constraint_mode"] = _MODE_ALIASES[mode]
        return normalized

    @model_validator(mode="after")
    def validate_consistency(self) -> TranscodeOptionsModel:
        """Reject trim ranges and bitrates the encoder cannot honor."""
        if (
            self.trim_end_seconds is not None
            and self.trim_end_seconds <= self.trim_start_seconds
        ):
            raise ValueError("trim_end_seconds must be greater than trim_start_seconds")
        if self.audio_bitrate_kbps not in VALID_AUDIO_BITRATES:
            allowed = ", ".join(str(b) for b in VALID_AUDIO_BITRATES)
            raise ValueError(f"audio_bitrate_kbps must be one of {allowed}")
        return self

    def to_options(self) -> TranscodeOptions:
        """Convert to the immutable domain value."""
        return TranscodeOptions(**self.model_dump())


def load_options_from_dict(
    data: dict[str, Any],
    base: TranscodeOptions | None = None,
) -> TranscodeOptions:
    """Validate a mapping of option values.

    Args:
        data: Option names to values.
        base: Options supplying values for keys absent from ``data``.

    Returns:
        Validated TranscodeOptions.

    Raises:
        OptionsValidationError: If any value is invalid.
    """
    if base is not None:
        merged = {f.name: getattr(base, f.name) for f in dataclasses.fields(base)}
        merged.update({_KEY_ALIASES.get(k, k): v for k, v in data.items()})
    else:
        merged = dict(data)

    try:
        model = TranscodeOptionsModel.model_validate(merged)
    except ValidationError as e:
        raise OptionsValidationError(*_format_validation_error(e)) from e
    return model.to_options()


def load_preset(preset_path: Path) -> TranscodeOptions:
    """Load and validate a preset from a YAML file.

    Args:
        preset_path: Path to the YAML preset.

    Returns:
        Validated TranscodeOptions.

    Raises:
        OptionsValidationError: If the preset is invalid.
        FileNotFoundError: If the preset does not exist.
    """
    if not preset_path.exists():
        raise FileNotFoundError(f"Preset file not found: {preset_path}")

    try:
        with open(preset_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise OptionsValidationError(f"Invalid YAML syntax: {e}") from e

    if data is None:
        raise OptionsValidationError("Preset file is empty")
    if not isinstance(data, dict):
        raise OptionsValidationError("Preset file must be a YAML mapping")

    return load_options_from_dict(data)


def dump_preset(options: TranscodeOptions) -> str:
    """Serialize options as a YAML preset."""
    values = {f.name: getattr(options, f.name) for f in dataclasses.fields(options)}
    data = TranscodeOptionsModel.model_construct(**values).model_dump(mode="json")
    return yaml.safe_dump(data, sort_keys=False)


def _format_validation_error(error: ValidationError) -> tuple[str, str | None]:
    errors = error.errors()
    if not errors:
        return f"Option validation failed: {error}", None
    first = errors[0]
    loc = ".".join(str(x) for x in first.get("loc", []))
    msg = first.get("msg", str(error))
    if loc:
        return f"Option validation failed: {loc}: {msg}", loc
    return f"Option validation failed: {msg}", None
