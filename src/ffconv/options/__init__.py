"""Option validation and preset loading."""

from .loader import (
    TranscodeOptionsModel,
    dump_preset,
    load_options_from_dict,
    load_preset,
)
from .validation import (
    OptionsValidationError,
    ValidationIssue,
    validate_options,
)

__all__ = [
    "OptionsValidationError",
    "TranscodeOptionsModel",
    "ValidationIssue",
    "dump_preset",
    "load_options_from_dict",
    "load_preset",
    "validate_options",
]
