"""Utility functions and helpers."""

from tustin_control.utils.validators import (
    ValidationError,
    validate_real,
    validate_positive,
    validate_non_negative,
    validate_enum,
)

__all__ = [
    "ValidationError",
    "validate_real",
    "validate_positive",
    "validate_non_negative",
    "validate_enum",
]
