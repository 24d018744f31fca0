"""
Validation utilities for configuration checking.
Configuration objects validate on construction; the per-step hot path never does.
"""

from enum import Enum
from typing import Any, Type, TypeVar
import numbers


E = TypeVar("E", bound=Enum)


class ValidationError(ValueError):
    """Custom exception for validation failures."""
    pass


def validate_real(value: Any, name: str) -> float:
    """
    Validate that a value is a real number.

    Args:
        value: The value to validate
        name: Parameter name for error messages

    Returns:
        The value as float

    Raises:
        ValidationError: If value is not a real number
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValidationError(f"{name} must be a real number, got {type(value).__name__}")
    return float(value)


def validate_positive(value: Any, name: str) -> float:
    """
    Validate that a value is strictly positive.

    Raises:
        ValidationError: If value is not positive
    """
    value = validate_real(value, name)
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")
    return value


def validate_non_negative(value: Any, name: str) -> float:
    """
    Validate that a value is non-negative (>= 0).

    Raises:
        ValidationError: If value is negative
    """
    value = validate_real(value, name)
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def validate_enum(value: Any, name: str, enum_type: Type[E]) -> E:
    """
    Coerce a member, value or (case-insensitive) member name into an enum member.

    Args:
        value: Enum member, its value, or its name
        name: Parameter name for error messages
        enum_type: Target enum class

    Returns:
        The enum member

    Raises:
        ValidationError: If value does not name a member of enum_type
    """
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        key = value.strip().upper()
        if key in enum_type.__members__:
            return enum_type.__members__[key]
    try:
        return enum_type(value)
    except ValueError:
        choices = ", ".join(enum_type.__members__)
        raise ValidationError(
            f"{name} must be one of {choices}, got {value!r}"
        ) from None
