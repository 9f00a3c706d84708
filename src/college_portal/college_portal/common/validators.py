from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_positive_int(value, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if number <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return number


def require_choice(value, enum_cls, field_name: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"{field_name} is not valid: {value!r}")
