from __future__ import annotations

from typing import Any

from ..core.constants import VALID_HOURS
from ..core.exceptions import ValidationError


def normalize_email(value: str) -> str:
    return (value or "").strip().lower()


def require_non_empty(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: str, field_name: str = "email") -> str:
    email = require_non_empty(value, field_name)
    if "@" not in email:
        raise ValidationError(f"{field_name} '{email}' is not an email address")
    return email


def require_hour(value: Any, field_name: str = "hour") -> str:
    hour = str(value).strip() if value is not None else ""
    if hour not in VALID_HOURS:
        raise ValidationError(f"Invalid {field_name}. Must be 1, 2, 3, or 4")
    return hour


def require_list(value: Any, field_name: str) -> list:
    if not isinstance(value, list):
        raise ValidationError(f"{field_name} array is required")
    return value
