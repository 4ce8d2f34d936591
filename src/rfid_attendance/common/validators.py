from __future__ import annotations

import re

from ..core.exceptions import ValidationError


def require_non_empty(value: str | None, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_length(value: str, field_name: str, min_len: int, max_len: int) -> str:
    if len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters long")
    if len(value) > max_len:
        raise ValidationError(f"{field_name} cannot exceed {max_len} characters")
    return value


def require_match(value: str, pattern: str, message: str) -> str:
    if not re.match(pattern, value):
        raise ValidationError(message)
    return value
