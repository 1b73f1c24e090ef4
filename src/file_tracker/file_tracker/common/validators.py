from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    text = optional_text(value)
    if text is None:
        raise ValidationError(f"{field_name} is required", field=field_name)
    return text


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters", field=field_name)
    return value


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_limit(value: Optional[str]) -> Optional[int]:
    """Parse the ``limit`` query argument; ``None`` means unlimited."""
    if value is None or value == "":
        return None
    try:
        limit = int(value)
    except (TypeError, ValueError):
        raise ValidationError("limit must be a positive integer", field="limit")
    if limit < 1:
        raise ValidationError("limit must be a positive integer", field="limit")
    return limit
