from __future__ import annotations

import math
import re

from ..core.exceptions import InvalidTimeFormatError, ValidationError

_HHMM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_hhmm(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not _HHMM.match(value):
        raise InvalidTimeFormatError(f"{field_name} must be in 24-hour HH:MM format")
    return value


def coerce_float(value) -> float | None:
    """Float or None for missing, non-numeric or non-finite input."""
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    return result if math.isfinite(result) else None
