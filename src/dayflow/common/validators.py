from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Sequence

from ..core.exceptions import ValidationError

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def require_fields(payload: Mapping[str, Any], fields: Sequence[str], message: str) -> None:
    """Raise MISSING_REQUIRED_FIELDS if any of ``fields`` is absent or blank."""
    if any(is_blank(payload.get(f)) for f in fields):
        raise ValidationError(message, "MISSING_REQUIRED_FIELDS", details={"required": list(fields)})


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters", "WEAK_PASSWORD")
    return value


def validate_email(value: Any) -> str:
    if not isinstance(value, str):
        raise ValidationError("Invalid email format", "INVALID_EMAIL")
    email = value.strip()
    if not EMAIL_RE.match(email):
        raise ValidationError("Invalid email format", "INVALID_EMAIL")
    return email.lower()


def parse_money(value: Any, field_name: str) -> Decimal:
    """Parse a non-negative monetary amount."""
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number", "INVALID_NUMERIC_VALUE")
    if not amount.is_finite() or amount < 0:
        raise ValidationError("Salary and deductions must be positive values", "INVALID_NUMERIC_VALUE")
    return amount


def parse_int(value: Any, field_name: str, code: str = "INVALID_NUMERIC_VALUE") -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer", code)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer", code)
