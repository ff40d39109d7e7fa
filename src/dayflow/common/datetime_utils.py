from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str, *, field_name: str = "date") -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid {field_name} (format: YYYY-MM-DD)", "INVALID_DATE")


def parse_optional_date(value: Optional[str], *, field_name: str = "date") -> Optional[date]:
    if value is None or not str(value).strip():
        return None
    return parse_iso_date(value, field_name=field_name)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None
