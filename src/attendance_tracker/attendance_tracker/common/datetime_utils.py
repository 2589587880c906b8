from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..core.constants import CLASS_DATE_FORMAT


def parse_class_date(value: str) -> date:
    """Parse DD-MM-YYYY string into date."""
    return datetime.strptime(value.strip(), CLASS_DATE_FORMAT).date()


def try_parse_class_date(value: Optional[str]) -> Optional[date]:
    """Like parse_class_date, but returns None for empty or malformed input."""
    if not value or not isinstance(value, str):
        return None
    try:
        return parse_class_date(value)
    except ValueError:
        return None


def format_class_date(value: date) -> str:
    return value.strftime(CLASS_DATE_FORMAT)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
