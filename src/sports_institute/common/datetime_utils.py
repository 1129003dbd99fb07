from __future__ import annotations

import calendar
from datetime import date, datetime

from ..core.enums import Weekday
from ..core.exceptions import ValidationError

_WEEKDAYS = list(Weekday)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_month(value: str) -> tuple[int, int]:
    """Parse a YYYY-MM month key into (year, month)."""
    try:
        parsed = datetime.strptime((value or "").strip(), "%Y-%m")
    except ValueError:
        raise ValidationError("Month must be in YYYY-MM format")
    return parsed.year, parsed.month


def month_key(value: date) -> str:
    return value.strftime("%Y-%m")


def days_in_month(month: str) -> int:
    year, month_no = parse_month(month)
    return calendar.monthrange(year, month_no)[1]


def weekday_code(value: date) -> Weekday:
    return _WEEKDAYS[value.weekday()]


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def parse_request_date(value: str | None, *, default: date | None = None) -> date:
    """Date from a query/form field; blank falls back to `default`."""
    if not value or not value.strip():
        if default is None:
            raise ValidationError("Date is required")
        return default
    try:
        return parse_iso_date(value.strip())
    except ValueError:
        raise ValidationError("Date must be in YYYY-MM-DD format")
