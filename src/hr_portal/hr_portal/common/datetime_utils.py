from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Union

from ..core.constants import UPSTREAM_DATE_FORMAT

_PUNCH_TIME_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %I:%M:%S %p",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %I:%M %p",
)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def format_upstream_date(value: date) -> str:
    """Format a date the way the attendance device API expects (DD/MM/YYYY)."""
    return value.strftime(UPSTREAM_DATE_FORMAT)


def parse_upstream_date(value: str) -> date:
    return datetime.strptime(value.strip(), UPSTREAM_DATE_FORMAT).date()


def parse_punch_time(value: Union[str, datetime]) -> datetime:
    """Parse a device punch timestamp.

    The device reports either 24-hour ("2025-10-06 08:30:15") or 12-hour
    ("2025-09-25 05:11:00 PM") local times. ISO-8601 is accepted as well;
    values carrying an offset are converted to local time.
    """
    if isinstance(value, datetime):
        return value

    text = (value or "").strip()
    for fmt in _PUNCH_TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        return parsed
    # Punches are stored as naive local times.
    return parsed.astimezone().replace(tzinfo=None)


def subtract_months(day: date, months: int) -> date:
    """Calendar-month subtraction, clamped to the last day of the target month."""
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def inclusive_day_count(start: date, end: date) -> int:
    return (end - start).days + 1
