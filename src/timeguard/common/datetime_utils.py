from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional, Union

DateLike = Union[date, datetime]

# Last representable instant of a day; inclusive upper bound of a week window.
END_OF_DAY = time(23, 59, 59, 999999)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def week_start(value: DateLike) -> datetime:
    """Monday 00:00 of the week containing ``value``.

    Uses the ISO weekday (Monday=1 .. Sunday=7) so Sunday belongs to the week
    that started six days earlier, whatever the locale's first weekday is.
    """

    day = _as_date(value)
    monday = day - timedelta(days=day.isoweekday() - 1)
    return datetime.combine(monday, time.min)


def week_end(start: DateLike) -> datetime:
    """Sunday 23:59:59.999999 of the week starting at ``start``."""

    return datetime.combine(_as_date(start) + timedelta(days=6), END_OF_DAY)


def week_days(start: DateLike) -> list[date]:
    first = _as_date(start)
    return [first + timedelta(days=i) for i in range(7)]


def format_hhmm(value: Optional[datetime]) -> str:
    """24-hour HH:MM, independent of the process locale."""

    if value is None:
        return ""
    return f"{value.hour:02d}:{value.minute:02d}"
