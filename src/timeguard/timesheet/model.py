from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, Optional

from ..common.datetime_utils import DateLike, week_days, week_end, week_start


@dataclass(frozen=True)
class DayEntry:
    """First check-in / last check-out of one user on one calendar day."""

    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    duration: float = 0.0  # hours

    @property
    def is_complete(self) -> bool:
        return self.check_in is not None and self.check_out is not None

    @property
    def is_inverted(self) -> bool:
        """Check-out before check-in; duration is negative and kept as is."""
        return self.is_complete and self.check_out < self.check_in


@dataclass(frozen=True)
class WeekWindow:
    start: datetime
    end: datetime

    @classmethod
    def containing(cls, value: DateLike) -> "WeekWindow":
        start = week_start(value)
        return cls(start=start, end=week_end(start))

    @property
    def days(self) -> list[date]:
        return week_days(self.start)

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end


# user_id -> calendar day -> entry
TimesheetData = Dict[int, Dict[date, DayEntry]]
