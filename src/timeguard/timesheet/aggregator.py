from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Iterable

from ..attendance.model import AttendanceEvent
from ..core.enums import Direction
from ..users.model import User
from .model import DayEntry, TimesheetData

logger = logging.getLogger(__name__)


def _hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600


def aggregate(
    users: Iterable[User],
    events: Iterable[AttendanceEvent],
    start: datetime,
    end: datetime,
) -> TimesheetData:
    """Fold events into per-user, per-day entries for ``[start, end]``.

    Every user gets a mapping, empty when they have no events in range. The
    earliest check-in and the latest check-out of a day win, so the result
    does not depend on event order. Events of unknown users are dropped.
    """

    data: TimesheetData = {u.user_id: {} for u in users}
    dropped = 0

    for event in events:
        if not (start <= event.timestamp <= end):
            continue

        days = data.get(event.user_id)
        if days is None:
            dropped += 1
            continue

        key = event.timestamp.date()
        entry = days.get(key) or DayEntry()

        if event.direction == Direction.IN:
            if entry.check_in is None or event.timestamp < entry.check_in:
                entry = replace(entry, check_in=event.timestamp)
        elif entry.check_out is None or event.timestamp > entry.check_out:
            entry = replace(entry, check_out=event.timestamp)

        days[key] = entry

    if dropped:
        logger.debug("dropped %s events of unknown users", dropped)

    for days in data.values():
        for key, entry in days.items():
            if entry.is_complete:
                days[key] = replace(entry, duration=_hours_between(entry.check_in, entry.check_out))

    return data
