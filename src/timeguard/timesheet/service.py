from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Sequence

from ..attendance.repository import AttendanceLogRepository
from ..common.datetime_utils import DateLike, format_hhmm
from ..core.enums import Role
from ..users.model import User
from ..users.repository import UserRepository
from .aggregator import aggregate
from .exporter import export_filename, export_rows, to_csv
from .model import TimesheetData, WeekWindow


@dataclass(frozen=True)
class WeeklyTimesheet:
    window: WeekWindow
    users: Sequence[User]
    data: TimesheetData

    def to_dict(self) -> dict:
        days = self.window.days
        employees = []
        for user in self.users:
            entries = self.data.get(user.user_id, {})
            cells = {}
            for day in days:
                entry = entries.get(day)
                if entry is None:
                    continue
                cells[day.isoformat()] = {
                    "check_in": format_hhmm(entry.check_in) or None,
                    "check_out": format_hhmm(entry.check_out) or None,
                    "duration": round(entry.duration, 2),
                    "complete": entry.is_complete,
                    "inverted": entry.is_inverted,
                }
            employees.append({"user_id": user.user_id, "full_name": user.full_name, "days": cells})

        start = self.window.start.date()
        return {
            "week_start": start.isoformat(),
            "week_end": self.window.end.date().isoformat(),
            "days": [d.isoformat() for d in days],
            "prev": (start - timedelta(days=7)).isoformat(),
            "next": (start + timedelta(days=7)).isoformat(),
            "employees": employees,
        }


@dataclass(frozen=True)
class CsvExport:
    filename: str
    content: str


class TimesheetService:
    """Weekly timesheet for all employees."""

    def __init__(self, attendance: AttendanceLogRepository, users: UserRepository):
        self._attendance = attendance
        self._users = users

    def build_week(self, reference: DateLike) -> WeeklyTimesheet:
        window = WeekWindow.containing(reference)
        employees = [u for u in self._users.list_all() if u.role == Role.EMPLOYEE]
        data = aggregate(employees, self._attendance.list_all(), window.start, window.end)
        return WeeklyTimesheet(window=window, users=employees, data=data)

    def export_week(self, reference: DateLike) -> CsvExport:
        week = self.build_week(reference)
        rows = export_rows(week.users, week.data, week.window)
        return CsvExport(filename=export_filename(week.window), content=to_csv(rows))
