from __future__ import annotations

import csv
import io
from typing import Iterable, Sequence

from ..common.datetime_utils import format_hhmm
from ..core.constants import TIMESHEET_CSV_HEADER
from ..users.model import User
from .model import TimesheetData, WeekWindow


def export_rows(users: Iterable[User], data: TimesheetData, window: WeekWindow) -> list[list[str]]:
    """One row per existing user-day bucket, users in order, days Monday first.

    Days without a bucket produce no row.
    """

    rows: list[list[str]] = []
    for user in users:
        days = data.get(user.user_id, {})
        for day in window.days:
            entry = days.get(day)
            if entry is None:
                continue
            rows.append(
                [
                    user.full_name,
                    day.isoformat(),
                    format_hhmm(entry.check_in),
                    format_hhmm(entry.check_out),
                    f"{entry.duration:.2f}",
                ]
            )
    return rows


def to_csv(rows: Iterable[Sequence[str]]) -> str:
    # Minimal quoting: plain fields stay bare, commas/quotes/newlines get quoted.
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(TIMESHEET_CSV_HEADER)
    writer.writerows(rows)
    return out.getvalue()


def export_filename(window: WeekWindow) -> str:
    return f"timesheet_{window.start.date().isoformat()}.csv"
