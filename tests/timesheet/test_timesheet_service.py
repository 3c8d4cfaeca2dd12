from __future__ import annotations

from datetime import date, datetime

from timeguard.core.enums import Direction
from timeguard.timesheet.service import TimesheetService


def test_build_week_lists_employees_only(users_repo, attendance_repo, admin, alice, bob, make_event):
    attendance_repo.events.append(make_event(admin, Direction.IN, datetime(2026, 3, 3, 8)))
    svc = TimesheetService(attendance_repo, users_repo)

    week = svc.build_week(date(2026, 3, 5))

    assert [u.user_id for u in week.users] == [alice.user_id, bob.user_id]
    assert admin.user_id not in week.data
    assert week.data[alice.user_id] == {}


def test_week_dict_has_navigation_and_cells(users_repo, attendance_repo, alice, make_event):
    attendance_repo.events.extend(
        [
            make_event(alice, Direction.IN, datetime(2026, 3, 3, 8)),
            make_event(alice, Direction.OUT, datetime(2026, 3, 3, 12, 15)),
        ]
    )
    payload = TimesheetService(attendance_repo, users_repo).build_week(date(2026, 3, 8)).to_dict()

    assert payload["week_start"] == "2026-03-02"
    assert payload["week_end"] == "2026-03-08"
    assert payload["prev"] == "2026-02-23"
    assert payload["next"] == "2026-03-09"
    cell = payload["employees"][0]["days"]["2026-03-03"]
    assert cell == {"check_in": "08:00", "check_out": "12:15", "duration": 4.25, "complete": True, "inverted": False}
    assert payload["employees"][1]["days"] == {}


def test_export_week(users_repo, attendance_repo, alice, make_event):
    attendance_repo.events.extend(
        [
            make_event(alice, Direction.IN, datetime(2026, 3, 4, 8)),
            make_event(alice, Direction.OUT, datetime(2026, 3, 4, 16, 30)),
            # previous week, not exported
            make_event(alice, Direction.IN, datetime(2026, 2, 27, 8)),
        ]
    )

    export = TimesheetService(attendance_repo, users_repo).export_week(date(2026, 3, 4))

    assert export.filename == "timesheet_2026-03-02.csv"
    assert export.content.splitlines() == [
        "Employee Name,Date,Check In,Check Out,Total Hours Worked",
        "Alice,2026-03-04,08:00,16:30,8.50",
    ]
