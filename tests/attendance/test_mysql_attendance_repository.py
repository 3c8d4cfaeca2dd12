from __future__ import annotations

from datetime import datetime

from timeguard.attendance.model import AttendanceEvent, LocationUnavailable
from timeguard.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from timeguard.core.constants import MAX_IP_LENGTH, MAX_LOCATION_ERROR_LENGTH
from timeguard.core.enums import Direction, PresenceStatus


def _event(**kwargs) -> AttendanceEvent:
    values = dict(
        event_id="log-1",
        user_id=2,
        user_name="Alice",
        timestamp=datetime(2026, 3, 3, 8),
        direction=Direction.IN,
        ip="203.0.113.7",
    )
    values.update(kwargs)
    return AttendanceEvent(**values)


def test_record_transition_updates_user_then_inserts_event_in_one_commit(fake_db):
    event = _event()

    MySQLAttendanceRepository(fake_db).record_transition(
        event=event, status=PresenceStatus.CHECKED_IN, last_check_in=event.timestamp
    )

    (update_sql, update_params), (insert_sql, insert_params) = fake_db.executed
    assert update_sql.startswith("UPDATE users SET status=%s, last_check_in=%s")
    assert update_params == ("Checked In", event.timestamp, 2)
    assert insert_sql.startswith("INSERT INTO attendance_events")
    assert insert_params == ("log-1", 2, "Alice", event.timestamp, "in", "203.0.113.7", None, None, None)
    assert fake_db.commits == 1


def test_long_location_error_fits_its_column(fake_db):
    event = _event(location=LocationUnavailable(reason="x" * 300))

    MySQLAttendanceRepository(fake_db).append(event)

    params = fake_db.executed[0][1]
    assert params[-1] == "x" * MAX_LOCATION_ERROR_LENGTH


def test_long_ip_fits_its_column(fake_db):
    MySQLAttendanceRepository(fake_db).append(_event(ip="1" * 80))

    assert len(fake_db.executed[0][1][5]) == MAX_IP_LENGTH
