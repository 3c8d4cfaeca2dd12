from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.constants import MAX_IP_LENGTH, MAX_LOCATION_ERROR_LENGTH
from ..core.enums import Direction, PresenceStatus
from ..core.exceptions import UserNotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceEvent, Coordinates, Location, LocationUnavailable
from .repository import AttendanceLogRepository

_COLUMNS = "event_id, user_id, user_name, event_time, direction, ip, latitude, longitude, location_error"

_INSERT = """
    INSERT INTO attendance_events(
        event_id, user_id, user_name, event_time, direction, ip, latitude, longitude, location_error
    )
    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
"""


def _location_from_row(row: dict) -> Location:
    if row.get("latitude") is not None and row.get("longitude") is not None:
        return Coordinates(latitude=float(row["latitude"]), longitude=float(row["longitude"]))
    if row.get("location_error"):
        return LocationUnavailable(reason=row["location_error"])
    return None


def _to_event(row: dict) -> AttendanceEvent:
    return AttendanceEvent(
        event_id=row["event_id"],
        user_id=int(row["user_id"]),
        user_name=row["user_name"],
        timestamp=row["event_time"],
        direction=Direction(row["direction"]),
        ip=row["ip"],
        location=_location_from_row(row),
    )


def _insert_params(event: AttendanceEvent) -> tuple:
    coords = event.coordinates
    # truncated to the column widths so a long reason never fails the insert
    location_error = event.location_error[:MAX_LOCATION_ERROR_LENGTH] if event.location_error else None
    return (
        event.event_id,
        event.user_id,
        event.user_name,
        event.timestamp,
        event.direction.value,
        event.ip[:MAX_IP_LENGTH],
        coords.latitude if coords else None,
        coords.longitude if coords else None,
        location_error,
    )


class MySQLAttendanceRepository(AttendanceLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, event: AttendanceEvent) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_INSERT, _insert_params(event))

    def list_all(self) -> Sequence[AttendanceEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_events")
            return [_to_event(r) for r in fetchall(cur)]

    def list_for_user(self, user_id: int) -> Sequence[AttendanceEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_events WHERE user_id=%s", (int(user_id),))
            return [_to_event(r) for r in fetchall(cur)]

    def record_transition(
        self,
        *,
        event: AttendanceEvent,
        status: PresenceStatus,
        last_check_in: Optional[datetime],
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET status=%s, last_check_in=%s WHERE user_id=%s",
                (status.value, last_check_in, event.user_id),
            )
            if cur.rowcount == 0:
                # Raising here rolls the whole transaction back.
                raise UserNotFoundError(f"User {event.user_id} not found")
            cur.execute(_INSERT, _insert_params(event))

    def clear_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_events")
            return int(cur.rowcount)
