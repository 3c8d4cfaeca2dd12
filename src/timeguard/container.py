from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.locks import UserLockRegistry
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceLogRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .timesheet.service import TimesheetService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    attendance_repo: AttendanceLogRepository
    locks: UserLockRegistry

    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    timesheet_service: TimesheetService

    conn: Optional[DatabaseConnection] = None


def build_services(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceLogRepository,
    qr_token: str,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    locks = UserLockRegistry()
    return Container(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        locks=locks,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            users_repo,
            qr_token=qr_token,
            locks=locks,
        ),
        timesheet_service=TimesheetService(attendance_repo, users_repo),
        conn=conn,
    )


def build_container(*, db_config: dict, qr_token: str) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    return build_services(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        qr_token=qr_token,
        conn=conn,
    )
