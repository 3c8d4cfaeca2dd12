from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from ..core.enums import PresenceStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, full_name, username, password_hash, role, status, last_check_in"


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        full_name=row["full_name"],
        username=row["username"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        status=PresenceStatus(row["status"]),
        last_check_in=row.get("last_check_in"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def save(self, user: User) -> User:
        with db_cursor(self._conn_factory) as (_, cur):
            if not user.user_id:
                cur.execute(
                    """
                    INSERT INTO users(full_name, username, password_hash, role, status, last_check_in)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        user.full_name,
                        user.username,
                        user.password_hash,
                        user.role.value,
                        user.status.value,
                        user.last_check_in,
                    ),
                )
                return replace(user, user_id=int(cur.lastrowid))

            cur.execute(
                """
                UPDATE users
                SET full_name=%s, username=%s, password_hash=%s, role=%s, status=%s, last_check_in=%s
                WHERE user_id=%s
                """,
                (
                    user.full_name,
                    user.username,
                    user.password_hash,
                    user.role.value,
                    user.status.value,
                    user.last_check_in,
                    user.user_id,
                ),
            )
            return user

    def update_profile(self, user_id: int, *, full_name: str, username: str, password_hash: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET full_name=%s, username=%s, password_hash=%s WHERE user_id=%s",
                (full_name, username, password_hash, user_id),
            )

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (user_id,))
            return cur.rowcount > 0

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY user_id ASC")
            return [_to_user(r) for r in fetchall(cur)]
