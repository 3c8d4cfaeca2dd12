from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from timeguard.attendance.model import AttendanceEvent
from timeguard.container import build_services
from timeguard.core.constants import DEFAULT_QR_TOKEN
from timeguard.core.enums import Direction, PresenceStatus, Role
from timeguard.core.exceptions import UserNotFoundError
from timeguard.main import create_app
from timeguard.users.model import User


class InMemoryUsers:
    def __init__(self, users=()):
        self._by_id: dict[int, User] = {u.user_id: u for u in users}
        self._next_id = max(self._by_id, default=0) + 1

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.username == username), None)

    def save(self, user: User) -> User:
        if not user.user_id:
            user = replace(user, user_id=self._next_id)
            self._next_id += 1
        self._by_id[user.user_id] = user
        return user

    def update_profile(self, user_id: int, *, full_name: str, username: str, password_hash: str) -> None:
        user = self._by_id.get(int(user_id))
        if user is not None:
            self._by_id[user.user_id] = replace(user, full_name=full_name, username=username, password_hash=password_hash)

    def delete_by_id(self, user_id: int) -> bool:
        return self._by_id.pop(int(user_id), None) is not None

    def list_all(self):
        return [self._by_id[k] for k in sorted(self._by_id)]


class InMemoryAttendance:
    def __init__(self, users: InMemoryUsers, events=()):
        self._users = users
        self.events: list[AttendanceEvent] = list(events)
        self.fail_on_record = False

    def append(self, event: AttendanceEvent) -> None:
        self.events.append(event)

    def list_all(self):
        return list(self.events)

    def list_for_user(self, user_id: int):
        return [e for e in self.events if e.user_id == int(user_id)]

    def record_transition(self, *, event, status, last_check_in) -> None:
        user = self._users.get_by_id(event.user_id)
        if user is None:
            raise UserNotFoundError("User not found")
        if self.fail_on_record:
            raise RuntimeError("database unavailable")
        self._users.save(replace(user, status=status, last_check_in=last_check_in))
        self.events.append(event)

    def clear_all(self) -> int:
        deleted = len(self.events)
        self.events.clear()
        return deleted


class FakeCursor:
    def __init__(self, db: "FakeDb"):
        self._db = db
        self.rowcount = 1
        self.lastrowid = 0

    def execute(self, sql, params=()):
        self._db.executed.append((" ".join(sql.split()), tuple(params)))

    def fetchone(self):
        return None

    def fetchall(self):
        return []

    def close(self):
        pass


class FakeDb:
    """Stands in for DatabaseConnection; records every statement executed."""

    def __init__(self):
        self.executed: list[tuple[str, tuple]] = []
        self.commits = 0

    def connect(self):
        return self

    def cursor(self, dictionary=True):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        pass

    def close(self):
        pass


def make_user(user_id: int, name: str, username: str, password: str = "secret123", role: Role = Role.EMPLOYEE) -> User:
    return User(
        user_id=user_id,
        full_name=name,
        username=username,
        password_hash=generate_password_hash(password),
        role=role,
        status=PresenceStatus.CHECKED_OUT,
        last_check_in=None,
    )


@pytest.fixture
def admin() -> User:
    return make_user(1, "Admin User", "admin", "admin", role=Role.ADMIN)


@pytest.fixture
def alice() -> User:
    return make_user(2, "Alice", "alice", "alice123")


@pytest.fixture
def bob() -> User:
    return make_user(3, "Bob", "bob", "bob123")


@pytest.fixture
def users_repo(admin, alice, bob) -> InMemoryUsers:
    return InMemoryUsers([admin, alice, bob])


@pytest.fixture
def attendance_repo(users_repo) -> InMemoryAttendance:
    return InMemoryAttendance(users_repo)


@pytest.fixture
def container(users_repo, attendance_repo):
    return build_services(users_repo=users_repo, attendance_repo=attendance_repo, qr_token=DEFAULT_QR_TOKEN)


@pytest.fixture
def app(container):
    return create_app(container=container, settings_module="timeguard.config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def fake_db() -> FakeDb:
    return FakeDb()


@pytest.fixture
def make_event():
    counter = iter(range(1, 10_000))

    def _make(user: User, direction: Direction, when: datetime, **kwargs) -> AttendanceEvent:
        return AttendanceEvent(
            event_id=f"log-{next(counter)}",
            user_id=user.user_id,
            user_name=user.full_name,
            timestamp=when,
            direction=direction,
            ip=kwargs.pop("ip", "10.0.0.1"),
            **kwargs,
        )

    return _make
