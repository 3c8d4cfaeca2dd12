from __future__ import annotations

import logging
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.enums import PresenceStatus, Role
from ..core.exceptions import AuthorizationError, InvalidCredentialsError, UserNotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid username or password."


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def find_by_credentials(self, username: str, password: str) -> Optional[User]:
        user = self._users.get_by_username((username or "").strip())
        if not user:
            return None

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder or corrupted hash values
            ok = False
        return user if ok else None

    def authenticate(self, username: str, password: str) -> User:
        user = self.find_by_credentials(username, password)
        if not user:
            logger.info("rejected login for %r", username)
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)
        return user


class UserService:
    """Use case: manage employees (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise UserNotFoundError("Employee not found")
        return user

    def list_employees(self) -> Sequence[User]:
        return [u for u in self._users.list_all() if u.role == Role.EMPLOYEE]

    def create_employee(self, *, full_name: str, username: str, password: str) -> User:
        full_name = require_non_empty(full_name, "Name")
        username = require_non_empty(username, "Username")
        require_min_length(password, "Password", 6)

        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")

        user = self._users.save(
            User(
                user_id=0,
                full_name=full_name,
                username=username,
                password_hash=generate_password_hash(password),
                role=Role.EMPLOYEE,
                status=PresenceStatus.CHECKED_OUT,
                last_check_in=None,
            )
        )
        logger.info("created employee %s (id=%s)", user.username, user.user_id)
        return user

    def update_employee(
        self,
        user_id: int,
        *,
        full_name: str,
        username: str,
        password: Optional[str] = None,
    ) -> User:
        """Rename an employee; an empty password keeps the current one.

        Past events keep the name they were recorded with.
        """

        user = self.get(user_id)
        full_name = require_non_empty(full_name, "Name")
        username = require_non_empty(username, "Username")

        other = self._users.get_by_username(username)
        if other and other.user_id != user.user_id:
            raise ValidationError("Username already exists")

        password_hash = user.password_hash
        if password:
            require_min_length(password, "Password", 6)
            password_hash = generate_password_hash(password)

        self._users.update_profile(user.user_id, full_name=full_name, username=username, password_hash=password_hash)
        return self.get(user.user_id)

    def delete_user(self, *, current_role: Role, user_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You are not allowed to do this")

        user = self.get(user_id)
        if user.role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be deleted")

        if not self._users.delete_by_id(user.user_id):
            raise ValidationError("Deleting the employee failed")
        logger.info("deleted employee %s (id=%s)", user.username, user.user_id)
