from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """User registry interface.

    Services depend on this protocol, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def save(self, user: User) -> User:
        """Insert when ``user.user_id`` is 0, update otherwise; returns the stored user."""

        raise NotImplementedError

    def update_profile(self, user_id: int, *, full_name: str, username: str, password_hash: str) -> None:
        """Change the profile columns only; status and last check-in are left untouched."""

        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError
