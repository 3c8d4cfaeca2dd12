from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import PresenceStatus, Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Plain data object; no DB access lives here.
    """

    user_id: int
    full_name: str
    username: str
    password_hash: str
    role: Role
    status: PresenceStatus = PresenceStatus.CHECKED_OUT
    last_check_in: Optional[datetime] = None

    @property
    def is_checked_in(self) -> bool:
        return self.status == PresenceStatus.CHECKED_IN

    def to_public_dict(self) -> dict:
        """Client-facing view (never exposes the credential)."""
        return {
            "user_id": self.user_id,
            "full_name": self.full_name,
            "username": self.username,
            "role": self.role.value,
            "status": self.status.value,
            "last_check_in": self.last_check_in.isoformat() if self.last_check_in else None,
        }
