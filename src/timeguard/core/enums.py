from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"


class PresenceStatus(str, Enum):
    """Recorded attendance state of a user."""

    CHECKED_IN = "Checked In"
    CHECKED_OUT = "Checked Out"


class Direction(str, Enum):
    IN = "in"
    OUT = "out"
