from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import PresenceStatus
from .model import AttendanceEvent


class AttendanceLogRepository(Protocol):
    """Append-only attendance event log."""

    def append(self, event: AttendanceEvent) -> None:
        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceEvent]:
        """All events; callers must not rely on the order."""

        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def record_transition(
        self,
        *,
        event: AttendanceEvent,
        status: PresenceStatus,
        last_check_in: Optional[datetime],
    ) -> None:
        """Append ``event`` and store the owner's new state as one transaction."""

        raise NotImplementedError

    def clear_all(self) -> int:
        """Bulk data reset; returns the number of deleted events."""

        raise NotImplementedError
