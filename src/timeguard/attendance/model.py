from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from ..core.enums import Direction, PresenceStatus


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class LocationUnavailable:
    """The location lookup ran and failed; ``reason`` is the provider's message."""

    reason: str


# None means the lookup was skipped.
Location = Union[Coordinates, LocationUnavailable, None]


@dataclass(frozen=True)
class AttendanceEvent:
    """Immutable audit record of one check-in/check-out toggle."""

    event_id: str
    user_id: int
    user_name: str
    timestamp: datetime
    direction: Direction
    ip: str
    location: Location = None

    @property
    def coordinates(self) -> Optional[Coordinates]:
        return self.location if isinstance(self.location, Coordinates) else None

    @property
    def location_error(self) -> Optional[str]:
        return self.location.reason if isinstance(self.location, LocationUnavailable) else None

    def to_dict(self) -> dict:
        coords = self.coordinates
        return {
            "event_id": self.event_id,
            "user_id": self.user_id,
            "user_name": self.user_name,
            "timestamp": self.timestamp.isoformat(),
            "direction": self.direction.value,
            "ip": self.ip,
            "location": {"latitude": coords.latitude, "longitude": coords.longitude} if coords else None,
            "location_error": self.location_error,
        }


@dataclass(frozen=True)
class ToggleResult:
    """Outcome of a check-in/out attempt; failures carry the domain error."""

    success: bool
    message: str
    status: Optional[PresenceStatus] = None
    event: Optional[AttendanceEvent] = None
    error: Optional[Exception] = None

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "message": self.message,
            "status": self.status.value if self.status else None,
            "event": self.event.to_dict() if self.event else None,
        }
