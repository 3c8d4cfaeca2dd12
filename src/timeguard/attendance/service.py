from __future__ import annotations

import logging
import threading
import time
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.enums import Direction, PresenceStatus
from ..core.exceptions import (
    BusyError,
    GeolocationError,
    InvalidQrPayloadError,
    IpLookupError,
    UserNotFoundError,
)
from ..users.repository import UserRepository
from .locks import UserLockRegistry
from .lookup import GeolocationProvider, IpLookup
from .model import AttendanceEvent, Location, LocationUnavailable, ToggleResult
from .repository import AttendanceLogRepository

logger = logging.getLogger(__name__)

FAILED_MESSAGE = "Check-in process failed. Please try again."
INVALID_QR_MESSAGE = "Invalid QR Code. Please scan the official TimeGuard code."


class EventIdFactory:
    """Time-based ids (``log-<ns>``) that strictly increase within the process."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last = 0

    def __call__(self) -> str:
        with self._lock:
            self._last = max(time.time_ns(), self._last + 1)
            return f"log-{self._last}"


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceLogRepository,
        users: UserRepository,
        *,
        qr_token: str,
        locks: Optional[UserLockRegistry] = None,
        id_factory: Optional[EventIdFactory] = None,
    ):
        self._attendance = attendance
        self._users = users
        self._qr_token = qr_token
        self._locks = locks or UserLockRegistry()
        self._new_id = id_factory or EventIdFactory()

    def validate_qr_payload(self, decoded: str) -> None:
        if not isinstance(decoded, str) or decoded.strip() != self._qr_token:
            raise InvalidQrPayloadError(INVALID_QR_MESSAGE)

    def toggle(
        self,
        user_id: int,
        *,
        ip_lookup: IpLookup,
        geolocation: GeolocationProvider,
        now: Optional[datetime] = None,
    ) -> ToggleResult:
        """Flip the user's recorded state and log one event.

        Never raises: every failure comes back as an unsuccessful ToggleResult.
        """

        try:
            with self._locks.hold(user_id):
                return self._toggle(user_id, ip_lookup=ip_lookup, geolocation=geolocation, now=now)
        except BusyError as e:
            logger.info("toggle rejected for user %s: busy", user_id)
            return ToggleResult(success=False, message=str(e), error=e)
        except UserNotFoundError as e:
            logger.warning("toggle for unknown user %s", user_id)
            return ToggleResult(success=False, message=str(e), error=e)
        except IpLookupError as e:
            logger.warning("toggle aborted for user %s: %s", user_id, e)
            return ToggleResult(success=False, message=FAILED_MESSAGE, error=e)
        except Exception as e:
            logger.exception("toggle failed for user %s", user_id)
            return ToggleResult(success=False, message=FAILED_MESSAGE, error=e)

    def _toggle(
        self,
        user_id: int,
        *,
        ip_lookup: IpLookup,
        geolocation: GeolocationProvider,
        now: Optional[datetime],
    ) -> ToggleResult:
        user = self._users.get_by_id(user_id)
        if not user:
            raise UserNotFoundError("User not found")

        ip = ip_lookup.current_ip()

        location: Location
        try:
            location = geolocation.current_coordinates()
        except GeolocationError as e:
            logger.warning("location unavailable for user %s: %s", user_id, e)
            location = LocationUnavailable(reason=str(e))

        now = now or now_local()
        if user.is_checked_in:
            direction, new_status, last_check_in = Direction.OUT, PresenceStatus.CHECKED_OUT, user.last_check_in
        else:
            direction, new_status, last_check_in = Direction.IN, PresenceStatus.CHECKED_IN, now

        event = AttendanceEvent(
            event_id=self._new_id(),
            user_id=user.user_id,
            user_name=user.full_name,
            timestamp=now,
            direction=direction,
            ip=ip,
            location=location,
        )
        self._attendance.record_transition(event=event, status=new_status, last_check_in=last_check_in)

        logger.info("user %s checked %s from %s", user_id, direction.value, ip)
        return ToggleResult(
            success=True,
            message=f"Successfully Checked {direction.value}!",
            status=new_status,
            event=event,
        )

    def is_busy(self, user_id: int) -> bool:
        return self._locks.is_busy(user_id)

    def history_for_user(self, user_id: int) -> Sequence[AttendanceEvent]:
        """The user's events, newest first."""
        return sorted(self._attendance.list_for_user(user_id), key=lambda e: e.timestamp, reverse=True)

    def all_logs(self) -> Sequence[AttendanceEvent]:
        return sorted(self._attendance.list_all(), key=lambda e: e.timestamp, reverse=True)

    def reset_logs(self) -> int:
        deleted = self._attendance.clear_all()
        logger.warning("attendance log reset, %s events deleted", deleted)
        return deleted
