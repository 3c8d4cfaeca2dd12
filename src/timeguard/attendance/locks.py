from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator

from ..core.exceptions import BusyError


class UserLockRegistry:
    """One non-blocking lock per user.

    A second caller for the same user fails fast with ``BusyError`` instead of
    waiting. Locks live in this process only.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[int, threading.Lock] = {}

    def _lock_for(self, user_id: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[user_id] = lock
            return lock

    def is_busy(self, user_id: int) -> bool:
        return self._lock_for(user_id).locked()

    @contextmanager
    def hold(self, user_id: int) -> Iterator[None]:
        lock = self._lock_for(user_id)
        if not lock.acquire(blocking=False):
            raise BusyError("Another operation is in progress. Please wait.")
        try:
            yield
        finally:
            lock.release()
