"""Bounded in-memory log of login attempts."""

from __future__ import annotations

from collections import deque
from datetime import UTC, datetime
from threading import Lock
from typing import Literal

LoginStatus = Literal["success", "fail"]


class LoginActivityLog:
    """Keep the most recent login attempts; the oldest entry is evicted first.

    Entries live only in process memory and are lost on restart.
    """

    def __init__(self, max_entries: int = 100) -> None:
        self._entries: deque[dict[str, str]] = deque(maxlen=max_entries)
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def record(self, username: str, status: LoginStatus, now: datetime | None = None) -> None:
        """Append a login attempt."""
        moment = now or datetime.now(UTC)
        entry = {
            "username": username,
            "status": status,
            "time": moment.isoformat().replace("+00:00", "Z"),
        }
        with self._lock:
            self._entries.append(entry)

    def recent(self) -> list[dict[str, str]]:
        """Return a copy of the retained entries, newest first."""
        with self._lock:
            return [dict(entry) for entry in reversed(self._entries)]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
