"""Fixed-window request rate limiting."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from threading import Lock

AUTH_BUCKET = "auth"
GENERAL_BUCKET = "general"

AUTH_LIMIT_MESSAGE = "Too many login attempts, please try again later"
GENERAL_LIMIT_MESSAGE = "Too many requests, please try again later."


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of counting one request against a bucket."""

    allowed: bool
    remaining: int
    retry_after: int


class RateLimiter:
    """Count requests per ``(client, bucket)`` in fixed, aligned windows.

    Window ``n`` covers ``[n * window_seconds, (n + 1) * window_seconds)``;
    every counter resets when the window index advances.
    """

    def __init__(self, limits: dict[str, int], window_seconds: int = 15 * 60) -> None:
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.limits = dict(limits)
        self.window_seconds = window_seconds
        self._counts: dict[tuple[str, str], int] = {}
        self._window_index: int | None = None
        self._lock = Lock()

    def _advance(self, window_index: int) -> None:
        if window_index != self._window_index:
            # Counters from earlier windows can never be consulted again.
            self._counts.clear()
            self._window_index = window_index

    def hit(self, client_key: str, bucket: str, now: float | None = None) -> RateLimitDecision:
        """Count a request and report whether it is within the bucket's limit.

        Rejected requests are counted too, so a client hammering the endpoint
        stays blocked until the window resets.

        Raises:
            KeyError: If ``bucket`` has no configured limit.
        """
        limit = self.limits[bucket]
        current = time.time() if now is None else now
        window_index = math.floor(current / self.window_seconds)
        window_end = (window_index + 1) * self.window_seconds
        retry_after = max(1, math.ceil(window_end - current))

        with self._lock:
            self._advance(window_index)
            key = (client_key, bucket)
            count = self._counts.get(key, 0) + 1
            self._counts[key] = count

        return RateLimitDecision(
            allowed=count <= limit,
            remaining=max(0, limit - count),
            retry_after=retry_after,
        )

    def allow(self, client_key: str, bucket: str, now: float | None = None) -> bool:
        """Return True if the request fits within the bucket's window limit."""
        return self.hit(client_key, bucket, now).allowed

    def reset(self) -> None:
        """Forget all counters."""
        with self._lock:
            self._counts.clear()
            self._window_index = None
