"""Process-wide mutable state shared by request handlers."""

from __future__ import annotations

from dataclasses import dataclass

from farm_ledger.core.settings import Settings
from farm_ledger.services.login_activity import LoginActivityLog
from farm_ledger.services.rate_limit import AUTH_BUCKET, GENERAL_BUCKET, RateLimiter


@dataclass
class RuntimeState:
    """Rate-limit counters and the login activity log.

    Created once at application startup, stored on ``app.state`` and never
    persisted.
    """

    rate_limiter: RateLimiter
    login_activity: LoginActivityLog
    rate_limit_enabled: bool = True

    @classmethod
    def from_settings(cls, config: Settings) -> RuntimeState:
        limiter = RateLimiter(
            {
                AUTH_BUCKET: config.auth_rate_limit_max,
                GENERAL_BUCKET: config.api_rate_limit_max,
            },
            window_seconds=config.rate_limit_window_seconds,
        )
        return cls(
            rate_limiter=limiter,
            login_activity=LoginActivityLog(config.login_activity_limit),
            rate_limit_enabled=config.rate_limit_enabled,
        )
