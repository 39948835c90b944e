"""Domain exceptions raised below the HTTP layer.

Endpoints translate these into ``HTTPException`` so services and repositories
stay independent of FastAPI.
"""

from __future__ import annotations

from fastapi import status


class FarmLedgerError(Exception):
    """Base class for expected, user-visible failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    detail: str = "Request could not be processed"

    def __init__(self, detail: str | None = None) -> None:
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class UsernameTakenError(FarmLedgerError):
    """A user with the requested username already exists."""

    status_code = status.HTTP_409_CONFLICT
    detail = "Username already exists"


class UserNotFoundError(FarmLedgerError):
    """No user matches the requested username."""

    status_code = status.HTTP_404_NOT_FOUND
    detail = "User not found"


class TwoFactorNotConfiguredError(FarmLedgerError):
    """The user has not completed TOTP setup."""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "2FA not setup"


class InvalidFilterError(FarmLedgerError):
    """A report filter value could not be normalized."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)
