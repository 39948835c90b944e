"""Issuing and verifying signed bearer tokens.

Tokens are HS256 JWTs carrying the user's id, username and role. They are
never stored server-side: anything holding the signing secret can verify
them, and nothing can revoke one before its ``exp`` claim passes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from farm_ledger.core.settings import settings

INVALID_TOKEN_DETAIL = "Invalid or expired token"


class InvalidTokenError(Exception):
    """Raised for any token that must be rejected.

    Expired, tampered and malformed tokens are deliberately indistinguishable
    to callers.
    """

    def __init__(self) -> None:
        super().__init__(INVALID_TOKEN_DETAIL)


@dataclass(frozen=True)
class TokenClaims:
    """Identity claims recovered from a verified token."""

    user_id: int
    username: str
    role: str
    issued_at: datetime
    expires_at: datetime


def default_token_ttl() -> timedelta:
    """Return the configured token lifetime (24 hours unless overridden)."""
    return timedelta(minutes=settings.access_token_expire_minutes)


def create_access_token(
    user_id: int,
    username: str,
    role: str,
    *,
    ttl: timedelta | None = None,
    now: datetime | None = None,
    secret: str | None = None,
) -> str:
    """Create a signed access token for a user.

    Args:
        user_id: Primary key of the user.
        username: Username claim.
        role: Role claim (``admin`` or ``user``).
        ttl: Token lifetime; defaults to :func:`default_token_ttl`.
        now: Issue time, injectable for tests.
        secret: Signing secret; defaults to ``settings.secret_key``.
    """
    issued_at = now or datetime.now(UTC)
    expires_at = issued_at + (ttl or default_token_ttl())
    to_encode: dict[str, Any] = {
        "sub": str(user_id),
        "id": user_id,
        "username": username,
        "role": role,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    encoded_jwt: str = jwt.encode(
        to_encode,
        secret or settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(
    token: str,
    *,
    now: datetime | None = None,
    secret: str | None = None,
) -> TokenClaims:
    """Verify a token's signature and expiry and return its claims.

    Raises:
        InvalidTokenError: If the token is malformed, signed with another key
            or algorithm, missing claims, or expired at ``now``.
    """
    try:
        payload = jwt.decode(
            token,
            secret or settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            # Expiry is checked below against an injectable clock.
            options={"verify_exp": False},
        )
    except JWTError as err:
        raise InvalidTokenError() from err

    try:
        user_id = int(payload["id"])
        username = str(payload["username"])
        role = str(payload["role"])
        issued_at = datetime.fromtimestamp(int(payload["iat"]), tz=UTC)
        expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=UTC)
    except (KeyError, TypeError, ValueError) as err:
        raise InvalidTokenError() from err

    current = now or datetime.now(UTC)
    if current >= expires_at:
        raise InvalidTokenError()

    return TokenClaims(
        user_id=user_id,
        username=username,
        role=role,
        issued_at=issued_at,
        expires_at=expires_at,
    )
