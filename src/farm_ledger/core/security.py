"""Password hashing built on bcrypt."""
from __future__ import annotations

import bcrypt

from farm_ledger.core.settings import settings

# bcrypt only consumes the first 72 bytes of its input.
BCRYPT_MAX_BYTES = 72


class MalformedHashError(ValueError):
    """Raised when a stored password hash cannot be parsed."""


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int | None = None) -> str:
    """Return a salted bcrypt hash of ``password``.

    Args:
        password: Plain-text password.
        rounds: Work factor; defaults to ``settings.bcrypt_rounds`` (12).

    Returns:
        The encoded hash, including algorithm, cost and salt.
    """
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(_encode(password), salt).decode("ascii")


def verify_password(password: str, hashed_password: str) -> bool:
    """Check ``password`` against a stored bcrypt hash.

    Returns:
        True when the password matches, False on any mismatch.

    Raises:
        MalformedHashError: If ``hashed_password`` is not a bcrypt hash.
    """
    try:
        return bcrypt.checkpw(_encode(password), hashed_password.encode("ascii"))
    except (ValueError, UnicodeEncodeError) as err:
        raise MalformedHashError("Stored password hash is malformed") from err
