"""Reusable field rules for request schemas.

Each rule is an ``Annotated`` type so the same constraint applies wherever a
field of that kind appears (signup today, a password-change form later).
"""

from __future__ import annotations

import html
import math
import re
from datetime import date, datetime
from typing import Annotated

from pydantic import AfterValidator, BeforeValidator
from pydantic_core import PydanticCustomError

PASSWORD_MIN_LENGTH = 8
PASSWORD_SYMBOLS = "@$!%*?&"
USERNAME_MIN_LENGTH = 3

NUMBER_MESSAGE = "Must be a valid number"

PASSWORD_LENGTH_MESSAGE = f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
PASSWORD_COMPLEXITY_MESSAGE = (
    "Password must contain uppercase, lowercase, number and special character"
)

_PASSWORD_CLASSES = (
    re.compile(r"[a-z]"),
    re.compile(r"[A-Z]"),
    re.compile(r"\d"),
    re.compile(f"[{re.escape(PASSWORD_SYMBOLS)}]"),
)


def sanitize_text(value: str) -> str:
    """Trim surrounding whitespace and HTML-escape markup characters."""
    return html.escape(value.strip(), quote=True)


def password_policy_violations(password: str) -> list[str]:
    """Return the password rules ``password`` breaks, in evaluation order."""
    violations: list[str] = []
    if len(password) < PASSWORD_MIN_LENGTH:
        violations.append(PASSWORD_LENGTH_MESSAGE)
    if not all(pattern.search(password) for pattern in _PASSWORD_CLASSES):
        violations.append(PASSWORD_COMPLEXITY_MESSAGE)
    return violations


def normalize_iso_date(value: str | date) -> str:
    """Normalize an ISO-8601 date or datetime to ``YYYY-MM-DD``.

    Raises:
        ValueError: If ``value`` is not ISO-8601.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = str(value).strip()
    try:
        return date.fromisoformat(text).isoformat()
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date().isoformat()
    except ValueError as err:
        raise ValueError(f"Invalid ISO-8601 date: {text!r}") from err


def _check_sanitized_text(value: str) -> str:
    return sanitize_text(value)


def _check_required_text(value: str) -> str:
    cleaned = sanitize_text(value)
    if not cleaned:
        raise PydanticCustomError("required", "Field is required")
    return cleaned


def _check_username(value: str) -> str:
    cleaned = sanitize_text(value)
    if len(cleaned) < USERNAME_MIN_LENGTH:
        raise PydanticCustomError(
            "username_length",
            "Username must be at least {min_length} characters",
            {"min_length": USERNAME_MIN_LENGTH},
        )
    return cleaned


def _check_password(value: str) -> str:
    violations = password_policy_violations(value)
    if violations:
        raise PydanticCustomError("password_policy", "; ".join(violations))
    return value


def _check_not_empty(value: str) -> str:
    if not value:
        raise PydanticCustomError("required", "Field is required")
    return value


def _check_numeric(value: object) -> float:
    # bool is an int subclass; JSON true/false is not a quantity.
    if isinstance(value, bool) or not isinstance(value, int | float | str):
        raise PydanticCustomError("numeric", NUMBER_MESSAGE)
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError) as err:
        raise PydanticCustomError("numeric", NUMBER_MESSAGE) from err
    if not math.isfinite(number):
        raise PydanticCustomError("numeric", NUMBER_MESSAGE)
    return number


def _check_iso_date(value: object) -> str:
    if not isinstance(value, str | date):
        raise PydanticCustomError("iso_date", "Date must be a valid ISO-8601 date")
    try:
        return normalize_iso_date(value)
    except ValueError as err:
        raise PydanticCustomError("iso_date", "Date must be a valid ISO-8601 date") from err


SanitizedText = Annotated[str, AfterValidator(_check_sanitized_text)]
RequiredText = Annotated[str, AfterValidator(_check_required_text)]
Username = Annotated[str, AfterValidator(_check_username)]
StrongPassword = Annotated[str, AfterValidator(_check_password)]
NonEmptyString = Annotated[str, AfterValidator(_check_not_empty)]
IsoDate = Annotated[str, BeforeValidator(_check_iso_date)]
Numeric = Annotated[float, BeforeValidator(_check_numeric)]
