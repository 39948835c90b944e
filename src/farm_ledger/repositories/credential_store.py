"""Persistence for user credentials."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from farm_ledger.core.errors import UsernameTakenError, UserNotFoundError
from farm_ledger.core.security import hash_password
from farm_ledger.models import (
    ROLE_ADMIN,
    ROLE_USER,
    Crop,
    Expense,
    Income,
    InventoryItem,
    Project,
    User,
)

__all__ = ["CredentialStore", "DEFAULT_ACCOUNTS", "DefaultAccount"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DefaultAccount:
    username: str
    password: str
    role: str


# Well-known demo credentials; never use outside local demos.
DEFAULT_ACCOUNTS: tuple[DefaultAccount, ...] = (
    DefaultAccount("admin", "adminpass", ROLE_ADMIN),
    DefaultAccount("user1", "user1pass", ROLE_USER),
    DefaultAccount("user2", "user2pass", ROLE_USER),
)

# Deleted children-first; no foreign keys exist today but the order is stable.
_RESET_TABLES = (Income, Expense, Project, Crop, InventoryItem, User)


class CredentialStore:
    """Thin wrapper around database access for user records."""

    def __init__(self, session: Session) -> None:
        """Initialize the store with a SQLAlchemy session."""
        self.session = session

    def find_by_username(self, username: str) -> User | None:
        """Return the user with ``username`` or None."""
        return self.session.scalars(select(User).where(User.username == username)).first()

    def create(
        self,
        *,
        username: str,
        password: str,
        role: str = ROLE_USER,
        email: str | None = None,
        display_name: str | None = None,
    ) -> User:
        """Hash the password, insert a user and commit.

        Raises:
            UsernameTakenError: If ``username`` is already registered. Checked
                before the insert so the message does not depend on the
                database's constraint error.
        """
        if self.find_by_username(username) is not None:
            raise UsernameTakenError()

        user = User(
            username=username,
            password_hash=hash_password(password),
            role=role,
            email=email,
            display_name=display_name or username,
        )
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def set_two_factor_secret(self, username: str, secret: str) -> User:
        """Store a TOTP secret on an existing user.

        Raises:
            UserNotFoundError: If no user has ``username``.
        """
        user = self.find_by_username(username)
        if user is None:
            raise UserNotFoundError()
        user.two_fa_secret = secret
        self.session.commit()
        return user

    def _insert_default_accounts(self) -> None:
        for account in DEFAULT_ACCOUNTS:
            self.session.add(
                User(
                    username=account.username,
                    password_hash=hash_password(account.password),
                    role=account.role,
                )
            )

    def seed_default_users(self) -> bool:
        """Insert the default accounts when the users table is empty.

        Returns:
            True if accounts were inserted.
        """
        count = self.session.scalar(select(func.count()).select_from(User)) or 0
        if count:
            return False
        self._insert_default_accounts()
        self.session.commit()
        logger.info("Seeded %d default accounts", len(DEFAULT_ACCOUNTS))
        return True

    def reset_all(self) -> None:
        """Delete every record and user, then reseed the default accounts.

        Runs as a single transaction: any failure rolls back to the previous
        state instead of leaving the store without users.
        """
        try:
            for model in _RESET_TABLES:
                self.session.execute(delete(model))
            self._insert_default_accounts()
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        logger.warning("Database reset: all records deleted, default accounts reseeded")
