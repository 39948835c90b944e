"""SQLAlchemy model for application users."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from farm_ledger.db.session import Base

ROLE_ADMIN = "admin"
ROLE_USER = "user"


class User(Base):
    """Login identity with a bcrypt password hash and optional TOTP secret."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    # Column keeps the legacy name; it only ever holds a bcrypt hash.
    password_hash: Mapped[str] = mapped_column("password", Text, nullable=False)
    role: Mapped[str] = mapped_column(Text, nullable=False, default=ROLE_USER)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)
    display_name: Mapped[str | None] = mapped_column("displayName", Text, nullable=True)
    two_fa_secret: Mapped[str | None] = mapped_column("twoFASecret", Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        "createdAt", DateTime, nullable=False, server_default=func.current_timestamp()
    )

    @property
    def two_fa_enabled(self) -> bool:
        """Return True once a TOTP secret has been provisioned."""
        return bool(self.two_fa_secret)
