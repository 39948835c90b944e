"""SQLAlchemy models for income and expense records.

Each record may carry a computed breakdown (quantity x unit price = total) or a
lump-sum ``amount``; reports fall back from the total to the amount.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from farm_ledger.db.session import Base


class Income(Base):
    """Revenue from a harvest or sale."""

    __tablename__ = "income"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Always stored as YYYY-MM-DD so string comparison matches date order.
    date: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    project: Mapped[str] = mapped_column(Text, nullable=False)
    crop: Mapped[str] = mapped_column(Text, nullable=False)
    yield_: Mapped[float | None] = mapped_column("yield", Float, nullable=True)
    price_unit: Mapped[float | None] = mapped_column("priceUnit", Float, nullable=True)
    total_income: Mapped[float | None] = mapped_column("totalIncome", Float, nullable=True)
    amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        "createdAt", DateTime, nullable=False, server_default=func.current_timestamp()
    )


class Expense(Base):
    """Cost incurred by the farm, optionally attributed to a project."""

    __tablename__ = "expenses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(Text, nullable=False)
    project: Mapped[str | None] = mapped_column(Text, nullable=True)
    units: Mapped[float | None] = mapped_column(Float, nullable=True)
    cost_per_unit: Mapped[float | None] = mapped_column("costPerUnit", Float, nullable=True)
    total_cost: Mapped[float | None] = mapped_column("totalCost", Float, nullable=True)
    amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        "createdAt", DateTime, nullable=False, server_default=func.current_timestamp()
    )
