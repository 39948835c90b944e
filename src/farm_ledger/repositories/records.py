"""Data access helpers for farm records."""
from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from farm_ledger.models import Crop, Expense, Income, InventoryItem, Project
from farm_ledger.models.farm import PROJECT_STATUS_ACTIVE
from farm_ledger.services.query_builder import ReportFilter, build_filter_predicates

__all__ = ["RecordRepository"]


class RecordRepository:
    """Listing and creation of income, expense, project, crop and inventory rows."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def _save(self, record: Any) -> Any:
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return record

    def list_income(self, report_filter: ReportFilter | None = None) -> list[Income]:
        """Return income rows matching the filter, newest date first."""
        predicates = build_filter_predicates(
            report_filter or ReportFilter(),
            project_column=Income.project,
            date_column=Income.date,
        )
        stmt = predicates.apply(select(Income)).order_by(Income.date.desc(), Income.id.desc())
        return list(self.session.scalars(stmt))

    def list_expenses(self, report_filter: ReportFilter | None = None) -> list[Expense]:
        """Return expense rows matching the filter, newest date first."""
        predicates = build_filter_predicates(
            report_filter or ReportFilter(),
            project_column=Expense.project,
            date_column=Expense.date,
        )
        stmt = predicates.apply(select(Expense)).order_by(Expense.date.desc(), Expense.id.desc())
        return list(self.session.scalars(stmt))

    def list_projects(self, report_filter: ReportFilter | None = None) -> list[Project]:
        """Return projects filtered by name and start date, most recently created first."""
        predicates = build_filter_predicates(
            report_filter or ReportFilter(),
            project_column=Project.name,
            date_column=Project.start_date,
        )
        stmt = predicates.apply(select(Project)).order_by(
            Project.created_at.desc(), Project.id.desc()
        )
        return list(self.session.scalars(stmt))

    def list_crops(self) -> list[Crop]:
        stmt = select(Crop).order_by(Crop.created_at.desc(), Crop.id.desc())
        return list(self.session.scalars(stmt))

    def list_inventory(self) -> list[InventoryItem]:
        stmt = select(InventoryItem).order_by(
            InventoryItem.created_at.desc(), InventoryItem.id.desc()
        )
        return list(self.session.scalars(stmt))

    def create_income(
        self,
        *,
        date: str,
        project: str,
        crop: str,
        yield_: float | None = None,
        price_unit: float | None = None,
        total_income: float | None = None,
        amount: float | None = None,
    ) -> Income:
        """Insert an income row.

        When quantity and unit price are both given without a total, the
        total is computed from them.
        """
        if total_income is None and yield_ is not None and price_unit is not None:
            total_income = yield_ * price_unit
        return self._save(
            Income(
                date=date,
                project=project,
                crop=crop,
                yield_=yield_,
                price_unit=price_unit,
                total_income=total_income,
                amount=amount,
            )
        )

    def create_expense(
        self,
        *,
        date: str,
        description: str,
        category: str,
        project: str | None = None,
        units: float | None = None,
        cost_per_unit: float | None = None,
        total_cost: float | None = None,
        amount: float | None = None,
    ) -> Expense:
        """Insert an expense row, computing ``total_cost`` like :meth:`create_income`."""
        if total_cost is None and units is not None and cost_per_unit is not None:
            total_cost = units * cost_per_unit
        return self._save(
            Expense(
                date=date,
                description=description,
                category=category,
                project=project or None,
                units=units,
                cost_per_unit=cost_per_unit,
                total_cost=total_cost,
                amount=amount,
            )
        )

    def create_project(
        self,
        *,
        name: str,
        crop: str,
        acreage: float | None = None,
        start_date: str | None = None,
        status: str | None = None,
    ) -> Project:
        return self._save(
            Project(
                name=name,
                crop=crop,
                acreage=acreage,
                start_date=start_date,
                status=status or PROJECT_STATUS_ACTIVE,
            )
        )
