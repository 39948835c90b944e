"""Aggregate financial reports.

Every aggregate uses the same fallback per row: the structured total
(``totalIncome`` / ``totalCost``) when present, otherwise the lump-sum
``amount``. Rows with neither contribute nothing.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from farm_ledger.models import Expense, Income
from farm_ledger.services.query_builder import ReportFilter, build_filter_predicates

income_value = func.coalesce(Income.total_income, Income.amount)
expense_value = func.coalesce(Expense.total_cost, Expense.amount)


@dataclass(frozen=True)
class Summary:
    total_revenue: float
    total_expenses: float
    net_profit: float


@dataclass(frozen=True)
class CropRevenueRow:
    crop: str
    total_revenue: float
    total_amount: float


@dataclass(frozen=True)
class MonthlyRow:
    month: str
    income: float
    expenses: float


class ReportService:
    """Compute summary, per-crop and per-month aggregates."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _income_predicates(self, report_filter: ReportFilter):
        return build_filter_predicates(
            report_filter, project_column=Income.project, date_column=Income.date
        )

    def _expense_predicates(self, report_filter: ReportFilter):
        return build_filter_predicates(
            report_filter, project_column=Expense.project, date_column=Expense.date
        )

    def summary(self, report_filter: ReportFilter | None = None) -> Summary:
        """Return total revenue, total expenses and their difference."""
        report_filter = report_filter or ReportFilter()
        revenue_stmt = self._income_predicates(report_filter).apply(
            select(func.sum(income_value)).select_from(Income)
        )
        expense_stmt = self._expense_predicates(report_filter).apply(
            select(func.sum(expense_value)).select_from(Expense)
        )
        total_revenue = float(self.session.scalar(revenue_stmt) or 0)
        total_expenses = float(self.session.scalar(expense_stmt) or 0)
        return Summary(
            total_revenue=total_revenue,
            total_expenses=total_expenses,
            net_profit=total_revenue - total_expenses,
        )

    def revenue_by_crop(self, report_filter: ReportFilter | None = None) -> list[CropRevenueRow]:
        """Return revenue per crop, highest revenue first."""
        report_filter = report_filter or ReportFilter()
        total_revenue = func.coalesce(func.sum(income_value), 0).label("total_revenue")
        total_amount = func.coalesce(func.sum(Income.amount), 0).label("total_amount")
        stmt = self._income_predicates(report_filter).apply(
            select(Income.crop, total_revenue, total_amount)
        )
        stmt = stmt.group_by(Income.crop).order_by(total_revenue.desc(), Income.crop.asc())
        return [
            CropRevenueRow(crop=crop, total_revenue=float(revenue), total_amount=float(amount))
            for crop, revenue, amount in self.session.execute(stmt)
        ]

    def monthly_financials(self, report_filter: ReportFilter | None = None) -> list[MonthlyRow]:
        """Return income and expenses per ``YYYY-MM`` month, latest month first."""
        report_filter = report_filter or ReportFilter()
        income_month = func.substr(Income.date, 1, 7).label("month")
        expense_month = func.substr(Expense.date, 1, 7).label("month")

        income_stmt = self._income_predicates(report_filter).apply(
            select(income_month, func.coalesce(func.sum(income_value), 0))
        ).group_by(income_month)
        expense_stmt = self._expense_predicates(report_filter).apply(
            select(expense_month, func.coalesce(func.sum(expense_value), 0))
        ).group_by(expense_month)

        totals: dict[str, list[float]] = defaultdict(lambda: [0.0, 0.0])
        for month, total in self.session.execute(income_stmt):
            totals[month][0] = float(total)
        for month, total in self.session.execute(expense_stmt):
            totals[month][1] = float(total)

        return [
            MonthlyRow(month=month, income=income, expenses=expenses)
            for month, (income, expenses) in sorted(totals.items(), reverse=True)
        ]
