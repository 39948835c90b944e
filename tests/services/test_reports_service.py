# tests/services/test_reports_service.py
"""Tests for aggregate financial reports."""

import pytest

from farm_ledger.models import Expense, Income
from farm_ledger.services.query_builder import ReportFilter
from farm_ledger.services.reports import ReportService


def test_summary_falls_back_from_total_to_amount(db_session) -> None:
    db_session.add_all([
        Income(date="2024-01-01", project="P", crop="Wheat", amount=100.0),
        Income(date="2024-01-02", project="P", crop="Wheat", total_income=200.0),
        Expense(date="2024-01-03", description="Seed", category="Supplies", amount=50.0),
    ])
    db_session.commit()

    summary = ReportService(db_session).summary()

    assert summary.total_revenue == 300.0
    assert summary.total_expenses == 50.0
    assert summary.net_profit == 250.0


def test_summary_of_empty_tables_is_zero(db_session) -> None:
    summary = ReportService(db_session).summary()
    assert (summary.total_revenue, summary.total_expenses, summary.net_profit) == (0, 0, 0)


def test_rows_without_total_or_amount_contribute_nothing(db_session) -> None:
    db_session.add_all([
        Income(date="2024-01-01", project="P", crop="Wheat", yield_=3.0),
        Income(date="2024-01-02", project="P", crop="Wheat", amount=10.0),
    ])
    db_session.commit()
    assert ReportService(db_session).summary().total_revenue == 10.0


def test_summary_respects_filters(db_session, ledger_rows) -> None:
    summary = ReportService(db_session).summary(ReportFilter(project="North Field"))
    assert summary.total_revenue == 300.0
    assert summary.total_expenses == 50.0
    assert summary.net_profit == 250.0


def test_revenue_by_crop_orders_by_revenue(db_session, ledger_rows) -> None:
    rows = ReportService(db_session).revenue_by_crop()

    assert [(row.crop, row.total_revenue, row.total_amount) for row in rows] == [
        ("Wheat", 300.0, 100.0),
        ("Corn", 190.0, 40.0),
    ]


def test_revenue_by_crop_with_date_range(db_session, ledger_rows) -> None:
    rows = ReportService(db_session).revenue_by_crop(
        ReportFilter(from_date="2024-02-01", to_date="2024-02-28")
    )
    assert [(row.crop, row.total_revenue) for row in rows] == [("Wheat", 200.0), ("Corn", 150.0)]


def test_monthly_financials_merges_income_and_expenses(db_session, ledger_rows) -> None:
    rows = ReportService(db_session).monthly_financials()

    assert [(row.month, row.income, row.expenses) for row in rows] == [
        ("2024-03", 40.0, 0.0),
        ("2024-02", 350.0, 30.0),
        ("2024-01", 100.0, 50.0),
    ]


@pytest.mark.parametrize("project", [None, "All Projects"])
def test_monthly_financials_unrestricted_project(db_session, ledger_rows, project) -> None:
    rows = ReportService(db_session).monthly_financials(ReportFilter(project=project))
    assert len(rows) == 3
