# src/farm_ledger/api/endpoints/reports.py
"""Aggregate financial report endpoints."""

from fastapi import APIRouter

from farm_ledger.api.dependencies import CurrentClaimsDep, ReportFilterDep, SessionDep
from farm_ledger.schemas.reports import CropRevenue, MonthlyFinancials, SummaryResponse
from farm_ledger.services.reports import ReportService

router = APIRouter(tags=["reports"])


@router.get("/summary", response_model=SummaryResponse)
def summary(
    db: SessionDep,
    claims: CurrentClaimsDep,
    report_filter: ReportFilterDep,
) -> SummaryResponse:
    """Total revenue, total expenses and net profit."""
    result = ReportService(db).summary(report_filter)
    return SummaryResponse(
        total_revenue=result.total_revenue,
        total_expenses=result.total_expenses,
        net_profit=result.net_profit,
    )


@router.get("/revenue-by-crop", response_model=list[CropRevenue])
def revenue_by_crop(
    db: SessionDep,
    claims: CurrentClaimsDep,
    report_filter: ReportFilterDep,
) -> list[CropRevenue]:
    """Revenue grouped by crop, highest first."""
    return [
        CropRevenue(crop=row.crop, total_revenue=row.total_revenue, total_amount=row.total_amount)
        for row in ReportService(db).revenue_by_crop(report_filter)
    ]


@router.get("/monthly-financials", response_model=list[MonthlyFinancials])
def monthly_financials(
    db: SessionDep,
    claims: CurrentClaimsDep,
    report_filter: ReportFilterDep,
) -> list[MonthlyFinancials]:
    """Income and expenses per month, latest month first."""
    return [
        MonthlyFinancials(month=row.month, income=row.income, expenses=row.expenses)
        for row in ReportService(db).monthly_financials(report_filter)
    ]
