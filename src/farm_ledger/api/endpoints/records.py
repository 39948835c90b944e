# src/farm_ledger/api/endpoints/records.py
"""Income, expense, project, crop and inventory endpoints."""

import logging

from fastapi import APIRouter, status

from farm_ledger.api.dependencies import CurrentClaimsDep, ReportFilterDep, SessionDep
from farm_ledger.models import Crop, Expense, Income, InventoryItem, Project
from farm_ledger.repositories.records import RecordRepository
from farm_ledger.schemas.records import (
    CropResponse,
    ExpenseCreate,
    ExpenseResponse,
    IncomeCreate,
    IncomeResponse,
    InventoryItemResponse,
    ProjectCreate,
    ProjectResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["records"])


@router.get("/income", response_model=list[IncomeResponse])
def list_income(
    db: SessionDep,
    claims: CurrentClaimsDep,
    report_filter: ReportFilterDep,
) -> list[Income]:
    """List income rows, optionally filtered by project and date range."""
    return RecordRepository(db).list_income(report_filter)


@router.post("/income", response_model=IncomeResponse, status_code=status.HTTP_201_CREATED)
def create_income(payload: IncomeCreate, db: SessionDep, claims: CurrentClaimsDep) -> Income:
    """Record an income entry."""
    record = RecordRepository(db).create_income(
        date=payload.date,
        project=payload.project,
        crop=payload.crop,
        yield_=payload.yield_,
        price_unit=payload.price_unit,
        total_income=payload.total_income,
        amount=payload.amount,
    )
    logger.info("Income %s recorded by %s", record.id, claims.username)
    return record


@router.get("/expenses", response_model=list[ExpenseResponse])
def list_expenses(
    db: SessionDep,
    claims: CurrentClaimsDep,
    report_filter: ReportFilterDep,
) -> list[Expense]:
    """List expense rows, optionally filtered by project and date range."""
    return RecordRepository(db).list_expenses(report_filter)


@router.post("/expenses", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
def create_expense(payload: ExpenseCreate, db: SessionDep, claims: CurrentClaimsDep) -> Expense:
    """Record an expense entry."""
    record = RecordRepository(db).create_expense(
        date=payload.date,
        description=payload.description,
        category=payload.category,
        project=payload.project,
        units=payload.units,
        cost_per_unit=payload.cost_per_unit,
        total_cost=payload.total_cost,
        amount=payload.amount,
    )
    logger.info("Expense %s recorded by %s", record.id, claims.username)
    return record


@router.get("/projects", response_model=list[ProjectResponse])
def list_projects(
    db: SessionDep,
    claims: CurrentClaimsDep,
    report_filter: ReportFilterDep,
) -> list[Project]:
    """List projects; the project filter matches on name, dates on start date."""
    return RecordRepository(db).list_projects(report_filter)


@router.post("/projects", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(payload: ProjectCreate, db: SessionDep, claims: CurrentClaimsDep) -> Project:
    record = RecordRepository(db).create_project(
        name=payload.name,
        crop=payload.crop,
        acreage=payload.acreage,
        start_date=payload.start_date,
        status=payload.status,
    )
    logger.info("Project %s created by %s", record.id, claims.username)
    return record


@router.get("/crops", response_model=list[CropResponse])
def list_crops(db: SessionDep, claims: CurrentClaimsDep) -> list[Crop]:
    return RecordRepository(db).list_crops()


@router.get("/inventory", response_model=list[InventoryItemResponse])
def list_inventory(db: SessionDep, claims: CurrentClaimsDep) -> list[InventoryItem]:
    return RecordRepository(db).list_inventory()
