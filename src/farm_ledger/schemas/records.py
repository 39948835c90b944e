"""Pydantic schemas for farm records (income, expenses, projects, crops, inventory).

Wire names are camelCase; Python attributes are snake_case.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .validators import IsoDate, Numeric, RequiredText, SanitizedText


class CamelModel(BaseModel):
    """Base model accepting and emitting camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class IncomeCreate(CamelModel):
    """Payload for recording income."""

    date: IsoDate = Field(..., description="ISO-8601 date, stored as YYYY-MM-DD")
    project: RequiredText
    crop: RequiredText
    yield_: Numeric | None = Field(None, alias="yield", description="Harvested quantity")
    price_unit: Numeric | None = None
    total_income: Numeric | None = None
    amount: Numeric | None = Field(None, description="Lump-sum amount when no breakdown is given")


class IncomeResponse(CamelModel):
    id: int
    date: str
    project: str
    crop: str
    yield_: float | None = Field(None, alias="yield")
    price_unit: float | None = None
    total_income: float | None = None
    amount: float | None = None
    created_at: datetime | None = None


class ExpenseCreate(CamelModel):
    """Payload for recording an expense."""

    date: IsoDate
    description: RequiredText
    category: RequiredText
    project: SanitizedText | None = None
    units: Numeric | None = None
    cost_per_unit: Numeric | None = None
    total_cost: Numeric | None = None
    amount: Numeric | None = None


class ExpenseResponse(CamelModel):
    id: int
    date: str
    description: str
    category: str
    project: str | None = None
    units: float | None = None
    cost_per_unit: float | None = None
    total_cost: float | None = None
    amount: float | None = None
    created_at: datetime | None = None


class ProjectCreate(CamelModel):
    """Payload for creating a growing project."""

    name: RequiredText
    crop: RequiredText
    acreage: Numeric | None = None
    start_date: IsoDate | None = None
    status: SanitizedText | None = Field(None, description="Defaults to 'active'")


class ProjectResponse(CamelModel):
    id: int
    name: str
    crop: str
    acreage: float | None = None
    start_date: str | None = None
    status: str
    created_at: datetime | None = None


class CropResponse(CamelModel):
    id: int
    name: str
    variety: str | None = None
    planting_date: str | None = None
    harvest_date: str | None = None
    project: str | None = None
    created_at: datetime | None = None


class InventoryItemResponse(CamelModel):
    id: int
    item: str
    quantity: float
    unit: str | None = None
    category: str | None = None
    location: str | None = None
    created_at: datetime | None = None
