"""Aggregate report schemas."""

from pydantic import BaseModel, ConfigDict, Field


class SummaryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_revenue: float = Field(..., alias="totalRevenue")
    total_expenses: float = Field(..., alias="totalExpenses")
    net_profit: float = Field(..., alias="netProfit")


class CropRevenue(BaseModel):
    """Revenue attributed to one crop."""

    model_config = ConfigDict(populate_by_name=True)

    crop: str
    total_revenue: float = Field(
        ...,
        alias="totalRevenue",
        description="Sum of totalIncome, falling back to amount per row",
    )
    total_amount: float = Field(
        ...,
        alias="totalAmount",
        description="Sum of the lump-sum amount column alone",
    )


class MonthlyFinancials(BaseModel):
    month: str = Field(..., description="YYYY-MM")
    income: float
    expenses: float
