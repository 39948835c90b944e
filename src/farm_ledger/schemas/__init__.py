"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .records import (
    CropResponse,
    ExpenseCreate,
    ExpenseResponse,
    IncomeCreate,
    IncomeResponse,
    InventoryItemResponse,
    ProjectCreate,
    ProjectResponse,
)
from .reports import CropRevenue, MonthlyFinancials, SummaryResponse
from .user import (
    AuthResponse,
    LoginActivityEntry,
    LoginRequest,
    LoginResponse,
    SignupRequest,
    TwoFactorSetupRequest,
    TwoFactorSetupResponse,
    TwoFactorVerifyRequest,
    TwoFactorVerifyResponse,
)

__all__ = [
    "CropResponse", "ExpenseCreate", "ExpenseResponse", "IncomeCreate", "IncomeResponse",
    "InventoryItemResponse", "ProjectCreate", "ProjectResponse",
    "CropRevenue", "MonthlyFinancials", "SummaryResponse",
    "AuthResponse", "LoginActivityEntry", "LoginRequest", "LoginResponse", "SignupRequest",
    "TwoFactorSetupRequest", "TwoFactorSetupResponse",
    "TwoFactorVerifyRequest", "TwoFactorVerifyResponse",
]
