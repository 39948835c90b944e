# src/farm_ledger/api/endpoints/__init__.py
"""API endpoint modules."""

from .auth import router as auth_router
from .records import router as records_router
from .reports import router as reports_router
from .system import router as system_router

__all__ = [
    "auth_router",
    "records_router",
    "reports_router",
    "system_router",
]
