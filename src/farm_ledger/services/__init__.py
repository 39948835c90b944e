# src/farm_ledger/services/__init__.py
"""Business logic services for the Farm Ledger application."""

from .login_activity import LoginActivityLog
from .query_builder import PredicateBuilder, ReportFilter
from .rate_limit import RateLimiter
from .reports import ReportService
from .runtime import RuntimeState
from .two_factor import TwoFactorService

__all__ = [
    "LoginActivityLog",
    "PredicateBuilder",
    "RateLimiter",
    "ReportFilter",
    "ReportService",
    "RuntimeState",
    "TwoFactorService",
]
