"""SQLAlchemy models for the Farm Ledger application."""

from .farm import Crop, InventoryItem, Project
from .ledger import Expense, Income
from .user import ROLE_ADMIN, ROLE_USER, User

__all__ = [
    "Crop", "InventoryItem", "Project",
    "Expense", "Income",
    "User", "ROLE_ADMIN", "ROLE_USER",
]
