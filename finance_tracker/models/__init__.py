"""SQLAlchemy models."""

from finance_tracker.models.category import Category
from finance_tracker.models.enums import TransactionType
from finance_tracker.models.transaction import Transaction
from finance_tracker.models.user import User

__all__ = [
    "User",
    "Category",
    "Transaction",
    "TransactionType",
]
