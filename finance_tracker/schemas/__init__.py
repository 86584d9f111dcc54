"""Pydantic schemas validating API input before it reaches the repositories."""

from finance_tracker.schemas.auth import UserLogin, UserRegister
from finance_tracker.schemas.category import CategoryCreate, CategoryUpdate
from finance_tracker.schemas.transaction import TransactionCreate, TransactionUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "CategoryCreate",
    "CategoryUpdate",
    "TransactionCreate",
    "TransactionUpdate",
]
