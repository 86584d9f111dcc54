"""Enums for model fields."""

from enum import Enum


class TransactionType(str, Enum):
    """Direction of a transaction. Amounts are stored unsigned."""

    INCOME = "income"
    EXPENSE = "expense"
