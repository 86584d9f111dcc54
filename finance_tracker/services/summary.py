"""Income, expense and balance totals for a user's transactions."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal

from finance_tracker.models.category import Category
from finance_tracker.models.enums import TransactionType
from finance_tracker.models.transaction import Transaction

ZERO = Decimal("0.00")


@dataclass
class Totals:
    income: Decimal = ZERO
    expense: Decimal = ZERO
    transaction_count: int = 0

    @property
    def balance(self) -> Decimal:
        return self.income - self.expense

    def add(self, transaction: Transaction) -> None:
        amount = Decimal(transaction.amount)
        if transaction.type == TransactionType.INCOME:
            self.income += amount
        else:
            self.expense += amount
        self.transaction_count += 1


@dataclass
class CategoryBalance(Totals):
    category: Category | None = None


@dataclass
class BalanceSummary(Totals):
    categories: list[CategoryBalance] = field(default_factory=list)


def summarize(
    categories: Iterable[Category], transactions: Iterable[Transaction]
) -> BalanceSummary:
    """Aggregate totals overall and per category.

    Every category appears in the result, including ones with no transactions.
    Sums use Decimal so many small amounts do not drift.
    """
    summary = BalanceSummary()
    by_category = {c.id: CategoryBalance(category=c) for c in categories}
    for transaction in transactions:
        summary.add(transaction)
        bucket = by_category.get(transaction.category_id)
        if bucket is not None:
            bucket.add(transaction)
    summary.categories = list(by_category.values())
    return summary
