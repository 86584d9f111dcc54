"""GraphQL object types and their mapping from ORM rows."""

from datetime import UTC, datetime
from decimal import Decimal

import strawberry

from finance_tracker.models.category import Category
from finance_tracker.models.transaction import Transaction
from finance_tracker.models.user import User
from finance_tracker.services.summary import BalanceSummary, CategoryBalance


def to_iso(value: datetime) -> str:
    """ISO-8601 string; naive values (SQLite) are UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.isoformat()


@strawberry.type(name="User")
class UserType:
    id: strawberry.ID
    email: str
    name: str
    created_at: str
    model: strawberry.Private[User]

    @classmethod
    def from_model(cls, user: User) -> "UserType":
        return cls(
            id=strawberry.ID(str(user.id)),
            email=user.email,
            name=user.name,
            created_at=to_iso(user.created_at),
            model=user,
        )

    @strawberry.field
    def categories(self) -> list["CategoryType"]:
        return [CategoryType.from_model(c) for c in self.model.categories]

    @strawberry.field
    def transactions(self) -> list["TransactionEntryType"]:
        return [TransactionEntryType.from_model(t) for t in self.model.transactions]


@strawberry.type(name="Category")
class CategoryType:
    id: strawberry.ID
    name: str
    color: str
    icon: str
    user_id: strawberry.ID
    created_at: str
    model: strawberry.Private[Category]

    @classmethod
    def from_model(cls, category: Category) -> "CategoryType":
        return cls(
            id=strawberry.ID(str(category.id)),
            name=category.name,
            color=category.color,
            icon=category.icon,
            user_id=strawberry.ID(str(category.user_id)),
            created_at=to_iso(category.created_at),
            model=category,
        )

    @strawberry.field
    def transactions(self) -> list["TransactionEntryType"]:
        return [TransactionEntryType.from_model(t) for t in self.model.transactions]


@strawberry.type(name="Transaction")
class TransactionEntryType:
    id: strawberry.ID
    description: str | None
    amount: Decimal
    type: str
    date: str
    created_at: str
    user_id: strawberry.ID
    category_id: strawberry.ID
    model: strawberry.Private[Transaction]

    @classmethod
    def from_model(cls, transaction: Transaction) -> "TransactionEntryType":
        return cls(
            id=strawberry.ID(str(transaction.id)),
            description=transaction.description,
            amount=transaction.amount,
            type=transaction.type,
            date=to_iso(transaction.date),
            created_at=to_iso(transaction.created_at),
            user_id=strawberry.ID(str(transaction.user_id)),
            category_id=strawberry.ID(str(transaction.category_id)),
            model=transaction,
        )

    @strawberry.field
    def category(self) -> CategoryType:
        return CategoryType.from_model(self.model.category)


@strawberry.type
class AuthPayload:
    token: str
    user: UserType


@strawberry.type(name="CategoryBalance")
class CategoryBalanceType:
    category_id: strawberry.ID
    name: str
    color: str
    icon: str
    income: Decimal
    expense: Decimal
    balance: Decimal
    transaction_count: int

    @classmethod
    def from_balance(cls, balance: CategoryBalance) -> "CategoryBalanceType":
        category = balance.category
        return cls(
            category_id=strawberry.ID(str(category.id)),
            name=category.name,
            color=category.color,
            icon=category.icon,
            income=balance.income,
            expense=balance.expense,
            balance=balance.balance,
            transaction_count=balance.transaction_count,
        )


@strawberry.type(name="Summary")
class SummaryType:
    income: Decimal
    expense: Decimal
    balance: Decimal
    transaction_count: int
    categories: list[CategoryBalanceType]

    @classmethod
    def from_summary(cls, summary: BalanceSummary) -> "SummaryType":
        return cls(
            income=summary.income,
            expense=summary.expense,
            balance=summary.balance,
            transaction_count=summary.transaction_count,
            categories=[CategoryBalanceType.from_balance(b) for b in summary.categories],
        )
