"""GraphQL query resolvers."""

from typing import Any

import strawberry
from strawberry.types import Info

from finance_tracker.api.dependencies import RequestContext, require_identity
from finance_tracker.api.types import CategoryType, SummaryType, TransactionEntryType, UserType
from finance_tracker.services.auth import get_user_by_id
from finance_tracker.services.repository import CategoryRepository, TransactionRepository
from finance_tracker.services.summary import summarize

ContextInfo = Info[RequestContext, Any]


@strawberry.type
class Query:
    @strawberry.field(description="The authenticated user.")
    def me(self, info: ContextInfo) -> UserType | None:
        identity = require_identity(info)
        user = get_user_by_id(info.context.db, identity.user_id)
        return UserType.from_model(user) if user else None

    @strawberry.field
    def categories(self, info: ContextInfo) -> list[CategoryType]:
        identity = require_identity(info)
        repo = CategoryRepository(info.context.db)
        return [CategoryType.from_model(c) for c in repo.list_for_owner(identity.user_id)]

    @strawberry.field
    def category(self, info: ContextInfo, id: strawberry.ID) -> CategoryType | None:
        identity = require_identity(info)
        category = CategoryRepository(info.context.db).get_owned(id, identity.user_id)
        return CategoryType.from_model(category)

    @strawberry.field
    def transactions(self, info: ContextInfo) -> list[TransactionEntryType]:
        identity = require_identity(info)
        repo = TransactionRepository(info.context.db)
        return [TransactionEntryType.from_model(t) for t in repo.list_for_owner(identity.user_id)]

    @strawberry.field
    def transaction(self, info: ContextInfo, id: strawberry.ID) -> TransactionEntryType | None:
        identity = require_identity(info)
        transaction = TransactionRepository(info.context.db).get_owned(id, identity.user_id)
        return TransactionEntryType.from_model(transaction)

    @strawberry.field(description="Income, expense and balance totals, overall and per category.")
    def summary(self, info: ContextInfo) -> SummaryType:
        identity = require_identity(info)
        db = info.context.db
        summary = summarize(
            CategoryRepository(db).list_for_owner(identity.user_id),
            TransactionRepository(db).list_for_owner(identity.user_id),
        )
        return SummaryType.from_summary(summary)
