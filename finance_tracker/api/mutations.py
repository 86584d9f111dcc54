"""GraphQL mutation resolvers."""

import logging
from decimal import Decimal
from typing import Any

import strawberry
from sqlalchemy.exc import IntegrityError
from strawberry.types import Info

from finance_tracker.api.dependencies import RequestContext, parse_input, require_identity
from finance_tracker.api.types import AuthPayload, CategoryType, TransactionEntryType, UserType
from finance_tracker.errors import AlreadyExistsError, InvalidCredentialsError, ValidationError
from finance_tracker.schemas.auth import UserLogin, UserRegister
from finance_tracker.schemas.category import CategoryCreate, CategoryUpdate
from finance_tracker.schemas.transaction import TransactionCreate, TransactionUpdate
from finance_tracker.services.auth import create_user, get_user_by_email
from finance_tracker.services.repository import CategoryRepository, TransactionRepository

logger = logging.getLogger(__name__)

ContextInfo = Info[RequestContext, Any]


def provided(**arguments: Any) -> dict[str, Any]:
    """Drop arguments the caller left out, keeping explicit nulls."""
    return {key: value for key, value in arguments.items() if value is not strawberry.UNSET}


def ensure_unique_category_name(
    repo: CategoryRepository, owner_id: int, name: str, exclude_id: int | None = None
) -> None:
    if repo.find_by_name(owner_id, name, exclude_id=exclude_id) is not None:
        raise AlreadyExistsError("Category already exists")


@strawberry.type
class Mutation:
    @strawberry.mutation
    def signup(self, info: ContextInfo, email: str, password: str, name: str) -> AuthPayload:
        data = parse_input(UserRegister, {"email": email, "password": password, "name": name})
        db, auth = info.context.db, info.context.auth

        if get_user_by_email(db, data.email):
            raise AlreadyExistsError("User already exists")

        try:
            user = create_user(db, data.email, auth.hash_password(data.password), data.name)
        except IntegrityError:
            # Lost a race with a concurrent signup for the same email
            db.rollback()
            raise AlreadyExistsError("User already exists") from None

        token = auth.issue_token(user.id, user.email)
        return AuthPayload(token=token, user=UserType.from_model(user))

    @strawberry.mutation
    def login(self, info: ContextInfo, email: str, password: str) -> AuthPayload:
        try:
            data = parse_input(UserLogin, {"email": email, "password": password})
        except ValidationError:
            raise InvalidCredentialsError() from None

        auth = info.context.auth
        user = auth.authenticate(info.context.db, data.email, data.password)
        if not user:
            logger.info("Rejected login attempt")
            raise InvalidCredentialsError()

        logger.info(f"User {user.id} logged in")
        token = auth.issue_token(user.id, user.email)
        return AuthPayload(token=token, user=UserType.from_model(user))

    @strawberry.mutation
    def create_category(
        self,
        info: ContextInfo,
        name: str,
        color: str | None = None,
        icon: str | None = None,
    ) -> CategoryType:
        identity = require_identity(info)
        # Omitted or null color/icon fall back to the defaults
        arguments = {"name": name, "color": color, "icon": icon}
        data = parse_input(
            CategoryCreate, {key: value for key, value in arguments.items() if value is not None}
        )
        repo = CategoryRepository(info.context.db)
        ensure_unique_category_name(repo, identity.user_id, data.name)
        return CategoryType.from_model(repo.create(identity.user_id, data.model_dump()))

    @strawberry.mutation
    def update_category(
        self,
        info: ContextInfo,
        id: strawberry.ID,
        name: str | None = strawberry.UNSET,
        color: str | None = strawberry.UNSET,
        icon: str | None = strawberry.UNSET,
    ) -> CategoryType:
        identity = require_identity(info)
        repo = CategoryRepository(info.context.db)
        category = repo.get_owned(id, identity.user_id)

        changes = parse_input(CategoryUpdate, provided(name=name, color=color, icon=icon)).changes()
        if "name" in changes:
            ensure_unique_category_name(repo, identity.user_id, changes["name"], category.id)

        return CategoryType.from_model(repo.update(category.id, identity.user_id, changes))

    @strawberry.mutation(description="Delete a category together with all of its transactions.")
    def delete_category(self, info: ContextInfo, id: strawberry.ID) -> bool:
        identity = require_identity(info)
        return CategoryRepository(info.context.db).delete(id, identity.user_id)

    @strawberry.mutation
    def create_transaction(
        self,
        info: ContextInfo,
        amount: Decimal,
        type: str,
        date: str,
        category_id: strawberry.ID,
        description: str | None = None,
    ) -> TransactionEntryType:
        identity = require_identity(info)
        data = parse_input(
            TransactionCreate,
            {
                "description": description,
                "amount": amount,
                "type": type,
                "date": date,
                "category_id": category_id,
            },
        )
        transaction = TransactionRepository(info.context.db).create(
            identity.user_id, data.model_dump()
        )
        return TransactionEntryType.from_model(transaction)

    @strawberry.mutation
    def update_transaction(
        self,
        info: ContextInfo,
        id: strawberry.ID,
        description: str | None = strawberry.UNSET,
        amount: Decimal | None = strawberry.UNSET,
        type: str | None = strawberry.UNSET,
        date: str | None = strawberry.UNSET,
        category_id: strawberry.ID | None = strawberry.UNSET,
    ) -> TransactionEntryType:
        identity = require_identity(info)
        changes = parse_input(
            TransactionUpdate,
            provided(
                description=description,
                amount=amount,
                type=type,
                date=date,
                category_id=category_id,
            ),
        ).changes()
        transaction = TransactionRepository(info.context.db).update(id, identity.user_id, changes)
        return TransactionEntryType.from_model(transaction)

    @strawberry.mutation
    def delete_transaction(self, info: ContextInfo, id: strawberry.ID) -> bool:
        identity = require_identity(info)
        return TransactionRepository(info.context.db).delete(id, identity.user_id)
