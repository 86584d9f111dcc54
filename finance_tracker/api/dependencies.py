"""FastAPI dependencies for authentication and the GraphQL request context."""

from typing import Annotated, Any, TypeVar

from fastapi import Depends, Header
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session
from strawberry.fastapi import BaseContext
from strawberry.types import Info

from finance_tracker.config import get_settings
from finance_tracker.database import get_db
from finance_tracker.errors import UnauthenticatedError, ValidationError
from finance_tracker.services.auth import AuthService, TokenIdentity, extract_bearer

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class RequestContext(BaseContext):
    """Per-request state handed to every resolver."""

    def __init__(self, db: Session, auth: AuthService, identity: TokenIdentity | None):
        super().__init__()
        self.db = db
        self.auth = auth
        self.identity = identity


def get_auth_service() -> AuthService:
    """Get auth service configured from settings."""
    return AuthService.from_settings(get_settings())


def get_context(
    db: Annotated[Session, Depends(get_db)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> RequestContext:
    """Resolve the caller from the bearer token.

    A missing, malformed or invalid token yields an anonymous context rather
    than an error; resolvers that need a user call ``require_identity``.
    """
    token = extract_bearer(authorization)
    identity = auth.verify_token(token) if token else None
    return RequestContext(db=db, auth=auth, identity=identity)


def require_identity(info: Info[RequestContext, Any]) -> TokenIdentity:
    """Get the authenticated caller or fail with UNAUTHENTICATED."""
    identity = info.context.identity
    if identity is None:
        raise UnauthenticatedError()
    return identity


def parse_input(schema: type[SchemaT], data: dict[str, Any]) -> SchemaT:
    """Validate resolver arguments, reporting the first problem as VALIDATION_ERROR."""
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        error = e.errors()[0]
        message = error["msg"].removeprefix("Value error, ")
        field = ".".join(str(part) for part in error["loc"])
        raise ValidationError(f"{field}: {message}" if field else message) from None
