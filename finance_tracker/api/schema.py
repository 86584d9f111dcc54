"""GraphQL schema and its FastAPI router."""

import logging

import strawberry
from graphql import GraphQLError
from strawberry.extensions import MaskErrors
from strawberry.fastapi import GraphQLRouter
from strawberry.types import ExecutionContext

from finance_tracker.api.dependencies import get_context
from finance_tracker.api.mutations import Mutation
from finance_tracker.api.queries import Query
from finance_tracker.config import get_settings
from finance_tracker.errors import FinanceError, InternalError, ValidationError

logger = logging.getLogger(__name__)


def should_mask_error(error: GraphQLError) -> bool:
    """Hide unexpected resolver failures; keep domain and request errors as they are.

    Errors without a path (syntax, unknown fields, bad variables) come from
    the request itself and are safe to show.
    """
    original = error.original_error
    if original is None or error.path is None:
        return False
    return not isinstance(original, FinanceError | GraphQLError)


class MaskInternalErrors(MaskErrors):
    """Replaces unexpected failures with a generic INTERNAL_ERROR."""

    def anonymise_error(self, error: GraphQLError) -> GraphQLError:
        masked = super().anonymise_error(error)
        masked.extensions = InternalError().extensions
        return masked


class FinanceSchema(strawberry.Schema):
    """Schema that logs expected domain errors quietly and the rest loudly.

    Every error leaving the API carries ``extensions.code``. Requests that do
    not fit the schema (missing arguments, badly typed variables) are
    reported as VALIDATION_ERROR.
    """

    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: ExecutionContext | None = None,
    ) -> None:
        for error in errors:
            if isinstance(error.original_error, FinanceError):
                logger.info(f"{error.original_error.code} at {error.path}: {error.message}")
            elif should_mask_error(error):
                logger.error(f"Unexpected error at {error.path}", exc_info=error.original_error)
            else:
                logger.warning(f"Rejected GraphQL request: {error.message}")
                if error.path is None and not (error.extensions or {}).get("code"):
                    error.extensions = {**(error.extensions or {}), **ValidationError().extensions}


schema = FinanceSchema(
    query=Query,
    mutation=Mutation,
    extensions=[
        MaskInternalErrors(
            should_mask_error=should_mask_error, error_message=InternalError.default_message
        )
    ],
)


def create_graphql_router() -> GraphQLRouter:
    """GraphQL endpoint; the in-browser IDE is only served outside production."""
    settings = get_settings()
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide=None if settings.is_production else "graphiql",
    )
