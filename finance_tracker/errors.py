"""Domain errors surfaced to API callers.

Each error carries a short machine-readable ``code``. The GraphQL layer copies
``extensions`` onto the error it returns, so clients can branch on
``errors[0].extensions.code`` instead of parsing messages.
"""


class FinanceError(Exception):
    """Base class for errors that are safe to show to the caller."""

    code = "BAD_REQUEST"
    default_message = "Bad request"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def extensions(self) -> dict[str, str]:
        return {"code": self.code}


class UnauthenticatedError(FinanceError):
    """No token, or a token that failed verification."""

    code = "UNAUTHENTICATED"
    default_message = "Not authenticated"


class InvalidCredentialsError(FinanceError):
    """Login failed. Same message for unknown email and wrong password."""

    code = "INVALID_CREDENTIALS"
    default_message = "Invalid credentials"


class AlreadyExistsError(FinanceError):
    code = "ALREADY_EXISTS"
    default_message = "Already exists"


class NotFoundError(FinanceError):
    """Entity is missing or belongs to someone else."""

    code = "NOT_FOUND"
    default_message = "Not found"


class CategoryNotFoundError(FinanceError):
    """A transaction write referenced a category the caller does not own."""

    code = "CATEGORY_NOT_FOUND"
    default_message = "Category not found"


class ValidationError(FinanceError):
    code = "VALIDATION_ERROR"
    default_message = "Invalid input"


class InternalError(FinanceError):
    """Stands in for an unexpected failure; the cause is only logged."""

    code = "INTERNAL_ERROR"
    default_message = "Internal server error"
