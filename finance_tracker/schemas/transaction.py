"""Transaction schemas."""

from datetime import UTC, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finance_tracker.models.enums import TransactionType
from finance_tracker.schemas.base import PartialUpdate

# Shared amount constraints: unsigned, cents precision, fits NUMERIC(12, 2)
AMOUNT_FIELD = {"ge": 0, "max_digits": 12, "decimal_places": 2}


def _as_utc(value: datetime) -> datetime:
    """Interpret naive datetimes (e.g. "2024-01-15") as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class TransactionCreate(BaseModel):
    """Create a new transaction."""

    model_config = ConfigDict(use_enum_values=True)

    description: str | None = Field(None, max_length=500)
    amount: Decimal = Field(..., **AMOUNT_FIELD)
    type: TransactionType
    date: datetime
    category_id: str = Field(..., min_length=1)

    @field_validator("date")
    @classmethod
    def date_with_timezone(cls, value: datetime) -> datetime:
        return _as_utc(value)


class TransactionUpdate(PartialUpdate):
    """Update a transaction. Only ``description`` may be cleared."""

    model_config = ConfigDict(use_enum_values=True)
    nullable_fields = frozenset({"description"})

    description: str | None = Field(None, max_length=500)
    amount: Decimal | None = Field(None, **AMOUNT_FIELD)
    type: TransactionType | None = None
    date: datetime | None = None
    category_id: str | None = Field(None, min_length=1)

    @field_validator("date")
    @classmethod
    def date_with_timezone(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value) if value is not None else None
