"""Shared schema bases."""

from typing import Any, ClassVar

from pydantic import BaseModel, model_validator


class PartialUpdate(BaseModel):
    """Base for PATCH-style inputs: omitted fields stay untouched.

    Fields listed in ``nullable_fields`` may be explicitly cleared with null;
    every other field rejects an explicit null.
    """

    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_null_for_required(self) -> "PartialUpdate":
        for field in sorted(self.model_fields_set - self.nullable_fields):
            if getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Only the fields the caller actually sent."""
        return self.model_dump(exclude_unset=True)
