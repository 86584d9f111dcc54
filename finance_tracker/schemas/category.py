"""Category schemas."""

from pydantic import BaseModel, ConfigDict, Field

from finance_tracker.models.category import DEFAULT_COLOR, DEFAULT_ICON
from finance_tracker.schemas.base import PartialUpdate


class CategoryCreate(BaseModel):
    """Create a new category."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255)
    color: str = Field(DEFAULT_COLOR, min_length=1, max_length=50)
    icon: str = Field(DEFAULT_ICON, min_length=1, max_length=50)


class CategoryUpdate(PartialUpdate):
    """Update a category."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(None, min_length=1, max_length=255)
    color: str | None = Field(None, min_length=1, max_length=50)
    icon: str | None = Field(None, min_length=1, max_length=50)
