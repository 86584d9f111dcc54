"""Ownership-scoped data access for categories and transactions.

Every read and write goes through ``get_owned`` or filters on ``user_id``, so
a row owned by someone else is indistinguishable from a row that does not
exist.
"""

import logging
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import func
from sqlalchemy.orm import Session

from finance_tracker.errors import CategoryNotFoundError, NotFoundError
from finance_tracker.models.category import Category
from finance_tracker.models.transaction import Transaction

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", Category, Transaction)


def parse_id(entity_id: int | str) -> int | None:
    """Convert an opaque API identifier to a primary key, or None if it can't be one."""
    if isinstance(entity_id, int):
        return entity_id
    if isinstance(entity_id, str) and entity_id.isdecimal():
        return int(entity_id)
    return None


class OwnedRepository(Generic[ModelT]):
    """CRUD over one entity kind, scoped to the acting user."""

    model: ClassVar[type]
    label: ClassVar[str]

    def __init__(self, db: Session):
        self.db = db

    def _owner_query(self, owner_id: int):
        return self.db.query(self.model).filter(self.model.user_id == owner_id)

    def _ordering(self) -> tuple:
        return (self.model.id,)

    def list_for_owner(self, owner_id: int) -> list[ModelT]:
        """All rows owned by ``owner_id``."""
        return self._owner_query(owner_id).order_by(*self._ordering()).all()

    def get_owned(self, entity_id: int | str, owner_id: int) -> ModelT:
        """Fetch a row by id that belongs to ``owner_id``."""
        pk = parse_id(entity_id)
        entity = None
        if pk is not None:
            entity = self._owner_query(owner_id).filter(self.model.id == pk).first()
        if entity is None:
            raise NotFoundError(f"{self.label} not found")
        return entity

    def check_references(self, owner_id: int, fields: dict[str, Any]) -> dict[str, Any]:
        """Validate and resolve foreign keys in ``fields``. Returns column values."""
        return fields

    def create(self, owner_id: int, fields: dict[str, Any]) -> ModelT:
        values = self.check_references(owner_id, fields)
        entity = self.model(user_id=owner_id, **values)
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        logger.info(f"Created {self.label.lower()} {entity.id} for user {owner_id}")
        return entity

    def update(self, entity_id: int | str, owner_id: int, fields: dict[str, Any]) -> ModelT:
        """Apply only the provided fields; everything else is left as is."""
        entity = self.get_owned(entity_id, owner_id)
        values = self.check_references(owner_id, fields)
        for key, value in values.items():
            setattr(entity, key, value)
        self.db.commit()
        self.db.refresh(entity)
        logger.info(f"Updated {self.label.lower()} {entity.id} fields {sorted(values)}")
        return entity

    def delete_dependents(self, entity: ModelT) -> int:
        """Remove rows that must not outlive ``entity``. Returns how many."""
        return 0

    def delete(self, entity_id: int | str, owner_id: int) -> bool:
        entity = self.get_owned(entity_id, owner_id)
        pk = entity.id
        # Dependents go first so a failure can only leave orphans, never dangling refs
        removed = self.delete_dependents(entity)
        self.db.delete(entity)
        self.db.commit()
        logger.info(
            f"Deleted {self.label.lower()} {pk} for user {owner_id}"
            + (f" and {removed} dependent rows" if removed else "")
        )
        return True


class CategoryRepository(OwnedRepository[Category]):
    model = Category
    label = "Category"

    def find_by_name(
        self, owner_id: int, name: str, exclude_id: int | None = None
    ) -> Category | None:
        """Case-insensitive, whitespace-trimmed name lookup within one user's categories."""
        query = self._owner_query(owner_id).filter(
            func.lower(func.trim(Category.name)) == name.strip().lower()
        )
        if exclude_id is not None:
            query = query.filter(Category.id != exclude_id)
        return query.first()

    def delete_dependents(self, entity: Category) -> int:
        return (
            self.db.query(Transaction)
            .filter(Transaction.category_id == entity.id)
            .delete(synchronize_session="fetch")
        )


class TransactionRepository(OwnedRepository[Transaction]):
    model = Transaction
    label = "Transaction"

    def _ordering(self) -> tuple:
        return (Transaction.date.desc(), Transaction.id.desc())

    def check_references(self, owner_id: int, fields: dict[str, Any]) -> dict[str, Any]:
        if "category_id" not in fields:
            return fields
        try:
            category = CategoryRepository(self.db).get_owned(fields["category_id"], owner_id)
        except NotFoundError:
            raise CategoryNotFoundError() from None
        return {**fields, "category_id": category.id}
