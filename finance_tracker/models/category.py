"""Category model."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from finance_tracker.database import Base
from finance_tracker.models.mixins import TimestampMixin

DEFAULT_COLOR = "#3B82F6"
DEFAULT_ICON = "📁"


class Category(Base, TimestampMixin):
    """Category grouping a user's transactions."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    color = Column(String(50), nullable=False, default=DEFAULT_COLOR)
    icon = Column(String(50), nullable=False, default=DEFAULT_ICON)  # emoji or icon name

    # Relationships
    user = relationship("User", backref="categories")
    transactions = relationship(
        "Transaction",
        back_populates="category",
        order_by="Transaction.date.desc()",
        passive_deletes=True,
    )
