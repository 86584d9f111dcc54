"""Transaction model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from finance_tracker.database import Base
from finance_tracker.models.mixins import TimestampMixin


class Transaction(Base, TimestampMixin):
    """Income or expense entry filed under one of the owner's categories."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    description = Column(String(500), nullable=True)
    amount = Column(Numeric(12, 2), nullable=False)  # unsigned, direction is in `type`
    type = Column(String(20), nullable=False)  # "income" | "expense"
    date = Column(DateTime(timezone=True), nullable=False, index=True)

    # Relationships
    user = relationship("User", backref="transactions")
    category = relationship("Category", back_populates="transactions")
