"""Rental ORM — one loan of N copies of a book to a borrower.

Invariants:
    - Always belongs to a Book (book_id FK, indexed)
    - quantity > 0
    - status transitions borrowed -> returned exactly once; returned_at set then

Design Decisions:
    - status stored as String(20) holding RentalStatus values
    - returned_at kept alongside status: the record is the lending history
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, Integer, DateTime, ForeignKey, CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from biblioteca.core.domain_types import RentalStatus
from biblioteca.db.base import Base


class Rental(Base):
    """Rental entity — owned by a Book."""
    __tablename__ = "rentals"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_rentals_quantity_positive"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    book_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("books.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    borrower_first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    borrower_last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    borrower_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    checkout_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    due_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=RentalStatus.BORROWED.value,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    returned_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    book: Mapped["Book"] = relationship("Book", back_populates="rentals")
