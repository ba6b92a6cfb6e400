"""Book ORM — a catalog item and the owner of its rental history.

Invariants:
    - title is unique: rentals address a book by title
    - available_copies >= 0 (CHECK constraint backs the conditional update)
    - rentals ordered by insertion (created_at)
    - category/author are denormalized strings, not foreign keys

Design Decisions:
    - Rentals live in their own table with an indexed book_id: a rental id
      resolves to its book without scanning every book
    - cascade delete for rentals: the book owns them
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from biblioteca.db.base import Base


class Book(Base):
    """Book aggregate root — owns its Rentals."""
    __tablename__ = "books"
    __table_args__ = (
        CheckConstraint(
            "available_copies >= 0", name="ck_books_available_copies_non_negative",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(
        String(300), nullable=False, unique=True, index=True,
    )
    category: Mapped[str | None] = mapped_column(String(200), nullable=True)
    subcategory: Mapped[str | None] = mapped_column(String(200), nullable=True)
    image: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    author: Mapped[str | None] = mapped_column(String(200), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    available_copies: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    rentals: Mapped[list["Rental"]] = relationship(
        "Rental", back_populates="book",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="Rental.created_at",
    )
