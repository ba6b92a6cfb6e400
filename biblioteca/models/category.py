"""Category ORM — a named category with an ordered list of subcategories.

Invariants:
    - name is non-nullable
    - subcategories keeps insertion order; edits go through core/enforce_subcategories

Design Decisions:
    - JSON column for subcategories: positional edits on a short list, never queried
      by element. Changes must reassign the attribute (plain JSON is not mutation-tracked)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from biblioteca.db.base import Base


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    subcategories: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
