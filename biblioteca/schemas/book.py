"""Book & Rental Schemas — catalog payloads and the rental request contract.

Invariants:
    - BookCreate.title: 1-300 chars, stripped, non-empty
    - available_copies is never negative at the boundary
    - RentalRequest.quantity > 0; due_date >= checkout_date
    - Naive datetimes are read as UTC

Design Decisions:
    - BookUpdate is all-optional for PATCH; PUT reuses BookCreate (full replace)
    - RentalResponse.book_title filled by the rental listings, which join the book
"""

from datetime import datetime, timezone
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from biblioteca.core.domain_types import MAX_COPIES, RentalStatus


def _strip_title(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("title cannot be empty or whitespace")
    return v


def _as_utc(v: datetime | None) -> datetime | None:
    if v is not None and v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v


class BookCreate(BaseModel):
    """Book creation and full replacement."""
    title: str = Field(min_length=1, max_length=300)
    category: str | None = Field(None, max_length=200)
    subcategory: str | None = Field(None, max_length=200)
    image: str | None = Field(None, max_length=1000)
    author: str | None = Field(None, max_length=200)
    description: str | None = None
    available_copies: int = Field(0, ge=0, le=MAX_COPIES)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return _strip_title(v)


class BookUpdate(BaseModel):
    """Partial book update — only fields present in the body are written.

    title and available_copies may be omitted but not set to null.
    """
    title: str | None = Field(None, min_length=1, max_length=300)
    category: str | None = Field(None, max_length=200)
    subcategory: str | None = Field(None, max_length=200)
    image: str | None = Field(None, max_length=1000)
    author: str | None = Field(None, max_length=200)
    description: str | None = None
    available_copies: int | None = Field(None, ge=0, le=MAX_COPIES)

    @field_validator("title", "available_copies")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("field cannot be null")
        return v

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str | None) -> str | None:
        return _strip_title(v)


class RentalRequest(BaseModel):
    """Request to borrow `quantity` copies of the book titled `title`."""
    title: str = Field(min_length=1, max_length=300)
    borrower_first_name: str = Field(min_length=1, max_length=100)
    borrower_last_name: str = Field(min_length=1, max_length=100)
    borrower_phone: str | None = Field(None, max_length=50)
    checkout_date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
    due_date: datetime
    quantity: int = Field(gt=0)

    @field_validator("checkout_date", "due_date")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        return _as_utc(v)

    @model_validator(mode="after")
    def validate_dates(self):
        if self.due_date < self.checkout_date:
            raise ValueError("due_date cannot be earlier than checkout_date")
        return self


class RentalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    book_id: UUID
    book_title: str | None = None
    borrower_first_name: str
    borrower_last_name: str
    borrower_phone: str | None
    checkout_date: datetime
    due_date: datetime
    quantity: int
    status: RentalStatus
    created_at: datetime
    returned_at: datetime | None


class BookResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    category: str | None
    subcategory: str | None
    image: str | None
    author: str | None
    description: str | None
    available_copies: int
    rentals: list[RentalResponse] = []
    created_at: datetime
