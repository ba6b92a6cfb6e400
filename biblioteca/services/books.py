"""Book Catalog — create, read, replace, update and delete books.

Invariants:
    - Book titles are unique: duplicate title on write -> ConflictError
    - A book with outstanding rentals cannot be deleted (ConflictError)
    - Reads after a write use populate_existing so bulk UPDATEs issued by the
      rental ledger are visible on objects already in the identity map
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from biblioteca.core.domain_types import BookId
from biblioteca.core.enforce_rental import is_outstanding
from biblioteca.core.errors import ConflictError, ErrorContext, ResourceNotFoundError
from biblioteca.models.book import Book
from biblioteca.schemas.book import BookCreate, BookUpdate

logger = logging.getLogger(__name__)

TITLE_INDEX = "ix_books_title"


async def get_book_or_404(db: AsyncSession, book_id: BookId) -> Book:
    """Load a book with its rentals, refreshing anything already in the session."""
    result = await db.execute(
        select(Book)
        .where(Book.id == book_id)
        .execution_options(populate_existing=True),
    )
    book = result.scalar_one_or_none()
    if not book:
        raise ResourceNotFoundError("Book", str(book_id))
    return book


class BookCatalog:
    """CRUD over Book documents."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, body: BookCreate) -> Book:
        await self._check_title_free(body.title)
        book = Book(**body.model_dump())
        self.db.add(book)
        await self._commit_unique_title(body.title)
        return await get_book_or_404(self.db, book.id)

    async def list_all(self) -> list[Book]:
        result = await self.db.execute(select(Book).order_by(Book.created_at))
        return list(result.scalars().all())

    async def get(self, book_id: BookId) -> Book:
        return await get_book_or_404(self.db, book_id)

    async def get_by_title(self, title: str) -> Book:
        result = await self.db.execute(select(Book).where(Book.title == title))
        book = result.scalar_one_or_none()
        if not book:
            raise ResourceNotFoundError("Book", title)
        return book

    async def replace(self, book_id: BookId, body: BookCreate) -> Book:
        return await self._apply(book_id, body.model_dump())

    async def update(self, book_id: BookId, body: BookUpdate) -> Book:
        return await self._apply(book_id, body.model_dump(exclude_unset=True))

    async def delete(self, book_id: BookId) -> None:
        book = await get_book_or_404(self.db, book_id)
        if any(is_outstanding(rental.status) for rental in book.rentals):
            raise ConflictError(
                f"Book '{book.title}' has outstanding rentals and cannot be deleted",
                ErrorContext(book_id=str(book_id)),
            )
        await self.db.delete(book)
        await self.db.commit()
        logger.info("Book deleted", extra={"book_id": str(book_id)})

    async def _apply(self, book_id: BookId, fields: dict) -> Book:
        book = await get_book_or_404(self.db, book_id)
        new_title = fields.get("title")
        if new_title is not None and new_title != book.title:
            await self._check_title_free(new_title)
        for key, value in fields.items():
            setattr(book, key, value)
        await self._commit_unique_title(book.title)
        return await get_book_or_404(self.db, book_id)

    async def _check_title_free(self, title: str) -> None:
        result = await self.db.execute(select(Book.id).where(Book.title == title))
        if result.first() is not None:
            raise ConflictError(f"A book titled '{title}' already exists")

    async def _commit_unique_title(self, title: str) -> None:
        """Commit, turning a lost race on the unique title index into ConflictError.

        Any other integrity failure is re-raised for the session manager to
        report as a DatabaseError.
        """
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if _is_title_violation(e):
                raise ConflictError(f"A book titled '{title}' already exists")
            raise


def _is_title_violation(error: IntegrityError) -> bool:
    # SQLite: "UNIQUE constraint failed: books.title"
    # PostgreSQL: 'duplicate key value violates unique constraint "ix_books_title"'
    detail = str(error.orig)
    return "books.title" in detail or TITLE_INDEX in detail
