"""Rental Ledger — rental lifecycle and the book's available-copy accounting.

Invariants:
    - books.available_copies never goes below zero: the stock check and the
      decrement are ONE conditional UPDATE (WHERE available_copies >= quantity)
    - A rental moves borrowed -> returned exactly once: the status change is a
      conditional UPDATE (WHERE status = 'borrowed'), so two concurrent returns
      cannot both credit stock
    - Return credits back exactly the quantity recorded on the rental
    - Each operation commits all of its writes or none

Design Decisions:
    - Conditional UPDATEs over SELECT ... FOR UPDATE: works the same on
      PostgreSQL and SQLite, and holds the row lock only for the statement
    - Rentals resolve to their book through the indexed rentals.book_id column,
      so returns are addressed by rental id alone
    - synchronize_session=False on bulk UPDATEs; results re-read with
      populate_existing (see services/books.get_book_or_404)
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from biblioteca.core.domain_types import MAX_COPIES, BookId, RentalId, RentalStatus
from biblioteca.core.enforce_rental import INITIAL_STATUS, check_returnable
from biblioteca.core.errors import (
    AlreadyReturnedError, ErrorContext, InsufficientStockError, ResourceNotFoundError,
)
from biblioteca.models.book import Book
from biblioteca.models.rental import Rental
from biblioteca.schemas.book import RentalRequest
from biblioteca.services.books import BookCatalog, get_book_or_404

logger = logging.getLogger(__name__)


class RentalLedger:
    """Request, return and list rentals."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def request_rental(self, body: RentalRequest) -> Book:
        """Borrow body.quantity copies of the book titled body.title."""
        book = await BookCatalog(self.db).get_by_title(body.title)
        if not await self.reserve_copies(book.id, body.quantity):
            raise InsufficientStockError(
                book.title, body.quantity, ErrorContext(book_id=str(book.id)),
            )

        rental = Rental(
            book_id=book.id,
            borrower_first_name=body.borrower_first_name,
            borrower_last_name=body.borrower_last_name,
            borrower_phone=body.borrower_phone,
            checkout_date=body.checkout_date,
            due_date=body.due_date,
            quantity=body.quantity,
            status=INITIAL_STATUS.value,
        )
        self.db.add(rental)
        await self.db.commit()
        logger.info(
            f"Rented {body.quantity} of '{book.title}'",
            extra={"book_id": str(book.id), "rental_id": str(rental.id)},
        )
        return await get_book_or_404(self.db, book.id)

    async def reserve_copies(self, book_id: BookId, quantity: int) -> bool:
        """Atomically take quantity copies off the shelf. False if not enough."""
        if quantity > MAX_COPIES:
            # No book can hold this many; the value would not fit the column
            return False
        result = await self.db.execute(
            update(Book)
            .where(Book.id == book_id)
            .where(Book.available_copies >= quantity)
            .values(available_copies=Book.available_copies - quantity)
            .execution_options(synchronize_session=False),
        )
        return result.rowcount == 1

    async def return_rental(self, rental_id: RentalId) -> Book:
        """Mark a rental returned and put its copies back on the shelf."""
        result = await self.db.execute(
            select(Rental.book_id, Rental.quantity, Rental.status)
            .where(Rental.id == rental_id),
        )
        row = result.one_or_none()
        if row is None:
            raise ResourceNotFoundError("Rental", str(rental_id))
        book_id, quantity, status = row
        check_returnable(status, str(rental_id))

        transitioned = await self.db.execute(
            update(Rental)
            .where(Rental.id == rental_id)
            .where(Rental.status == RentalStatus.BORROWED.value)
            .values(
                status=RentalStatus.RETURNED.value,
                returned_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False),
        )
        if transitioned.rowcount != 1:
            # Another request returned it between our read and write
            raise AlreadyReturnedError(str(rental_id))

        await self.db.execute(
            update(Book)
            .where(Book.id == book_id)
            .values(available_copies=Book.available_copies + quantity)
            .execution_options(synchronize_session=False),
        )
        await self.db.commit()
        logger.info(
            f"Returned {quantity} copies",
            extra={"book_id": str(book_id), "rental_id": str(rental_id)},
        )
        return await get_book_or_404(self.db, book_id)

    async def list_rentals(
        self, outstanding_only: bool = False,
    ) -> list[tuple[Rental, str]]:
        """Rentals across all books with their book title, oldest first."""
        query = (
            select(Rental, Book.title)
            .join(Book, Rental.book_id == Book.id)
            .order_by(Rental.created_at)
        )
        if outstanding_only:
            query = query.where(Rental.status == RentalStatus.BORROWED.value)
        result = await self.db.execute(query)
        return [(rental, title) for rental, title in result.all()]
