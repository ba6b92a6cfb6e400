"""Rental Routes — borrow, return and list rentals.

Invariants:
    - Registered BEFORE books.router: /libros/alquilados must not be captured
      by /libros/{book_id}
    - Stock and state rules live in services/rental_ledger; routes only map shapes
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from biblioteca.infrastructure.database import get_db
from biblioteca.models.rental import Rental
from biblioteca.schemas.book import BookResponse, RentalRequest, RentalResponse
from biblioteca.services.rental_ledger import RentalLedger

router = APIRouter(prefix="/libros", tags=["rentals"])


def _to_response(rental: Rental, title: str) -> RentalResponse:
    return RentalResponse.model_validate(rental).model_copy(
        update={"book_title": title},
    )


@router.post(
    "/alquilar", response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
)
async def request_rental(
    body: RentalRequest, db: AsyncSession = Depends(get_db),
):
    """Rent copies of a book by title. Returns the updated book."""
    return await RentalLedger(db).request_rental(body)


@router.patch("/devolver/{rental_id}", response_model=BookResponse)
async def return_rental(
    rental_id: UUID, db: AsyncSession = Depends(get_db),
):
    """Return a rental by id. Returns the updated book."""
    return await RentalLedger(db).return_rental(rental_id)


@router.get("/alquilados", response_model=list[RentalResponse])
async def list_rentals(db: AsyncSession = Depends(get_db)):
    """All rentals across all books."""
    rows = await RentalLedger(db).list_rentals()
    return [_to_response(rental, title) for rental, title in rows]


@router.get("/alquilados/prestados", response_model=list[RentalResponse])
async def list_outstanding_rentals(db: AsyncSession = Depends(get_db)):
    """Rentals not yet returned."""
    rows = await RentalLedger(db).list_rentals(outstanding_only=True)
    return [_to_response(rental, title) for rental, title in rows]
