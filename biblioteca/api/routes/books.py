"""Book Routes — catalog CRUD under /libros."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from biblioteca.infrastructure.database import get_db
from biblioteca.schemas.book import BookCreate, BookResponse, BookUpdate
from biblioteca.schemas.common import MessageResponse
from biblioteca.services.books import BookCatalog

router = APIRouter(prefix="/libros", tags=["books"])


@router.post(
    "", response_model=BookResponse, status_code=status.HTTP_201_CREATED,
)
async def create_book(body: BookCreate, db: AsyncSession = Depends(get_db)):
    return await BookCatalog(db).create(body)


@router.get("", response_model=list[BookResponse])
async def list_books(db: AsyncSession = Depends(get_db)):
    return await BookCatalog(db).list_all()


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(book_id: UUID, db: AsyncSession = Depends(get_db)):
    return await BookCatalog(db).get(book_id)


@router.put("/{book_id}", response_model=BookResponse)
async def replace_book(
    book_id: UUID, body: BookCreate, db: AsyncSession = Depends(get_db),
):
    """Replace every editable field of a book."""
    return await BookCatalog(db).replace(book_id, body)


@router.patch("/{book_id}", response_model=BookResponse)
async def update_book(
    book_id: UUID, body: BookUpdate, db: AsyncSession = Depends(get_db),
):
    """Update only the fields present in the body."""
    return await BookCatalog(db).update(book_id, body)


@router.delete("/{book_id}", response_model=MessageResponse)
async def delete_book(book_id: UUID, db: AsyncSession = Depends(get_db)):
    await BookCatalog(db).delete(book_id)
    return MessageResponse(message="Book deleted")
