"""Author Routes — CRUD under /autores."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from biblioteca.infrastructure.database import get_db
from biblioteca.schemas.catalog import AuthorCreate, AuthorResponse
from biblioteca.schemas.common import MessageResponse
from biblioteca.services.authors import AuthorCatalog

router = APIRouter(prefix="/autores", tags=["authors"])


@router.post(
    "", response_model=AuthorResponse, status_code=status.HTTP_201_CREATED,
)
async def create_author(body: AuthorCreate, db: AsyncSession = Depends(get_db)):
    return await AuthorCatalog(db).create(body.name)


@router.get("", response_model=list[AuthorResponse])
async def list_authors(db: AsyncSession = Depends(get_db)):
    return await AuthorCatalog(db).list_all()


@router.get("/{author_id}", response_model=AuthorResponse)
async def get_author(author_id: UUID, db: AsyncSession = Depends(get_db)):
    return await AuthorCatalog(db).get(author_id)


@router.put("/{author_id}", response_model=AuthorResponse)
async def replace_author(
    author_id: UUID, body: AuthorCreate, db: AsyncSession = Depends(get_db),
):
    return await AuthorCatalog(db).rename(author_id, body.name)


@router.delete("/{author_id}", response_model=MessageResponse)
async def delete_author(author_id: UUID, db: AsyncSession = Depends(get_db)):
    await AuthorCatalog(db).delete(author_id)
    return MessageResponse(message="Author deleted")
