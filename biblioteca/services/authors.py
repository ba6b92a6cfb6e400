"""Author Catalog — name-only CRUD. Renames do not propagate to Book.author."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from biblioteca.core.errors import ResourceNotFoundError
from biblioteca.models.author import Author


class AuthorCatalog:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, name: str) -> Author:
        author = Author(name=name)
        self.db.add(author)
        await self.db.commit()
        await self.db.refresh(author)
        return author

    async def list_all(self) -> list[Author]:
        result = await self.db.execute(select(Author).order_by(Author.created_at))
        return list(result.scalars().all())

    async def get(self, author_id: UUID) -> Author:
        author = await self.db.get(Author, author_id)
        if not author:
            raise ResourceNotFoundError("Author", str(author_id))
        return author

    async def rename(self, author_id: UUID, name: str) -> Author:
        author = await self.get(author_id)
        author.name = name
        await self.db.commit()
        await self.db.refresh(author)
        return author

    async def delete(self, author_id: UUID) -> None:
        author = await self.get(author_id)
        await self.db.delete(author)
        await self.db.commit()
