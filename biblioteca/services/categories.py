"""Category Catalog — categories and positional edits of their subcategories.

Invariants:
    - Index-based edits validated by core/enforce_subcategories (OutOfRangeError)
    - A failed edit leaves the stored list untouched (nothing is committed)
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from biblioteca.core.enforce_subcategories import (
    append_subcategory, replace_subcategory, remove_subcategory,
)
from biblioteca.core.errors import ResourceNotFoundError
from biblioteca.models.category import Category
from biblioteca.schemas.catalog import CategoryCreate


class CategoryCatalog:
    """CRUD over Category documents."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, body: CategoryCreate) -> Category:
        category = Category(name=body.name, subcategories=list(body.subcategories))
        self.db.add(category)
        await self.db.commit()
        await self.db.refresh(category)
        return category

    async def list_all(self) -> list[Category]:
        result = await self.db.execute(
            select(Category).order_by(Category.created_at),
        )
        return list(result.scalars().all())

    async def get(self, category_id: UUID) -> Category:
        category = await self.db.get(Category, category_id)
        if not category:
            raise ResourceNotFoundError("Category", str(category_id))
        return category

    async def subcategories_by_name(self, name: str) -> list[str]:
        result = await self.db.execute(
            select(Category).where(Category.name == name).limit(1),
        )
        category = result.scalar_one_or_none()
        if not category:
            raise ResourceNotFoundError("Category", name)
        return list(category.subcategories or [])

    async def rename(self, category_id: UUID, name: str) -> Category:
        category = await self.get(category_id)
        category.name = name
        return await self._save(category)

    async def add_subcategory(self, category_id: UUID, name: str) -> Category:
        category = await self.get(category_id)
        category.subcategories = append_subcategory(category.subcategories, name)
        return await self._save(category)

    async def edit_subcategory(
        self, category_id: UUID, index: int, name: str,
    ) -> Category:
        category = await self.get(category_id)
        category.subcategories = replace_subcategory(
            list(category.subcategories or []), index, name,
        )
        return await self._save(category)

    async def remove_subcategory(self, category_id: UUID, index: int) -> Category:
        category = await self.get(category_id)
        category.subcategories = remove_subcategory(
            list(category.subcategories or []), index,
        )
        return await self._save(category)

    async def delete(self, category_id: UUID) -> None:
        category = await self.get(category_id)
        await self.db.delete(category)
        await self.db.commit()

    async def _save(self, category: Category) -> Category:
        await self.db.commit()
        await self.db.refresh(category)
        return category
