"""Category Routes — CRUD and subcategory edits under /categories.

Invariants:
    - Subcategories are looked up by category NAME on GET, edited by category ID
    - Out-of-range indexes answer 400 OUT_OF_RANGE and change nothing
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from biblioteca.infrastructure.database import get_db
from biblioteca.schemas.catalog import (
    CategoryCreate, CategoryRename, CategoryResponse,
    SubcategoryAppend, SubcategoryEdit, SubcategoryRemove,
)
from biblioteca.schemas.common import MessageResponse
from biblioteca.services.categories import CategoryCatalog

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post(
    "", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED,
)
async def create_category(
    body: CategoryCreate, db: AsyncSession = Depends(get_db),
):
    return await CategoryCatalog(db).create(body)


@router.get("", response_model=list[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    return await CategoryCatalog(db).list_all()


@router.get("/{name}/subcategories", response_model=list[str])
async def get_subcategories(name: str, db: AsyncSession = Depends(get_db)):
    """Subcategories of the category with this exact name."""
    return await CategoryCatalog(db).subcategories_by_name(name)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: UUID, db: AsyncSession = Depends(get_db)):
    return await CategoryCatalog(db).get(category_id)


@router.patch("/{category_id}/name", response_model=CategoryResponse)
async def rename_category(
    category_id: UUID, body: CategoryRename, db: AsyncSession = Depends(get_db),
):
    return await CategoryCatalog(db).rename(category_id, body.name)


@router.patch("/{category_id}", response_model=CategoryResponse)
async def add_subcategory(
    category_id: UUID, body: SubcategoryAppend, db: AsyncSession = Depends(get_db),
):
    """Append a subcategory."""
    return await CategoryCatalog(db).add_subcategory(category_id, body.subcategory)


@router.put("/{category_id}/subcategorieseditar", response_model=CategoryResponse)
async def edit_subcategory(
    category_id: UUID, body: SubcategoryEdit, db: AsyncSession = Depends(get_db),
):
    """Replace the subcategory at subcategory_index."""
    return await CategoryCatalog(db).edit_subcategory(
        category_id, body.subcategory_index, body.new_subcategory,
    )


@router.put("/{category_id}/subcategories", response_model=CategoryResponse)
async def remove_subcategory(
    category_id: UUID, body: SubcategoryRemove, db: AsyncSession = Depends(get_db),
):
    """Remove the subcategory at subcategory_index."""
    return await CategoryCatalog(db).remove_subcategory(
        category_id, body.subcategory_index,
    )


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(
    category_id: UUID, db: AsyncSession = Depends(get_db),
):
    await CategoryCatalog(db).delete(category_id)
    return MessageResponse(message="Category deleted")
