"""Category & Author Schemas — name stripping and index payloads."""

import pytest
from pydantic import ValidationError

from biblioteca.schemas.catalog import (
    AuthorCreate, CategoryCreate, SubcategoryEdit, SubcategoryRemove,
)


def test_category_names_stripped():
    category = CategoryCreate(name=" Ciencia ", subcategories=[" Física "])
    assert category.name == "Ciencia"
    assert category.subcategories == ["Física"]


def test_blank_subcategory_rejected():
    with pytest.raises(ValidationError):
        CategoryCreate(name="Ciencia", subcategories=["  "])


def test_negative_index_accepted_at_boundary():
    # Bounds are checked against the stored list, not here
    assert SubcategoryRemove(subcategory_index=-1).subcategory_index == -1


def test_edit_requires_new_name():
    with pytest.raises(ValidationError):
        SubcategoryEdit(subcategory_index=0)


def test_author_name_required():
    with pytest.raises(ValidationError):
        AuthorCreate(name="")
