"""Category & Author Schemas.

Invariants:
    - Names are stripped and non-empty
    - Subcategory indexes are plain ints here: bounds are checked against the
      stored list by core/enforce_subcategories (OutOfRangeError)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _strip_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("name cannot be empty or whitespace")
    return v


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    subcategories: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_name(v)

    @field_validator("subcategories")
    @classmethod
    def strip_subcategories(cls, v: list[str]) -> list[str]:
        return [_strip_name(s) for s in v]


class CategoryRename(BaseModel):
    name: str = Field(min_length=1, max_length=200)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_name(v)


class SubcategoryAppend(BaseModel):
    subcategory: str = Field(min_length=1, max_length=200)

    @field_validator("subcategory")
    @classmethod
    def strip_subcategory(cls, v: str) -> str:
        return _strip_name(v)


class SubcategoryEdit(BaseModel):
    subcategory_index: int
    new_subcategory: str = Field(min_length=1, max_length=200)

    @field_validator("new_subcategory")
    @classmethod
    def strip_subcategory(cls, v: str) -> str:
        return _strip_name(v)


class SubcategoryRemove(BaseModel):
    subcategory_index: int


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    subcategories: list[str]
    created_at: datetime


class AuthorCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_name(v)


class AuthorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    created_at: datetime
