from pydantic import Field

from inventory_console.models.base import CamelModel


class CategoryCreate(CamelModel):
    name: str = Field(..., min_length=1, description="Category name (unique, case-insensitive)")


class CategoryRename(CamelModel):
    name: str = Field(..., min_length=1, description="New category name")


class CategoryListResponse(CamelModel):
    items: list[str]
