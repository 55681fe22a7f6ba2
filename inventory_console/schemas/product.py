from pydantic import Field
from typing import Optional
from datetime import datetime

from inventory_console.models.base import CamelModel
from inventory_console.models.product import Product, ProductStatus


class ProductDraft(CamelModel):
    """An unsaved product. Validated by the product store, not here."""

    name: str = ""
    sku: str = ""
    category: str = ""
    description: str = ""
    price: float = 0
    stock: int = 0
    status: ProductStatus = ProductStatus.ACTIVE
    image_url: Optional[str] = None
    date_added: Optional[datetime] = None
    is_featured: bool = False
    contact_email: str = ""
    product_url: str = ""


class ProductUpdate(CamelModel):
    name: Optional[str] = None
    sku: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    stock: Optional[int] = None
    status: Optional[ProductStatus] = None
    image_url: Optional[str] = None
    is_featured: Optional[bool] = None
    contact_email: Optional[str] = None
    product_url: Optional[str] = None


class ProductResponse(Product):
    display_status: ProductStatus = Field(..., description="Status with the low-stock overlay applied")


class ProductListResponse(CamelModel):
    items: list[ProductResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class BulkDeleteRequest(CamelModel):
    product_ids: Optional[list[str]] = Field(
        None, description="Product IDs to delete; defaults to the current selection"
    )


class BulkDeleteResponse(CamelModel):
    success_count: int
    failure_count: int
    errors: list[dict] = Field(default_factory=list)
