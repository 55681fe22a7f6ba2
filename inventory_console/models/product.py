from datetime import datetime
from enum import Enum
from typing import Tuple

from inventory_console.models.base import CamelModel


class ProductStatus(str, Enum):
    ACTIVE = "Active"
    DISCONTINUED = "Discontinued"
    LOW_STOCK = "Low Stock"


class Product(CamelModel):
    id: str
    name: str
    sku: str = ""
    category: str
    description: str = ""
    price: float
    stock: int
    status: ProductStatus = ProductStatus.ACTIVE
    image_url: str = ""
    last_updated: datetime
    date_added: datetime
    is_featured: bool = False
    contact_email: str = ""
    product_url: str = ""


# Field order of the record; CSV export uses the same order.
PRODUCT_FIELDS: Tuple[str, ...] = tuple(Product.model_fields)

# Fields compared when building an UPDATE audit entry.
AUDITED_FIELDS: Tuple[str, ...] = tuple(
    name for name in PRODUCT_FIELDS if name not in ("id", "last_updated")
)


def is_low_stock(product: Product, threshold: int = 10) -> bool:
    return 0 < product.stock < threshold


def display_status(product: Product, threshold: int = 10) -> ProductStatus:
    """Status shown to the user. Stored status is never rewritten."""
    if is_low_stock(product, threshold):
        return ProductStatus.LOW_STOCK
    return product.status


def field_alias(name: str) -> str:
    return Product.model_fields[name].alias or name
