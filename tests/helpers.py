"""Test helper functions and utilities."""

from datetime import datetime, timezone

from inventory_console.models.product import Product, ProductStatus

STAMP = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_product(
    pid: str,
    name: str,
    sku: str,
    category: str = "Electronics",
    price: float = 10.0,
    stock: int = 20,
    status: ProductStatus = ProductStatus.ACTIVE,
    **extra
) -> Product:
    """Create a stored product with fixed timestamps."""
    return Product(
        id=pid,
        name=name,
        sku=sku,
        category=category,
        description=extra.pop("description", f"{name} description"),
        price=price,
        stock=stock,
        status=status,
        image_url=extra.pop("image_url", f"https://img.example.com/{sku}.png"),
        last_updated=STAMP,
        date_added=STAMP,
        **extra
    )
