from datetime import datetime, timezone
from typing import List

from inventory_console.models.product import Product, ProductStatus


def _ts(day: int, hour: int = 9) -> datetime:
    return datetime(2024, 5, day, hour, 0, tzinfo=timezone.utc)


_SEED = [
    # id, name, sku, category, price, stock, status, featured
    ("1", "Wireless Mouse", "WM-001", "Electronics", 25.99, 150, ProductStatus.ACTIVE, True),
    ("2", "Mechanical Keyboard", "MK-002", "Electronics", 89.5, 8, ProductStatus.ACTIVE, False),
    ("3", "USB-C Hub", "UH-003", "Electronics", 45.0, 0, ProductStatus.DISCONTINUED, False),
    ("4", "Ergonomic Office Chair", "OC-004", "Furniture", 249.99, 20, ProductStatus.ACTIVE, True),
    ("5", "Standing Desk", "SD-005", "Furniture", 499.0, 5, ProductStatus.ACTIVE, False),
    ("6", "Bookshelf", "BS-006", "Furniture", 120.0, 35, ProductStatus.DISCONTINUED, False),
    ("7", "Notebook A5", "NB-007", "Stationery", 3.49, 500, ProductStatus.ACTIVE, False),
    ("8", "Gel Pen Set", "GP-008", "Stationery", 12.99, 3, ProductStatus.LOW_STOCK, False),
    ("9", "Desk Organizer", "DO-009", "Stationery", 18.75, 60, ProductStatus.ACTIVE, False),
    ("10", "Coffee Beans 1kg", "CB-010", "Groceries", 22.0, 9, ProductStatus.ACTIVE, True),
    ("11", "Green Tea Box", "GT-011", "Groceries", 7.5, 80, ProductStatus.ACTIVE, False),
    ("12", "Noise Cancelling Headphones", "NH-012", "Electronics", 199.99, 12, ProductStatus.ACTIVE, True),
]


def mock_products() -> List[Product]:
    """Static catalogue the console starts with."""
    products = []
    for index, (pid, name, sku, category, price, stock, status, featured) in enumerate(_SEED):
        products.append(
            Product(
                id=pid,
                name=name,
                sku=sku,
                category=category,
                description=f"{name} from the {category.lower()} range.",
                price=price,
                stock=stock,
                status=status,
                image_url=f"https://picsum.photos/seed/{sku.lower()}/400/400",
                last_updated=_ts(index + 10, 15),
                date_added=_ts(index + 1),
                is_featured=featured,
                contact_email="supply@example.com",
                product_url=f"https://shop.example.com/products/{sku.lower()}",
            )
        )
    return products
