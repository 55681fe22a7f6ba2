from typing import Dict, Iterable

from inventory_console.models.product import Product, ProductStatus, is_low_stock
from inventory_console.schemas.dashboard import CategoryCount, DashboardStats


def low_stock_count(products: Iterable[Product], threshold: int = 10) -> int:
    return sum(1 for p in products if is_low_stock(p, threshold))


def compute_stats(
    products: Iterable[Product],
    low_stock_threshold: int = 10,
    alert_dismissed: bool = False
) -> DashboardStats:
    products = list(products)
    per_category: Dict[str, int] = {}
    for product in products:
        per_category[product.category] = per_category.get(product.category, 0) + 1

    low_stock = low_stock_count(products, low_stock_threshold)
    return DashboardStats(
        total_products=len(products),
        total_stock_value=round(sum(p.price * p.stock for p in products), 2),
        low_stock_items=low_stock,
        active_items=sum(1 for p in products if p.status == ProductStatus.ACTIVE),
        categories=[CategoryCount(name=name, products=count) for name, count in per_category.items()],
        low_stock_alert_visible=low_stock > 0 and not alert_dismissed,
    )
