from inventory_console.models.base import CamelModel


class CategoryCount(CamelModel):
    name: str
    products: int


class DashboardStats(CamelModel):
    total_products: int
    total_stock_value: float
    low_stock_items: int
    active_items: int
    categories: list[CategoryCount]
    low_stock_alert_visible: bool
