"""
Derived product views: filter -> sort -> paginate.

The functions here are pure; ViewState holds the UI state they are fed
with (filters, sort order, page and selection).
"""
import logging
import math
from dataclasses import dataclass
from typing import Generic, Iterable, List, Sequence, TypeVar, Union

from inventory_console.exceptions import ValidationError
from inventory_console.models.product import (
    PRODUCT_FIELDS,
    Product,
    ProductStatus,
    display_status,
    field_alias,
    is_low_stock,
)

logger = logging.getLogger(__name__)

ALL = "all"
ASCENDING = "ascending"
DESCENDING = "descending"

T = TypeVar("T")

StatusFilter = Union[ProductStatus, str]


@dataclass
class Page(Generic[T]):
    items: List[T]
    total: int
    page: int
    page_size: int
    total_pages: int


@dataclass
class SortConfig:
    key: str = "name"
    direction: str = ASCENDING


def resolve_sort_key(key: str) -> str:
    """Accept either the attribute name or its camelCase alias."""
    if key in PRODUCT_FIELDS:
        return key
    for name in PRODUCT_FIELDS:
        if field_alias(name) == key:
            return name
    raise ValidationError({"key": f"Cannot sort by '{key}'"})


def matches_status(product: Product, status_filter: StatusFilter, threshold: int = 10) -> bool:
    if status_filter == ALL:
        return True
    if status_filter == ProductStatus.LOW_STOCK:
        return is_low_stock(product, threshold)
    return display_status(product, threshold) == status_filter


def filter_products(
    products: Iterable[Product],
    search_term: str = "",
    status_filter: StatusFilter = ALL,
    category_filter: str = ALL,
    low_stock_threshold: int = 10
) -> List[Product]:
    needle = search_term.lower()
    return [
        product for product in products
        if (needle in product.name.lower() or needle in product.sku.lower())
        and matches_status(product, status_filter, low_stock_threshold)
        and (category_filter == ALL or product.category == category_filter)
    ]


def sort_products(products: Iterable[Product], key: str, direction: str = ASCENDING) -> List[Product]:
    """Stable sort on one field; equal elements keep their relative order."""
    name = resolve_sort_key(key)
    return sorted(
        products,
        key=lambda product: getattr(product, name),
        reverse=direction == DESCENDING,
    )


def total_pages_for(total: int, page_size: int) -> int:
    return math.ceil(total / page_size) if total else 0


def clamp_page(page: int, total_pages: int) -> int:
    return max(1, min(page, total_pages or 1))


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    total = len(items)
    total_pages = total_pages_for(total, page_size)
    page = clamp_page(page, total_pages)
    start = (page - 1) * page_size
    return Page(
        items=list(items[start:start + page_size]),
        total=total,
        page=page,
        page_size=page_size,
        total_pages=total_pages,
    )


class ViewState:
    """Filter, sort, page and selection state of the product table."""

    def __init__(self, page_size: int = 10, low_stock_threshold: int = 10):
        self.page_size = page_size
        self.low_stock_threshold = low_stock_threshold
        self.search_term = ""
        self.status_filter: StatusFilter = ALL
        self.category_filter = ALL
        self.sort = SortConfig()
        self.page = 1
        self.selected_product_ids: List[str] = []

    def set_search_term(self, term: str) -> None:
        self.search_term = term
        self._filters_changed()

    def set_status_filter(self, status: StatusFilter) -> None:
        if status != ALL:
            status = ProductStatus(status)
        self.status_filter = status
        self._filters_changed()

    def set_category_filter(self, category: str) -> None:
        self.category_filter = category
        self._filters_changed()

    def _filters_changed(self) -> None:
        # hidden rows must never stay selected
        self.selected_product_ids = []
        self.page = 1

    def request_sort(self, key: str) -> SortConfig:
        """Same key again flips the direction; a new key starts ascending."""
        name = resolve_sort_key(key)
        direction = ASCENDING
        if self.sort.key == name and self.sort.direction == ASCENDING:
            direction = DESCENDING
        self.sort = SortConfig(name, direction)
        return self.sort

    def go_to_page(self, page: int, total_pages: int) -> int:
        self.page = clamp_page(page, total_pages)
        return self.page

    def select(self, product_ids: Iterable[str], visible_ids: Iterable[str]) -> List[str]:
        visible = set(visible_ids)
        self.selected_product_ids = [pid for pid in dict.fromkeys(product_ids) if pid in visible]
        return list(self.selected_product_ids)

    def forget(self, product_ids: Iterable[str]) -> None:
        removed = set(product_ids)
        self.selected_product_ids = [pid for pid in self.selected_product_ids if pid not in removed]

    def filtered(self, products: Iterable[Product]) -> List[Product]:
        return filter_products(
            products,
            self.search_term,
            self.status_filter,
            self.category_filter,
            self.low_stock_threshold,
        )

    def sorted(self, products: Iterable[Product]) -> List[Product]:
        return sort_products(self.filtered(products), self.sort.key, self.sort.direction)

    def paginated(self, products: Iterable[Product]) -> Page[Product]:
        return paginate(self.sorted(products), self.page, self.page_size)
