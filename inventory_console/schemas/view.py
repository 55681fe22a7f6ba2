from typing import Literal, Optional, Union

from pydantic import Field

from inventory_console.models.base import CamelModel
from inventory_console.models.product import ProductStatus

SortDirection = Literal["ascending", "descending"]


class FilterUpdate(CamelModel):
    search_term: Optional[str] = None
    status_filter: Optional[Union[ProductStatus, Literal["all"]]] = None
    category_filter: Optional[str] = None


class SortRequest(CamelModel):
    key: str


class PageRequest(CamelModel):
    page: int


class SelectionUpdate(CamelModel):
    product_ids: list[str] = Field(default_factory=list)


class ViewStateResponse(CamelModel):
    search_term: str
    status_filter: Union[ProductStatus, Literal["all"]]
    category_filter: str
    sort_key: str
    sort_direction: SortDirection
    page: int
    selected_product_ids: list[str]
