from pydantic import Field

from inventory_console.models.base import CamelModel


class ImportErrorItem(CamelModel):
    row: int
    message: str


class ImportResult(CamelModel):
    success_count: int = 0
    errors: list[ImportErrorItem] = Field(default_factory=list)
