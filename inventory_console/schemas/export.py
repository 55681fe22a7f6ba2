from typing import Literal

from inventory_console.models.base import CamelModel

ExportFormat = Literal["csv", "json", "pdf"]
ExportScope = Literal["all", "filtered", "selected"]


class ExportRequest(CamelModel):
    format: ExportFormat
    scope: ExportScope = "all"
