from typing import Literal, Optional

from inventory_console.models.base import CamelModel
from inventory_console.schemas.product import ProductDraft

Theme = Literal["dark", "light"]


class ThemePreference(CamelModel):
    theme: Theme


class DraftResponse(CamelModel):
    draft: Optional[ProductDraft] = None
