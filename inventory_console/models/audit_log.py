from datetime import datetime
from enum import Enum

from inventory_console.models.base import CamelModel


class AuditLogAction(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


# productId used by entries that cover several products at once
MULTIPLE_PRODUCTS = "multiple"


class AuditLog(CamelModel):
    id: str
    timestamp: datetime
    action: AuditLogAction
    product_id: str
    product_name: str
    details: str

    model_config = {"frozen": True}
