from inventory_console.models.audit_log import AuditLog
from inventory_console.models.base import CamelModel


class AuditLogListResponse(CamelModel):
    items: list[AuditLog]
    total: int
    page: int
    page_size: int
    total_pages: int
