from inventory_console.schemas.product import (
    ProductDraft,
    ProductUpdate,
    ProductResponse,
    ProductListResponse,
    BulkDeleteRequest,
    BulkDeleteResponse,
)
from inventory_console.schemas.import_result import ImportErrorItem, ImportResult
from inventory_console.schemas.category import CategoryCreate, CategoryRename, CategoryListResponse
from inventory_console.schemas.view import FilterUpdate, SortRequest, PageRequest, SelectionUpdate, ViewStateResponse
from inventory_console.schemas.audit_log import AuditLogListResponse
from inventory_console.schemas.export import ExportRequest
from inventory_console.schemas.dashboard import CategoryCount, DashboardStats
from inventory_console.schemas.preferences import ThemePreference, DraftResponse

__all__ = [
    "ProductDraft",
    "ProductUpdate",
    "ProductResponse",
    "ProductListResponse",
    "BulkDeleteRequest",
    "BulkDeleteResponse",
    "ImportErrorItem",
    "ImportResult",
    "CategoryCreate",
    "CategoryRename",
    "CategoryListResponse",
    "FilterUpdate",
    "SortRequest",
    "PageRequest",
    "SelectionUpdate",
    "ViewStateResponse",
    "AuditLogListResponse",
    "ExportRequest",
    "CategoryCount",
    "DashboardStats",
    "ThemePreference",
    "DraftResponse",
]
