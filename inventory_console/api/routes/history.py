from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from inventory_console.models.audit_log import AuditLogAction
from inventory_console.schemas.audit_log import AuditLogListResponse
from inventory_console.state import InventoryState, get_inventory

router = APIRouter(prefix="/api/history", tags=["history"])


@router.get("", response_model=AuditLogListResponse)
async def list_history(
    page: int = Query(1, ge=1),
    search: str = "",
    action: str = Query("all", description="CREATE, UPDATE, DELETE or all"),
    start: Optional[date] = None,
    end: Optional[date] = None,
    state: InventoryState = Depends(get_inventory)
):
    """Audit log, newest first, filtered by product name, action and date range."""
    try:
        action_filter = None if action == "all" else AuditLogAction(action)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Unknown action '{action}'")

    result = state.history(
        search=search,
        action=action_filter,
        start=start,
        end=end,
        page=page
    )
    return AuditLogListResponse(
        items=result.items,
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages
    )
