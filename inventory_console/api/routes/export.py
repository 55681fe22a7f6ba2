from fastapi import APIRouter, Depends
from fastapi.responses import Response

from inventory_console.api.errors import http_error
from inventory_console.api.websocket import manager
from inventory_console.exceptions import InventoryError
from inventory_console.schemas.export import ExportRequest
from inventory_console.state import InventoryState, get_inventory

router = APIRouter(prefix="/api/export", tags=["export"])


@router.post("")
async def export_products(
    request: ExportRequest,
    state: InventoryState = Depends(get_inventory)
):
    """Download all, filtered or selected products as CSV, JSON or PDF."""
    try:
        exported = state.export(request.format, request.scope)
    except InventoryError as e:
        await manager.publish(state.notifications.take_unsent())
        raise http_error(e)

    await manager.publish(state.notifications.take_unsent())
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={"Content-Disposition": f'attachment; filename="{exported.filename}"'}
    )
