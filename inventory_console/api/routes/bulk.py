from fastapi import APIRouter, Depends

from inventory_console.api.errors import http_error
from inventory_console.api.websocket import manager
from inventory_console.exceptions import InventoryError
from inventory_console.schemas.product import BulkDeleteRequest, BulkDeleteResponse
from inventory_console.state import InventoryState, get_inventory

router = APIRouter(prefix="/api/products", tags=["products"])


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_products(
    request: BulkDeleteRequest,
    state: InventoryState = Depends(get_inventory)
):
    """Bulk delete products; without ids the current selection is deleted."""
    try:
        deleted, errors = state.delete_products(request.product_ids)
    except InventoryError as e:
        raise http_error(e)

    await manager.publish(state.notifications.take_unsent())

    return BulkDeleteResponse(
        success_count=len(deleted),
        failure_count=len(errors),
        errors=errors
    )
