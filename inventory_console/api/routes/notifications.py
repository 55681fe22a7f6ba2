from typing import List

from fastapi import APIRouter, Depends, HTTPException

from inventory_console.models.notification import Notification
from inventory_console.state import InventoryState, get_inventory

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=List[Notification])
async def list_notifications(state: InventoryState = Depends(get_inventory)):
    """Notifications that have not expired or been dismissed."""
    return state.notifications.active()


@router.delete("/{notification_id}", status_code=204)
async def dismiss_notification(
    notification_id: str,
    state: InventoryState = Depends(get_inventory)
):
    if not state.notifications.dismiss(notification_id):
        raise HTTPException(status_code=404, detail="Notification not found")
    return None
