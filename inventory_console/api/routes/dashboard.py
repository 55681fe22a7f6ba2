from fastapi import APIRouter, Depends

from inventory_console.schemas.dashboard import DashboardStats
from inventory_console.state import InventoryState, get_inventory

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardStats)
async def get_dashboard(state: InventoryState = Depends(get_inventory)):
    return state.dashboard()


@router.post("/low-stock-alert/dismiss", response_model=DashboardStats)
async def dismiss_low_stock_alert(state: InventoryState = Depends(get_inventory)):
    state.dismiss_low_stock_alert()
    return state.dashboard()


@router.post("/low-stock-alert/view", status_code=204)
async def view_low_stock(state: InventoryState = Depends(get_inventory)):
    """Point the product table at low-stock items."""
    state.show_low_stock()
    return None
