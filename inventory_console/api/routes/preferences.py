from fastapi import APIRouter, Depends

from inventory_console.schemas.preferences import DraftResponse, ThemePreference
from inventory_console.schemas.product import ProductDraft
from inventory_console.state import InventoryState, get_inventory

router = APIRouter(prefix="/api/preferences", tags=["preferences"])


@router.get("/theme", response_model=ThemePreference)
async def get_theme(state: InventoryState = Depends(get_inventory)):
    return ThemePreference(theme=await state.preferences.get_theme())


@router.put("/theme", response_model=ThemePreference)
async def set_theme(
    payload: ThemePreference,
    state: InventoryState = Depends(get_inventory)
):
    return ThemePreference(theme=await state.preferences.set_theme(payload.theme))


@router.get("/draft", response_model=DraftResponse)
async def get_draft(state: InventoryState = Depends(get_inventory)):
    """Unsaved new-product draft worth offering for restore, if any."""
    return DraftResponse(draft=await state.preferences.load_draft())


@router.put("/draft", status_code=204)
async def save_draft(
    draft: ProductDraft,
    state: InventoryState = Depends(get_inventory)
):
    await state.preferences.save_draft(draft)
    return None


@router.delete("/draft", status_code=204)
async def dismiss_draft(state: InventoryState = Depends(get_inventory)):
    await state.preferences.clear_draft()
    return None
