from fastapi import APIRouter, Depends, HTTPException

from inventory_console.api.errors import http_error
from inventory_console.api.websocket import manager
from inventory_console.exceptions import InventoryError
from inventory_console.schemas.category import CategoryCreate, CategoryListResponse, CategoryRename
from inventory_console.state import InventoryState, get_inventory

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=CategoryListResponse)
async def list_categories(state: InventoryState = Depends(get_inventory)):
    return CategoryListResponse(items=state.categories.names)


@router.post("", response_model=CategoryListResponse, status_code=201)
async def add_category(
    payload: CategoryCreate,
    state: InventoryState = Depends(get_inventory)
):
    """Add a category; names are unique ignoring case."""
    try:
        added = state.add_category(payload.name)
    except InventoryError as e:
        raise http_error(e)
    await manager.publish(state.notifications.take_unsent())
    if not added:
        raise HTTPException(status_code=409, detail=f'Category "{payload.name}" already exists.')
    return CategoryListResponse(items=state.categories.names)


@router.put("/{name}", response_model=CategoryListResponse)
async def rename_category(
    name: str,
    payload: CategoryRename,
    state: InventoryState = Depends(get_inventory)
):
    """Rename a category and every product that uses it."""
    try:
        renamed = state.rename_category(name, payload.name)
    except InventoryError as e:
        raise http_error(e)
    await manager.publish(state.notifications.take_unsent())
    if not renamed:
        raise HTTPException(status_code=409, detail=f'Category "{payload.name}" already exists.')
    return CategoryListResponse(items=state.categories.names)


@router.delete("/{name}", status_code=204)
async def delete_category(
    name: str,
    state: InventoryState = Depends(get_inventory)
):
    """Delete a category that no product uses."""
    try:
        state.remove_category(name)
    except InventoryError as e:
        await manager.publish(state.notifications.take_unsent())
        raise http_error(e)
    await manager.publish(state.notifications.take_unsent())
    return None
