from fastapi import APIRouter, Depends, HTTPException
from typing import List
import logging

from inventory_console.api.errors import http_error
from inventory_console.api.websocket import manager
from inventory_console.exceptions import InventoryError
from inventory_console.models.audit_log import AuditLog
from inventory_console.models.product import Product, display_status
from inventory_console.schemas.product import (
    ProductDraft,
    ProductUpdate,
    ProductResponse,
    ProductListResponse
)
from inventory_console.state import InventoryState, get_inventory

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


def to_response(product: Product, state: InventoryState) -> ProductResponse:
    return ProductResponse(
        **product.model_dump(),
        display_status=display_status(product, state.settings.low_stock_threshold)
    )


@router.get("", response_model=ProductListResponse)
async def list_products(state: InventoryState = Depends(get_inventory)):
    """Current page of the filtered, sorted product table."""
    page = state.product_page()
    return ProductListResponse(
        items=[to_response(p, state) for p in page.items],
        total=page.total,
        page=page.page,
        page_size=page.page_size,
        total_pages=page.total_pages
    )


@router.get("/new-draft", response_model=ProductDraft)
async def new_product_draft(state: InventoryState = Depends(get_inventory)):
    """Blank draft with the form defaults for a new product."""
    return state.new_draft()


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: str,
    state: InventoryState = Depends(get_inventory)
):
    """Get a single product by ID."""
    product = state.products.get(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return to_response(product, state)


@router.get("/{product_id}/history", response_model=List[AuditLog])
async def product_history(
    product_id: str,
    state: InventoryState = Depends(get_inventory)
):
    """Audit entries recorded for one product, newest first."""
    return state.audit_log.for_product(product_id)


@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(
    draft: ProductDraft,
    state: InventoryState = Depends(get_inventory)
):
    """Create a new product."""
    try:
        product = state.create_product(draft)
    except InventoryError as e:
        raise http_error(e)

    await state.preferences.clear_draft()
    await manager.publish(state.notifications.take_unsent())
    return to_response(product, state)


@router.post("/{product_id}/duplicate", response_model=ProductDraft)
async def duplicate_product(
    product_id: str,
    state: InventoryState = Depends(get_inventory)
):
    """Unsaved copy of a product, to be edited and then created."""
    try:
        return state.duplicate_product(product_id)
    except InventoryError as e:
        raise http_error(e)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    patch: ProductUpdate,
    state: InventoryState = Depends(get_inventory)
):
    """Update a product."""
    try:
        product = state.update_product(product_id, patch)
    except InventoryError as e:
        raise http_error(e)

    await manager.publish(state.notifications.take_unsent())
    return to_response(product, state)


@router.delete("/{product_id}", status_code=204)
async def delete_product(
    product_id: str,
    state: InventoryState = Depends(get_inventory)
):
    """Delete a product."""
    try:
        product = state.delete_product(product_id)
    except InventoryError as e:
        raise http_error(e)

    logger.info("Product %s deleted via API", product.id)
    await manager.publish(state.notifications.take_unsent())
    return None
