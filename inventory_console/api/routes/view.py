from fastapi import APIRouter, Depends

from inventory_console.api.errors import http_error
from inventory_console.exceptions import InventoryError
from inventory_console.schemas.view import (
    FilterUpdate,
    PageRequest,
    SelectionUpdate,
    SortRequest,
    ViewStateResponse,
)
from inventory_console.services.view_pipeline import ViewState
from inventory_console.state import InventoryState, get_inventory

router = APIRouter(prefix="/api/view", tags=["view"])


def view_response(view: ViewState) -> ViewStateResponse:
    return ViewStateResponse(
        search_term=view.search_term,
        status_filter=view.status_filter,
        category_filter=view.category_filter,
        sort_key=view.sort.key,
        sort_direction=view.sort.direction,
        page=view.page,
        selected_product_ids=view.selected_product_ids
    )


@router.get("", response_model=ViewStateResponse)
async def get_view(state: InventoryState = Depends(get_inventory)):
    return view_response(state.view)


@router.patch("/filters", response_model=ViewStateResponse)
async def update_filters(
    update: FilterUpdate,
    state: InventoryState = Depends(get_inventory)
):
    """Edit search/status/category filters. Clears the selection and returns to page 1."""
    state.apply_filters(update)
    return view_response(state.view)


@router.post("/sort", response_model=ViewStateResponse)
async def request_sort(
    request: SortRequest,
    state: InventoryState = Depends(get_inventory)
):
    try:
        state.request_sort(request.key)
    except InventoryError as e:
        raise http_error(e)
    return view_response(state.view)


@router.post("/page", response_model=ViewStateResponse)
async def go_to_page(
    request: PageRequest,
    state: InventoryState = Depends(get_inventory)
):
    state.go_to_page(request.page)
    return view_response(state.view)


@router.put("/selection", response_model=ViewStateResponse)
async def set_selection(
    update: SelectionUpdate,
    state: InventoryState = Depends(get_inventory)
):
    """Replace the selection; ids hidden by the current filters are ignored."""
    state.select(update.product_ids)
    return view_response(state.view)
