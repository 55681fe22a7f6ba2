import logging

from fastapi import APIRouter, Depends, UploadFile, File, HTTPException
from fastapi.responses import Response

from inventory_console.api.websocket import manager
from inventory_console.exceptions import ImportReadError
from inventory_console.schemas.import_result import ImportResult
from inventory_console.services.csv_processor import CSVProcessor
from inventory_console.services.export_service import import_template
from inventory_console.state import InventoryState, get_inventory

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/upload", tags=["upload"])


@router.post("", response_model=ImportResult)
async def upload_csv(
    file: UploadFile = File(...),
    state: InventoryState = Depends(get_inventory)
):
    """Import products from a CSV file. Row errors are reported, never raised."""
    if not file.filename or not file.filename.endswith('.csv'):
        raise HTTPException(status_code=400, detail="File must be a CSV file")

    # The read is the only suspension point; the commit below runs to completion.
    try:
        content = await file.read()
        text = CSVProcessor.decode(content)
    except (OSError, ImportReadError) as e:
        logger.warning("Could not read uploaded file %s: %s", file.filename, e)
        result = state.import_read_failed()
    else:
        result = state.import_csv(text)

    await manager.publish(state.notifications.take_unsent())
    return result


@router.get("/template")
async def download_template():
    """CSV template listing the importable columns with one sample row."""
    template = import_template()
    return Response(
        content=template.content,
        media_type=template.media_type,
        headers={"Content-Disposition": f'attachment; filename="{template.filename}"'}
    )
