from fastapi import HTTPException

from inventory_console.exceptions import (
    ConflictError,
    InventoryError,
    NotFoundError,
    ValidationError,
)


def http_error(error: InventoryError) -> HTTPException:
    """Turn a state-engine error into the structured response the client shows."""
    if isinstance(error, ValidationError):
        return HTTPException(
            status_code=422,
            detail={"message": error.message, "errors": error.errors}
        )
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=error.message)
    if isinstance(error, ConflictError):
        return HTTPException(status_code=409, detail=error.message)
    return HTTPException(status_code=400, detail=error.message)
