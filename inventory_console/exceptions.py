from typing import Dict, Optional


class InventoryError(Exception):
    """Base class for errors raised by the inventory state engine."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(InventoryError):
    """A draft or patch failed field validation. Nothing was mutated."""

    def __init__(self, errors: Dict[str, str], message: Optional[str] = None):
        super().__init__(message or "Validation failed: " + ", ".join(sorted(errors)))
        self.errors = dict(errors)


class NotFoundError(InventoryError):
    pass


class ConflictError(InventoryError):
    """Duplicate category name, or a category that is still in use."""


class ImportReadError(InventoryError):
    """The uploaded file could not be read or decoded."""


class ImportRowError(InventoryError):
    """A single CSV row was rejected. Collected, never fatal to the batch."""

    def __init__(self, row: int, message: str):
        super().__init__(message)
        self.row = row


class NothingToExportError(InventoryError):
    pass
