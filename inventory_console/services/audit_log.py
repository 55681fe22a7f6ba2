import logging
import uuid
from datetime import date, datetime, time, timezone
from typing import Iterator, List, Optional, Sequence

from inventory_console.models.audit_log import AuditLog, AuditLogAction, MULTIPLE_PRODUCTS
from inventory_console.models.base import utcnow
from inventory_console.models.product import Product

logger = logging.getLogger(__name__)


class AuditLogStore:
    """Append-only ledger of product mutations, newest entry first."""

    def __init__(self):
        self._entries: List[AuditLog] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[AuditLog]:
        return iter(list(self._entries))

    @property
    def entries(self) -> List[AuditLog]:
        return list(self._entries)

    def append(
        self,
        action: AuditLogAction,
        product_id: str,
        product_name: str,
        details: str
    ) -> AuditLog:
        entry = AuditLog(
            id=f"log_{uuid.uuid4().hex}",
            timestamp=utcnow(),
            action=action,
            product_id=product_id,
            product_name=product_name,
            details=details,
        )
        self._entries.insert(0, entry)
        logger.debug("Audit %s for product %s: %s", action.value, product_id, details)
        return entry

    def record_create(self, product: Product) -> AuditLog:
        return self.append(
            AuditLogAction.CREATE,
            product.id,
            product.name,
            f'Product "{product.name}" was created.'
        )

    def record_update(self, product: Product, changes: Sequence[str]) -> AuditLog:
        details = ". ".join(changes) if changes else "Product saved with no changes."
        return self.append(AuditLogAction.UPDATE, product.id, product.name, details)

    def record_delete(self, product: Product) -> AuditLog:
        return self.append(
            AuditLogAction.DELETE,
            product.id,
            product.name,
            f'Product "{product.name}" (SKU: {product.sku}) was deleted.'
        )

    def record_bulk_delete(self, products: Sequence[Product]) -> AuditLog:
        names = ", ".join(f"{p.name} (SKU: {p.sku})" for p in products)
        return self.append(
            AuditLogAction.DELETE,
            MULTIPLE_PRODUCTS,
            f"{len(products)} products",
            f"Bulk deleted products: {names}."
        )

    def for_product(self, product_id: str) -> List[AuditLog]:
        return [entry for entry in self._entries if entry.product_id == product_id]

    def query(
        self,
        search: str = "",
        action: Optional[AuditLogAction] = None,
        start: Optional[date] = None,
        end: Optional[date] = None
    ) -> List[AuditLog]:
        """Filter entries by product name, action and an inclusive date range."""
        needle = search.lower()
        lower = datetime.combine(start, time.min, tzinfo=timezone.utc) if start else None
        # the end date covers the whole day
        upper = datetime.combine(end, time.max, tzinfo=timezone.utc) if end else None

        result = []
        for entry in self._entries:
            if needle and needle not in entry.product_name.lower():
                continue
            if action is not None and entry.action != action:
                continue
            if lower and entry.timestamp < lower:
                continue
            if upper and entry.timestamp > upper:
                continue
            result.append(entry)
        return result
