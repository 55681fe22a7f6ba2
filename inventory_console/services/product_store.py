import logging
import math
import re
import uuid
from datetime import datetime
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from pydantic import HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from inventory_console.exceptions import NotFoundError, ValidationError
from inventory_console.models.base import utcnow, utcnow_after
from inventory_console.models.product import AUDITED_FIELDS, Product, field_alias
from inventory_console.schemas.product import ProductDraft, ProductUpdate
from inventory_console.services.audit_log import AuditLogStore
from inventory_console.services.category_registry import CategoryRegistry

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
URL_SCHEME_PATTERN = re.compile(r"^https?://", re.IGNORECASE)

_http_url = TypeAdapter(HttpUrl)


def new_product_id() -> str:
    return f"prod_{uuid.uuid4().hex}"


def validate_product_fields(
    values: Dict,
    categories: CategoryRegistry,
    is_new: bool
) -> Dict[str, str]:
    """Check a complete set of product values. Returns field -> message."""
    errors: Dict[str, str] = {}

    if not (values.get("name") or "").strip():
        errors["name"] = "Product name is required"
    if is_new and not (values.get("sku") or "").strip():
        errors["sku"] = "SKU is required for new products"

    category = (values.get("category") or "").strip()
    if not category:
        errors["category"] = "Category is required"
    elif category not in categories:
        errors["category"] = f'Unknown category "{category}"'

    price = values.get("price")
    if price is None or not math.isfinite(price) or price <= 0:
        errors["price"] = "Price must be greater than 0"
    stock = values.get("stock")
    if stock is None or stock < 0:
        errors["stock"] = "Stock cannot be negative"

    email = values.get("contact_email") or ""
    if email and not EMAIL_PATTERN.match(email):
        errors["contactEmail"] = "Invalid email format"

    url = values.get("product_url") or ""
    if url:
        if not URL_SCHEME_PATTERN.match(url):
            url = "https://" + url
        try:
            _http_url.validate_python(url)
        except PydanticValidationError:
            errors["productUrl"] = "Invalid URL format"

    return errors


def format_audit_value(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def describe_changes(before: Product, after: Product) -> List[str]:
    changes = []
    for name in AUDITED_FIELDS:
        old = getattr(before, name)
        new = getattr(after, name)
        if old != new:
            changes.append(
                f'{field_alias(name)} changed from "{format_audit_value(old)}" '
                f'to "{format_audit_value(new)}"'
            )
    return changes


class ProductStore:
    """Owns the product collection. Every mutation appends an audit entry."""

    def __init__(
        self,
        audit_log: AuditLogStore,
        categories: CategoryRegistry,
        placeholder_image_url: str = "https://picsum.photos/seed/{seed}/400/400",
        products: Iterable[Product] = ()
    ):
        self.audit_log = audit_log
        self.categories = categories
        self.placeholder_image_url = placeholder_image_url
        self._products: List[Product] = list(products)

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(list(self._products))

    @property
    def products(self) -> List[Product]:
        return list(self._products)

    def get(self, product_id: str) -> Optional[Product]:
        for product in self._products:
            if product.id == product_id:
                return product
        return None

    def require(self, product_id: str) -> Product:
        product = self.get(product_id)
        if product is None:
            raise NotFoundError(f"Product '{product_id}' not found")
        return product

    def placeholder_image(self, seed: Optional[str] = None) -> str:
        return self.placeholder_image_url.format(seed=seed or uuid.uuid4().hex[:12])

    def new_draft(self) -> ProductDraft:
        """Blank draft with the defaults the product form starts from."""
        return ProductDraft(
            category=self.categories.first() or "",
            image_url=self.placeholder_image(),
            date_added=utcnow(),
        )

    def create(self, draft: ProductDraft) -> Product:
        values = draft.model_dump()
        errors = validate_product_fields(values, self.categories, is_new=True)
        if errors:
            logger.warning("Rejected new product %r: %s", draft.name, errors)
            raise ValidationError(errors)

        now = utcnow()
        product = Product(
            **{
                **values,
                "id": new_product_id(),
                "name": values["name"].strip(),
                "sku": values["sku"].strip(),
                "category": values["category"].strip(),
                "image_url": values.get("image_url") or self.placeholder_image(),
                "date_added": now,
                "last_updated": now,
            }
        )
        self._products.insert(0, product)
        self.audit_log.record_create(product)
        logger.info("Created product %s (%s)", product.id, product.sku)
        return product

    def update(self, product_id: str, patch: Union[ProductUpdate, Dict]) -> Product:
        existing = self.require(product_id)
        if isinstance(patch, ProductUpdate):
            changes = patch.model_dump(exclude_unset=True)
        else:
            changes = ProductUpdate(**patch).model_dump(exclude_unset=True)
        changes = {key: value for key, value in changes.items() if value is not None}
        for key in ("name", "sku", "category"):
            if key in changes:
                changes[key] = changes[key].strip()

        merged = {**existing.model_dump(), **changes}
        errors = validate_product_fields(merged, self.categories, is_new=False)
        if errors:
            logger.warning("Rejected update of product %s: %s", product_id, errors)
            raise ValidationError(errors)

        updated = existing.model_copy(
            update={**changes, "last_updated": utcnow_after(existing.last_updated)}
        )
        self._replace(updated)
        self.audit_log.record_update(updated, describe_changes(existing, updated))
        logger.info("Updated product %s (%d fields)", product_id, len(changes))
        return updated

    def delete(self, product_id: str) -> Product:
        product = self.require(product_id)
        self._products = [p for p in self._products if p.id != product_id]
        self.audit_log.record_delete(product)
        logger.info("Deleted product %s (%s)", product.id, product.sku)
        return product

    def delete_many(self, product_ids: Sequence[str]) -> Tuple[List[Product], List[Dict]]:
        """
        Remove every listed product in one pass.
        Returns (deleted_products, errors); one audit entry covers the batch.
        """
        wanted = set(product_ids)
        found = {p.id for p in self._products if p.id in wanted}
        errors = [
            {"id": product_id, "error": "Product not found"}
            for product_id in dict.fromkeys(product_ids)
            if product_id not in found
        ]

        deleted = [p for p in self._products if p.id in wanted]
        if deleted:
            self._products = [p for p in self._products if p.id not in wanted]
            self.audit_log.record_bulk_delete(deleted)
            logger.info("Bulk deleted %d products", len(deleted))
        return deleted, errors

    def duplicate(self, source: Union[Product, str]) -> ProductDraft:
        """Unsaved copy of a product with a fresh identity, to be passed to create()."""
        if isinstance(source, str):
            source = self.require(source)
        data = source.model_dump(exclude={"id", "last_updated"})
        data.update(name=f"{source.name} (Copy)", sku="", date_added=utcnow())
        return ProductDraft(**data)

    def add_imported(self, products: Sequence[Product]) -> None:
        """Prepend a batch of already validated products, one CREATE entry each."""
        if not products:
            return
        self._products = list(products) + self._products
        for product in products:
            self.audit_log.record_create(product)
        logger.info("Imported %d products", len(products))

    def in_use(self, category: str) -> bool:
        return any(p.category == category for p in self._products)

    def reassign_category(self, old: str, new: str) -> int:
        count = 0
        for index, product in enumerate(self._products):
            if product.category == old:
                self._products[index] = product.model_copy(update={"category": new})
                count += 1
        return count

    def _replace(self, product: Product) -> None:
        for index, existing in enumerate(self._products):
            if existing.id == product.id:
                self._products[index] = product
                return
        raise NotFoundError(f"Product '{product.id}' not found")
