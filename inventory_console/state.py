"""
Application state: one explicitly owned object holding the product store,
category registry, audit log, table view state and notification queue.

Every mutator runs synchronously to completion, so the single request that
calls it is the only writer and no partial update is ever observable.
"""
import logging
from datetime import date
from typing import Iterable, List, Optional

from fastapi import Request

from inventory_console.config import Settings
from inventory_console.data.mock_data import mock_products
from inventory_console.exceptions import ConflictError, NothingToExportError, ValidationError
from inventory_console.models.audit_log import AuditLog, AuditLogAction
from inventory_console.models.product import Product, ProductStatus
from inventory_console.schemas.dashboard import DashboardStats
from inventory_console.schemas.import_result import ImportResult
from inventory_console.schemas.product import ProductDraft, ProductUpdate
from inventory_console.schemas.view import FilterUpdate
from inventory_console.services.audit_log import AuditLogStore
from inventory_console.services.category_registry import CategoryRegistry
from inventory_console.services.category_service import CategoryService
from inventory_console.services.csv_processor import EMPTY_FILE_MESSAGE, CSVProcessor
from inventory_console.services.dashboard import compute_stats
from inventory_console.services.export_service import ExportFile, export_products
from inventory_console.services.notification_service import NotificationQueue
from inventory_console.services.preferences import PreferenceStore, Preferences
from inventory_console.services.product_store import ProductStore
from inventory_console.services.view_pipeline import Page, SortConfig, ViewState, paginate

logger = logging.getLogger(__name__)


class InventoryState:
    def __init__(self, settings: Settings, products: Iterable[Product] = ()):
        products = list(products)
        self.settings = settings
        self.audit_log = AuditLogStore()
        self.categories = CategoryRegistry(p.category for p in products)
        self.products = ProductStore(
            self.audit_log,
            self.categories,
            settings.placeholder_image_url,
            products,
        )
        self.view = ViewState(settings.product_page_size, settings.low_stock_threshold)
        self.category_service = CategoryService(self.categories, self.products, self.view)
        self.importer = CSVProcessor(settings.default_category, settings.placeholder_image_url)
        self.notifications = NotificationQueue(settings.notification_duration_seconds)
        self.preferences = Preferences(
            PreferenceStore(settings.preferences_path),
            settings.prefers_dark_mode,
        )
        self.low_stock_alert_dismissed = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "InventoryState":
        products = mock_products() if settings.seed_mock_data else []
        logger.info("Initialised inventory with %d products", len(products))
        return cls(settings, products)

    # Products

    def create_product(self, draft: ProductDraft) -> Product:
        product = self.products.create(draft)
        self.notifications.success("Product added successfully!")
        return product

    def update_product(self, product_id: str, patch: ProductUpdate) -> Product:
        product = self.products.update(product_id, patch)
        self.notifications.success("Product updated successfully!")
        return product

    def delete_product(self, product_id: str) -> Product:
        product = self.products.delete(product_id)
        self.view.forget([product_id])
        self.notifications.success(f'Product "{product.name}" has been deleted.')
        return product

    def delete_products(self, product_ids: Optional[List[str]] = None):
        """Bulk delete the given ids, or the current selection when none are given."""
        ids = list(product_ids) if product_ids is not None else list(self.view.selected_product_ids)
        if not ids:
            raise ValidationError({"productIds": "No product IDs provided"})

        deleted, errors = self.products.delete_many(ids)
        self.view.selected_product_ids = []
        if deleted:
            self.notifications.success(f"{len(deleted)} products have been deleted.")
        return deleted, errors

    def duplicate_product(self, product_id: str) -> ProductDraft:
        return self.products.duplicate(product_id)

    def new_draft(self) -> ProductDraft:
        return self.products.new_draft()

    # Import

    def import_csv(self, text: str) -> ImportResult:
        result = self.importer.import_csv(text, self.products, self.categories)
        errors = len(result.errors)
        if errors == 1 and result.errors[0].message == EMPTY_FILE_MESSAGE:
            self.notifications.error("Import failed: CSV file is empty.")
        elif errors and result.success_count:
            self.notifications.warning(
                f"Import complete: {result.success_count} products added, {errors} errors."
            )
        elif errors:
            self.notifications.error(f"Import failed with {errors} errors.")
        else:
            self.notifications.success(f"{result.success_count} products imported successfully.")
        return result

    def import_read_failed(self) -> ImportResult:
        result = self.importer.read_failure()
        self.notifications.error("Import failed: could not read file.")
        return result

    # Categories

    def add_category(self, name: str) -> bool:
        if not self.category_service.add(name):
            self.notifications.warning(f'Category "{name.strip()}" already exists.')
            return False
        self.notifications.success(f'Category "{name.strip()}" added.')
        return True

    def rename_category(self, old: str, new: str) -> bool:
        if not self.category_service.rename(old, new):
            self.notifications.warning(f'Category "{new.strip()}" already exists.')
            return False
        self.notifications.success(f'Category "{old}" updated to "{new.strip()}".')
        return True

    def remove_category(self, name: str) -> None:
        try:
            self.category_service.remove(name)
        except ConflictError:
            self.notifications.error(f'Cannot delete "{name}" as it\'s in use.')
            raise
        self.notifications.success(f'Category "{name}" deleted.')

    # Table view

    def apply_filters(self, update: FilterUpdate) -> None:
        changes = update.model_dump(exclude_unset=True)
        if changes.get("search_term") is not None:
            self.view.set_search_term(changes["search_term"])
        if changes.get("status_filter") is not None:
            self.view.set_status_filter(changes["status_filter"])
        if changes.get("category_filter") is not None:
            self.view.set_category_filter(changes["category_filter"])

    def request_sort(self, key: str) -> SortConfig:
        return self.view.request_sort(key)

    def go_to_page(self, page: int) -> int:
        total_pages = self.product_page().total_pages
        return self.view.go_to_page(page, total_pages)

    def select(self, product_ids: Iterable[str]) -> List[str]:
        visible = [p.id for p in self.view.filtered(self.products)]
        return self.view.select(product_ids, visible)

    def visible_products(self) -> List[Product]:
        """The filtered and sorted products across every page."""
        return self.view.sorted(self.products)

    def product_page(self) -> Page[Product]:
        return self.view.paginated(self.products)

    # Export

    def export(self, export_format: str, scope: str) -> ExportFile:
        if scope == "filtered":
            subset = self.visible_products()
        elif scope == "selected":
            selected = set(self.view.selected_product_ids)
            subset = [p for p in self.products if p.id in selected]
        else:
            subset = self.products.products

        try:
            exported = export_products(subset, export_format)
        except NothingToExportError:
            self.notifications.warning("There is no data to export for the selected scope.")
            raise
        self.notifications.info(f"{export_format.upper()} export started.")
        return exported

    # Dashboard and history

    def dashboard(self) -> DashboardStats:
        return compute_stats(
            self.products,
            self.settings.low_stock_threshold,
            self.low_stock_alert_dismissed,
        )

    def dismiss_low_stock_alert(self) -> None:
        self.low_stock_alert_dismissed = True

    def show_low_stock(self) -> None:
        self.view.set_status_filter(ProductStatus.LOW_STOCK)

    def history(
        self,
        search: str = "",
        action: Optional[AuditLogAction] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        page: int = 1
    ) -> Page[AuditLog]:
        entries = self.audit_log.query(search, action, start, end)
        return paginate(entries, page, self.settings.audit_page_size)


def get_inventory(request: Request) -> InventoryState:
    """FastAPI dependency returning the state owned by the running app."""
    return request.app.state.inventory
