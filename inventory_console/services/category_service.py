import logging

from inventory_console.exceptions import ConflictError, NotFoundError, ValidationError
from inventory_console.services.category_registry import CategoryRegistry
from inventory_console.services.product_store import ProductStore
from inventory_console.services.view_pipeline import ALL, ViewState

logger = logging.getLogger(__name__)


class CategoryService:
    """
    Category add/rename/remove, keeping the registry, the products and the
    active category filter consistent with one another.
    """

    def __init__(self, registry: CategoryRegistry, products: ProductStore, view: ViewState):
        self.registry = registry
        self.products = products
        self.view = view

    @staticmethod
    def _clean(name: str) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationError({"name": "Category name is required"})
        return cleaned

    def add(self, name: str) -> bool:
        """Insert a category. False (and no change) on a case-insensitive duplicate."""
        name = self._clean(name)
        if not self.registry.insert(name):
            logger.warning("Category %r already exists", name)
            return False
        logger.info("Added category %r", name)
        return True

    def rename(self, old: str, new: str) -> bool:
        """
        Rename `old` to `new` and re-point every product using it.
        False (and no change) when `new` collides with a different category.
        """
        new = self._clean(new)
        if old not in self.registry:
            raise NotFoundError(f"Category '{old}' not found")
        if self.registry.find(new, exclude=old) is not None:
            logger.warning("Cannot rename %r to %r: name already taken", old, new)
            return False

        self.registry.replace(old, new)
        moved = self.products.reassign_category(old, new)
        if self.view.category_filter == old:
            self.view.set_category_filter(new)
        logger.info("Renamed category %r to %r (%d products)", old, new, moved)
        return True

    def remove(self, name: str) -> None:
        """Delete an unused category. Raises ConflictError while products reference it."""
        if name not in self.registry:
            raise NotFoundError(f"Category '{name}' not found")
        if self.products.in_use(name):
            logger.warning("Refusing to delete category %r: still in use", name)
            raise ConflictError(
                f'Cannot delete category "{name}" because one or more products use it.'
            )

        self.registry.discard(name)
        if self.view.category_filter == name:
            self.view.set_category_filter(ALL)
        logger.info("Deleted category %r", name)
