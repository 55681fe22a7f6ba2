"""Tests for the product store and the audit entries its mutations produce."""

import pytest

from inventory_console.exceptions import NotFoundError, ValidationError
from inventory_console.models.audit_log import AuditLogAction, MULTIPLE_PRODUCTS
from inventory_console.models.product import ProductStatus
from inventory_console.schemas.product import ProductDraft, ProductUpdate


def valid_draft(**overrides) -> ProductDraft:
    data = dict(name="Monitor", sku="MN-010", category="Electronics", price=179.0, stock=12)
    data.update(overrides)
    return ProductDraft(**data)


class TestCreate:
    def test_assigns_fresh_id_and_one_create_entry(self, store, state):
        existing_ids = {p.id for p in store}

        product = store.create(valid_draft())

        assert product.id not in existing_ids
        assert store.products[0] == product
        assert len(state.audit_log) == 1
        entry = state.audit_log.entries[0]
        assert entry.action == AuditLogAction.CREATE
        assert entry.product_id == product.id
        assert entry.details == 'Product "Monitor" was created.'

    def test_ids_are_unique_across_creates(self, store):
        ids = {store.create(valid_draft(sku=f"MN-{i}")).id for i in range(20)}
        assert len(ids) == 20

    def test_sets_timestamps_and_placeholder_image(self, store):
        product = store.create(valid_draft(image_url=None))

        assert product.date_added == product.last_updated
        assert product.image_url.startswith("https://picsum.photos/seed/")

    def test_missing_required_fields_leave_state_untouched(self, store, state, products):
        with pytest.raises(ValidationError) as exc_info:
            store.create(ProductDraft(name=" ", category="", price=0, stock=-1))

        assert set(exc_info.value.errors) == {"name", "sku", "category", "price", "stock"}
        assert store.products == products
        assert len(state.audit_log) == 0

    def test_rejects_category_missing_from_registry(self, store):
        with pytest.raises(ValidationError) as exc_info:
            store.create(valid_draft(category="Garden"))
        assert "category" in exc_info.value.errors

    def test_validates_contact_email_and_product_url(self, store):
        with pytest.raises(ValidationError) as exc_info:
            store.create(valid_draft(contact_email="not-an-email", product_url="http://bad host"))
        assert set(exc_info.value.errors) == {"contactEmail", "productUrl"}

    def test_accepts_product_url_without_scheme(self, store):
        product = store.create(valid_draft(product_url="shop.example.com/monitor"))
        assert product.product_url == "shop.example.com/monitor"

    @pytest.mark.parametrize("price", [float("nan"), float("inf"), float("-inf")])
    def test_rejects_non_finite_price(self, store, state, price):
        with pytest.raises(ValidationError) as exc_info:
            store.create(valid_draft(price=price))

        assert set(exc_info.value.errors) == {"price"}
        assert len(store) == 5
        assert len(state.audit_log) == 0


class TestUpdate:
    def test_refreshes_last_updated_and_keeps_identity(self, store):
        before = store.get("p1")

        after = store.update("p1", ProductUpdate(price=899.99))

        assert after.last_updated > before.last_updated
        assert after.id == before.id
        assert after.date_added == before.date_added
        assert store.get("p1").price == 899.99

    def test_repeated_updates_strictly_increase_last_updated(self, store):
        stamps = [store.update("p1", {"stock": n}).last_updated for n in range(5)]
        assert stamps == sorted(stamps)
        assert len(set(stamps)) == 5

    def test_audit_details_list_each_changed_field(self, store, state):
        store.update("p1", ProductUpdate(price=899.99, stock=3))

        entry = state.audit_log.entries[0]
        assert entry.action == AuditLogAction.UPDATE
        assert entry.details == (
            'price changed from "999.99" to "899.99". '
            'stock changed from "15" to "3"'
        )

    def test_audit_details_render_booleans_and_aliases(self, store, state):
        store.update("p2", {"isFeatured": True, "status": "Discontinued"})

        details = state.audit_log.entries[0].details
        assert 'status changed from "Active" to "Discontinued"' in details
        assert 'isFeatured changed from "false" to "true"' in details

    def test_no_changes_recorded_as_such(self, store, state):
        store.update("p1", ProductUpdate(name="Laptop"))
        assert state.audit_log.entries[0].details == "Product saved with no changes."

    def test_invalid_patch_changes_nothing(self, store, state):
        before = store.get("p1")

        with pytest.raises(ValidationError):
            store.update("p1", ProductUpdate(price=-1))

        assert store.get("p1") == before
        assert len(state.audit_log) == 0

    @pytest.mark.parametrize("price", [float("nan"), float("inf")])
    def test_rejects_non_finite_price(self, store, state, price):
        before = store.get("p1")

        with pytest.raises(ValidationError) as exc_info:
            store.update("p1", ProductUpdate(price=price))

        assert set(exc_info.value.errors) == {"price"}
        assert store.get("p1") == before
        assert len(state.audit_log) == 0

    def test_strips_name_sku_and_category(self, store, state):
        product = store.update(
            "p1", ProductUpdate(name="  Laptop  ", sku=" LP-001 ", category=" Electronics ")
        )

        assert (product.name, product.sku, product.category) == ("Laptop", "LP-001", "Electronics")
        assert state.audit_log.entries[0].details == "Product saved with no changes."

    def test_unknown_product(self, store):
        with pytest.raises(NotFoundError):
            store.update("missing", ProductUpdate(name="x"))

    def test_stored_status_is_not_rewritten_to_low_stock(self, store):
        product = store.update("p1", ProductUpdate(stock=2))
        assert product.status == ProductStatus.ACTIVE


class TestDelete:
    def test_delete_records_name_and_sku(self, store, state):
        store.delete("p1")

        assert store.get("p1") is None
        entry = state.audit_log.entries[0]
        assert entry.action == AuditLogAction.DELETE
        assert entry.details == 'Product "Laptop" (SKU: LP-001) was deleted.'

    def test_delete_unknown_product(self, store):
        with pytest.raises(NotFoundError):
            store.delete("missing")

    def test_delete_many_writes_exactly_one_entry(self, store, state):
        deleted, errors = store.delete_many(["p2", "p1", "p4"])

        assert len(deleted) == 3
        assert errors == []
        assert len(store) == 2
        assert len(state.audit_log) == 1
        entry = state.audit_log.entries[0]
        assert entry.product_id == MULTIPLE_PRODUCTS
        assert entry.product_name == "3 products"
        assert entry.details == (
            "Bulk deleted products: Laptop (SKU: LP-001), Mouse (SKU: MS-002), Chair (SKU: CH-004)."
        )

    def test_delete_many_reports_unknown_ids(self, store):
        deleted, errors = store.delete_many(["p1", "nope"])

        assert [p.id for p in deleted] == ["p1"]
        assert errors == [{"id": "nope", "error": "Product not found"}]


class TestDuplicate:
    def test_duplicate_resets_identity(self, store):
        draft = store.duplicate("p2")

        assert draft.name == "Mouse (Copy)"
        assert draft.sku == ""
        assert draft.price == 19.5
        assert draft.category == "Electronics"
        assert draft.date_added > store.get("p2").date_added

    def test_duplicate_is_created_through_create(self, store, state):
        draft = store.duplicate("p2")
        draft.sku = "MS-003"

        product = store.create(draft)

        assert product.id != "p2"
        assert product.name == "Mouse (Copy)"
        assert state.audit_log.entries[0].action == AuditLogAction.CREATE
