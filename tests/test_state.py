"""Tests for the application state: notifications, selection, export scopes and history."""

from datetime import timedelta

import pytest

from inventory_console.exceptions import ConflictError, NothingToExportError, ValidationError
from inventory_console.models.audit_log import AuditLogAction
from inventory_console.models.base import utcnow
from inventory_console.models.notification import NotificationType
from inventory_console.models.product import ProductStatus
from inventory_console.schemas.product import ProductDraft, ProductUpdate
from inventory_console.schemas.view import FilterUpdate
from inventory_console.services.view_pipeline import ALL
from inventory_console.state import InventoryState


def messages(state):
    return [(n.type, n.message) for n in state.notifications.take_unsent()]


class TestSeeding:
    def test_mock_data_seeds_products_and_categories(self, settings):
        state = InventoryState.from_settings(settings.model_copy(update={"seed_mock_data": True}))

        assert len(state.products) == 12
        assert set(p.category for p in state.products) == set(state.categories)
        assert len(state.audit_log) == 0

    def test_empty_state(self, settings):
        state = InventoryState.from_settings(settings)
        assert len(state.products) == 0
        assert len(state.categories) == 0


class TestProductNotifications:
    def test_create(self, state):
        state.create_product(
            ProductDraft(name="Lamp", sku="LM-1", category="Furniture", price=20, stock=4)
        )
        assert messages(state) == [(NotificationType.SUCCESS, "Product added successfully!")]

    def test_failed_create_posts_nothing(self, state):
        with pytest.raises(ValidationError):
            state.create_product(ProductDraft())
        assert messages(state) == []

    def test_update(self, state):
        state.update_product("p1", ProductUpdate(stock=1))
        assert messages(state) == [(NotificationType.SUCCESS, "Product updated successfully!")]

    def test_delete_drops_product_from_selection(self, state):
        state.select(["p1", "p2"])

        state.delete_product("p1")

        assert state.view.selected_product_ids == ["p2"]
        assert messages(state) == [(NotificationType.SUCCESS, 'Product "Laptop" has been deleted.')]


class TestBulkDelete:
    def test_deletes_current_selection(self, state):
        state.select(["p1", "p2"])

        deleted, errors = state.delete_products()

        assert [p.id for p in deleted] == ["p1", "p2"]
        assert errors == []
        assert state.view.selected_product_ids == []
        assert len(state.audit_log) == 1
        assert messages(state) == [(NotificationType.SUCCESS, "2 products have been deleted.")]

    def test_empty_selection(self, state):
        with pytest.raises(ValidationError):
            state.delete_products()
        assert len(state.audit_log) == 0


class TestSelection:
    def test_selection_limited_to_filtered_rows(self, state):
        state.apply_filters(FilterUpdate(category_filter="Furniture"))

        assert state.select(["p1", "p3", "p4"]) == ["p3", "p4"]

    def test_selection_spans_pages(self, state):
        state.view.page_size = 2
        assert state.select(["p1", "p5"]) == ["p1", "p5"]

    def test_filter_change_clears_selection(self, state):
        state.select(["p1"])
        state.apply_filters(FilterUpdate(search_term="desk"))
        assert state.view.selected_product_ids == []

    def test_show_low_stock(self, state):
        state.show_low_stock()
        assert [p.name for p in state.visible_products()] == ["Chair", "Mouse"]


class TestPagination:
    def test_go_to_page_is_clamped(self, state):
        state.view.page_size = 2
        assert state.go_to_page(10) == 3
        assert state.go_to_page(0) == 1

    def test_page_follows_shrinking_results(self, state):
        state.view.page_size = 2
        state.go_to_page(3)
        state.products.delete("p5")

        page = state.product_page()

        assert page.page == 2
        assert page.total_pages == 2


class TestImportNotifications:
    HEADER = "name,sku,price,stock,category"

    def test_success(self, state):
        state.import_csv(f"{self.HEADER}\nLamp,LM-1,5,1,Furniture")
        assert messages(state) == [(NotificationType.SUCCESS, "1 products imported successfully.")]

    def test_partial(self, state):
        state.import_csv(f"{self.HEADER}\nLamp,LM-1,5,1,Furniture\nRug,,5,1,Furniture")
        assert messages(state) == [
            (NotificationType.WARNING, "Import complete: 1 products added, 1 errors.")
        ]

    def test_all_rows_rejected(self, state):
        state.import_csv(f"{self.HEADER}\nLamp,LM-1,0,1,Furniture")
        assert messages(state) == [(NotificationType.ERROR, "Import failed with 1 errors.")]

    def test_empty_file(self, state):
        state.import_csv(self.HEADER)
        assert messages(state) == [(NotificationType.ERROR, "Import failed: CSV file is empty.")]

    def test_read_failure(self, state):
        result = state.import_read_failed()

        assert result.errors[0].row == 0
        assert messages(state)[0][0] == NotificationType.ERROR


class TestCategoryNotifications:
    def test_duplicate_add_warns(self, state):
        assert not state.add_category("FURNITURE")
        assert messages(state) == [(NotificationType.WARNING, 'Category "FURNITURE" already exists.')]

    def test_rename(self, state):
        assert state.rename_category("Furniture", "Office")
        assert messages(state) == [
            (NotificationType.SUCCESS, 'Category "Furniture" updated to "Office".')
        ]

    def test_remove_in_use(self, state):
        with pytest.raises(ConflictError):
            state.remove_category("Stationery")
        assert messages(state) == [
            (NotificationType.ERROR, 'Cannot delete "Stationery" as it\'s in use.')
        ]

    def test_remove_resets_filter(self, state):
        state.add_category("Garden")
        state.apply_filters(FilterUpdate(category_filter="Garden"))

        state.remove_category("Garden")

        assert state.view.category_filter == ALL


class TestExport:
    def test_all_scope(self, state):
        exported = state.export("json", "all")

        assert exported.filename == "products_export.json"
        assert messages(state) == [(NotificationType.INFO, "JSON export started.")]

    def test_filtered_scope_spans_every_page_in_sort_order(self, state):
        state.view.page_size = 1
        state.apply_filters(FilterUpdate(status_filter=ProductStatus.LOW_STOCK))
        state.request_sort("stock")

        content = state.export("csv", "filtered").content.decode("utf-8")

        rows = content.strip().split("\n")[1:]
        assert [row.split(",")[0] for row in rows] == ['"p2"', '"p4"']

    def test_selected_scope(self, state):
        state.select(["p5", "p3"])

        content = state.export("csv", "selected").content.decode("utf-8")

        rows = content.strip().split("\n")[1:]
        assert [row.split(",")[0] for row in rows] == ['"p3"', '"p5"']

    def test_empty_scope_warns(self, state):
        with pytest.raises(NothingToExportError):
            state.export("pdf", "selected")
        assert messages(state) == [
            (NotificationType.WARNING, "There is no data to export for the selected scope.")
        ]


class TestDashboard:
    def test_stats(self, state):
        stats = state.dashboard()

        assert stats.total_products == 5
        assert stats.total_stock_value == 16432.35
        assert stats.low_stock_items == 2
        assert stats.active_items == 4
        assert [(c.name, c.products) for c in stats.categories] == [
            ("Electronics", 2), ("Furniture", 2), ("Stationery", 1)
        ]
        assert stats.low_stock_alert_visible

    def test_dismissed_alert_stays_hidden(self, state):
        state.dismiss_low_stock_alert()
        assert not state.dashboard().low_stock_alert_visible


class TestHistory:
    def test_newest_first(self, state):
        state.update_product("p1", ProductUpdate(stock=1))
        state.delete_product("p2")

        page = state.history()

        assert [e.action for e in page.items] == [AuditLogAction.DELETE, AuditLogAction.UPDATE]

    def test_search_and_action_filters(self, state):
        state.update_product("p1", ProductUpdate(stock=1))
        state.update_product("p2", ProductUpdate(stock=1))
        state.delete_product("p4")

        assert [e.product_name for e in state.history(search="lap").items] == ["Laptop"]
        assert [e.product_name for e in state.history(action=AuditLogAction.DELETE).items] == ["Chair"]

    def test_date_range_is_inclusive_of_end_day(self, state):
        state.update_product("p1", ProductUpdate(stock=1))
        today = utcnow().date()

        assert len(state.history(start=today, end=today).items) == 1
        assert state.history(end=today - timedelta(days=1)).items == []
        assert state.history(start=today + timedelta(days=1)).items == []

    def test_paginated_by_fifteen(self, state):
        for stock in range(20):
            state.update_product("p5", ProductUpdate(stock=stock + 1))

        first = state.history()
        second = state.history(page=2)

        assert len(first.items) == 15
        assert len(second.items) == 5
        assert first.total_pages == 2

