"""Tests for the Import Inventory use case."""

from stockroom.application.dto import BorrowRequest
from stockroom.application.import_inventory import ImportInventoryHandler
from stockroom.application.transaction_coordinator import TransactionCoordinator
from stockroom.domain.model.item import Item
from tests.fakes import FakeActivityLedger, FakeInventoryCatalog


class TestImportInventory:

    def _setup(self, items=None):
        catalog = FakeInventoryCatalog(items)
        ledger = FakeActivityLedger()
        return ImportInventoryHandler(catalog, ledger), catalog, ledger

    def test_imports_valid_rows(self):
        handler, catalog, _ = self._setup()
        report = handler.handle([
            {"ItemID": 1, "ItemName": "Multimeter", "ItemSpecs": "Fluke", "Category": "Meters", "Stock": 10},
            {"ItemID": 2, "ItemName": "Breadboard", "Stock": 4},
        ])

        assert report.imported_count == 2
        assert report.skipped_count == 0
        item = catalog.get_by_id(1)
        assert (item.initial_stock, item.actual_stock, item.quantity_remaining) == (10, 10, 10)
        assert item.category == "Meters"
        assert catalog.get_by_id(2).item_specs == ""

    def test_header_aliases_and_spelling(self):
        handler, catalog, _ = self._setup()
        report = handler.handle([{"Item ID": "7", "name": "Oscilloscope", "initial_stock": 2.0}])

        assert report.imported_count == 1
        assert catalog.get_by_id(7).initial_stock == 2

    def test_bad_rows_skipped_with_reasons(self):
        handler, catalog, _ = self._setup()
        report = handler.handle([
            {"ItemID": 1, "ItemName": "Multimeter", "Stock": 10},
            {"ItemID": None, "ItemName": "No id", "Stock": 1},
            {"ItemID": "abc", "ItemName": "Bad id", "Stock": 1},
            {"ItemID": 3, "ItemName": "  ", "Stock": 1},
            {"ItemID": 4, "ItemName": "No stock", "Stock": ""},
            {"ItemID": 5, "ItemName": "Negative", "Stock": -2},
            {"ItemID": 1, "ItemName": "Duplicate", "Stock": 3},
        ])

        assert report.imported_count == 1
        assert [(s.row_number, s.reason) for s in report.skipped] == [
            (3, "ItemID is missing"),
            (4, "ItemID must be a number"),
            (5, "ItemName is missing"),
            (6, "Stock is missing"),
            (7, "Stock must be a non-negative number"),
            (8, "Duplicate ItemID 1"),
        ]
        assert catalog.get_by_id(1).item_name == "Multimeter"

    def test_replaces_whole_catalog(self):
        old = Item.create(item_id=9, item_name="Old item", initial_stock=1)
        handler, catalog, _ = self._setup([old])
        handler.handle([{"ItemID": 1, "ItemName": "Multimeter", "Stock": 10}])

        assert catalog.get_by_id(9) is None
        assert [i.item_id for i in catalog.list_all()] == [1]

    def test_nothing_valid_keeps_existing_catalog(self):
        old = Item.create(item_id=9, item_name="Old item", initial_stock=1)
        handler, catalog, _ = self._setup([old])
        report = handler.handle([{"ItemID": "x", "ItemName": "Bad", "Stock": 1}])

        assert report.imported_count == 0
        assert catalog.get_by_id(9) is not None

    def test_existing_history_is_replayed(self):
        catalog = FakeInventoryCatalog([Item.create(item_id=1, item_name="Multimeter", initial_stock=10)])
        ledger = FakeActivityLedger()
        TransactionCoordinator(ledger, catalog).record_borrow(
            BorrowRequest(user_id=11, user_name="Ana", item_id=1, qty=3)
        )

        ImportInventoryHandler(catalog, ledger).handle(
            [{"ItemID": 1, "ItemName": "Multimeter", "Stock": 12}]
        )

        item = catalog.get_by_id(1)
        assert (item.initial_stock, item.actual_stock, item.quantity_remaining) == (12, 12, 9)

    def test_skips_are_logged(self, captured_logs):
        handler, _, _ = self._setup()
        handler.handle([{"ItemID": "x", "ItemName": "Bad", "Stock": 1}])

        logs = captured_logs()
        skipped = [r for r in logs if r["message"] == "inventory_row_skipped"]
        assert skipped[0]["row_number"] == 2
        summary = [r for r in logs if r["message"] == "inventory_imported"]
        assert summary[0]["skipped"] == 1
