"""Tests for the Reconcile Inventory use case."""

from stockroom.application.dto import BorrowRequest
from stockroom.application.reconcile_inventory import ReconcileInventoryHandler
from stockroom.application.transaction_coordinator import TransactionCoordinator
from stockroom.domain.model.item import Item
from tests.fakes import FakeActivityLedger, FakeInventoryCatalog


class TestReconcileInventory:

    def test_repairs_stale_catalog(self):
        catalog = FakeInventoryCatalog([Item.create(item_id=1, item_name="Multimeter", initial_stock=10)])
        ledger = FakeActivityLedger()
        catalog.fail_write_back = True
        result = TransactionCoordinator(ledger, catalog).record_borrow(
            BorrowRequest(user_id=11, user_name="Ana", item_id=1, qty=4)
        )
        assert result.warnings
        assert catalog.get_by_id(1).quantity_remaining == 10

        catalog.fail_write_back = False
        items = ReconcileInventoryHandler(catalog, ledger).handle()

        assert [(i.item_id, i.quantity_remaining) for i in items] == [(1, 6)]
        assert catalog.get_by_id(1).quantity_remaining == 6

    def test_items_without_history_reset_to_initial(self):
        catalog = FakeInventoryCatalog([
            Item.create(item_id=2, item_name="Breadboard", initial_stock=5,
                        actual_stock=3, quantity_remaining=1),
        ])
        items = ReconcileInventoryHandler(catalog, FakeActivityLedger()).handle()
        assert (items[0].actual_stock, items[0].quantity_remaining) == (5, 5)

    def test_logs_changed_items(self, captured_logs):
        catalog = FakeInventoryCatalog([
            Item.create(item_id=1, item_name="Multimeter", initial_stock=3),
            Item.create(item_id=2, item_name="Breadboard", initial_stock=5, quantity_remaining=4),
        ])
        ReconcileInventoryHandler(catalog, FakeActivityLedger()).handle()

        logs = captured_logs()
        assert [r["item_id"] for r in logs if r["message"] == "item_reconciled"] == [2]
        summary = [r for r in logs if r["message"] == "inventory_reconciled"][0]
        assert (summary["items"], summary["changed"]) == (2, 1)
