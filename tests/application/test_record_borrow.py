"""Tests for TransactionCoordinator.record_borrow."""

import threading

from stockroom.application.dto import BorrowRequest
from stockroom.application.transaction_coordinator import TransactionCoordinator
from stockroom.domain.model.item import Item
from stockroom.domain.model.value_objects import ActivityAction
from tests.fakes import FakeActivityLedger, FakeInventoryCatalog


class TestRecordBorrow:

    def _setup(self, stock=10, remaining=None, **ledger_kwargs):
        item = Item.create(
            item_id=1, item_name="Multimeter", initial_stock=stock,
            item_specs="Fluke 117", quantity_remaining=remaining,
        )
        catalog = FakeInventoryCatalog([item])
        ledger = FakeActivityLedger(**ledger_kwargs)
        return TransactionCoordinator(ledger, catalog), ledger, catalog

    def _request(self, qty=3, item_id=1):
        return BorrowRequest(
            user_id=11, user_name="Ana", user_specs="10-B",
            item_id=item_id, qty=qty, notes="Lab 4",
        )

    # ── Happy path ───────────────────────────────────────────────────────

    def test_simple_borrow(self):
        coordinator, ledger, catalog = self._setup()
        result = coordinator.record_borrow(self._request(qty=3))

        assert result.ok
        assert result.entry.activity_id == 1
        assert result.entry.action == ActivityAction.BORROWED.value
        assert result.entry.qty == 3
        assert result.entry.item_specs == "Fluke 117"
        assert result.item.actual_stock == 10
        assert result.item.quantity_remaining == 7
        assert catalog.get_by_id(1).quantity_remaining == 7
        assert result.warnings == ()

    def test_snapshot_records_remaining_after_action(self):
        coordinator, ledger, _ = self._setup()
        coordinator.record_borrow(self._request(qty=3))
        coordinator.record_borrow(self._request(qty=2))

        snapshots = [e.item_qty_remaining_after_this_action for e in ledger.list_all()]
        assert snapshots == [7, 5]

    def test_borrow_everything_available(self):
        coordinator, _, _ = self._setup(stock=4)
        result = coordinator.record_borrow(self._request(qty=4))
        assert result.ok
        assert result.item.quantity_remaining == 0

    def test_ids_increase(self):
        coordinator, _, _ = self._setup()
        first = coordinator.record_borrow(self._request(qty=1))
        second = coordinator.record_borrow(self._request(qty=1))
        assert second.entry.activity_id == first.entry.activity_id + 1

    def test_logs_activity_recorded(self, captured_logs):
        coordinator, _, _ = self._setup()
        coordinator.record_borrow(self._request(qty=2))

        logs = captured_logs()
        recorded = [r for r in logs if r["message"] == "activity_recorded"]
        assert len(recorded) == 1
        assert recorded[0]["action"] == "Borrowed"
        assert recorded[0]["actor_id"] == "11"

    # ── Rejections ───────────────────────────────────────────────────────

    def test_insufficient_stock(self):
        coordinator, ledger, catalog = self._setup(stock=10, remaining=2)
        result = coordinator.record_borrow(self._request(qty=5))

        assert not result.ok
        assert result.error.code == "INSUFFICIENT_STOCK"
        assert result.error.available == 2
        assert "only 2 currently available" in result.error.message
        assert ledger.list_all() == []
        assert catalog.get_by_id(1).quantity_remaining == 2

    def test_zero_quantity_rejected(self):
        coordinator, ledger, _ = self._setup()
        result = coordinator.record_borrow(self._request(qty=0))

        assert not result.ok
        assert result.error.code == "VALIDATION_ERROR"
        assert result.error.field == "qty"
        assert ledger.list_all() == []

    def test_non_integer_quantity_rejected(self):
        coordinator, ledger, _ = self._setup()
        result = coordinator.record_borrow(self._request(qty=1.5))

        assert not result.ok
        assert result.error.field == "qty"
        assert ledger.list_all() == []

    def test_unknown_item(self):
        coordinator, ledger, _ = self._setup()
        result = coordinator.record_borrow(self._request(item_id=99))

        assert not result.ok
        assert result.error.code == "ITEM_NOT_FOUND"
        assert ledger.list_all() == []

    def test_rejection_is_logged(self, captured_logs):
        coordinator, _, _ = self._setup(remaining=0)
        coordinator.record_borrow(self._request(qty=1))

        rejected = [r for r in captured_logs() if r["message"] == "borrow_rejected"]
        assert rejected[0]["reason"] == "INSUFFICIENT_STOCK"

    # ── Post-commit failures ─────────────────────────────────────────────

    def test_unsaved_ledger_is_a_warning(self):
        coordinator, ledger, catalog = self._setup(fail_persist=True)
        result = coordinator.record_borrow(self._request(qty=3))

        assert result.ok
        assert result.entry.activity_id == 1
        assert any("not saved to disk" in w for w in result.warnings)
        assert catalog.get_by_id(1).quantity_remaining == 7

    def test_failed_write_back_is_a_warning(self):
        coordinator, ledger, catalog = self._setup()
        catalog.fail_write_back = True
        result = coordinator.record_borrow(self._request(qty=3))

        assert result.ok
        assert len(ledger.list_all()) == 1
        assert any("run an inventory reconcile" in w for w in result.warnings)
        assert catalog.get_by_id(1).quantity_remaining == 10


class TestSerialization:

    def test_concurrent_borrows_never_oversell(self):
        item = Item.create(item_id=1, item_name="Multimeter", initial_stock=5)
        catalog = FakeInventoryCatalog([item])
        ledger = FakeActivityLedger()
        coordinator = TransactionCoordinator(ledger, catalog)
        results = []

        def borrow():
            results.append(coordinator.record_borrow(
                BorrowRequest(user_id=11, user_name="Ana", item_id=1, qty=1)
            ))

        threads = [threading.Thread(target=borrow) for _ in range(12)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(1 for r in results if r.ok) == 5
        assert catalog.get_by_id(1).quantity_remaining == 0
        assert sorted(e.activity_id for e in ledger.list_all()) == [1, 2, 3, 4, 5]
