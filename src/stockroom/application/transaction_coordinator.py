"""Application service: Transaction Coordinator.

The only write path into the activity ledger.  Every borrow or staff
settlement goes through the same sequence:

  1. validate the request against current derived state (no mutation);
  2. append the new ledger entry (the commit point);
  3. replay the item's full ledger history through reconciliation;
  4. write the reconciled stock levels back to the catalog.

Validation failures come back as ``TransactionResult.failure`` and never
mutate anything.  Once step 2 succeeds the transaction stands: storage
or write-back problems in steps 2–4 are reported as warnings on a
successful result, not rolled back.  Staff can repair the catalog later
with ``ReconcileInventoryHandler``.
"""

from __future__ import annotations

import threading

from stockroom.application.dto import (
    BorrowRequest,
    SettlementRequest,
    ShortfallPolicy,
    TransactionResult,
)
from stockroom.domain.exceptions import (
    BorrowNotFoundError,
    DomainException,
    InsufficientStockError,
    ItemNotFoundError,
    PersistenceError,
    ValidationError,
)
from stockroom.domain.model.activity import ActivityEntry
from stockroom.domain.model.borrow import BorrowBalance
from stockroom.domain.model.item import Item
from stockroom.domain.model.value_objects import ActivityAction, Quantity
from stockroom.domain.repository.activity_ledger import ActivityLedger
from stockroom.domain.repository.inventory_catalog import InventoryCatalog
from stockroom.domain.service.reconciliation import reconcile_item, report_anomalies
from stockroom.logging_config import LogContext, get_logger

logger = get_logger("application.transactions")

SHORTFALL_NOTE = "Shortfall on return"


class TransactionCoordinator:

    def __init__(
        self,
        ledger: ActivityLedger,
        catalog: InventoryCatalog,
        lock: threading.RLock | None = None,
    ) -> None:
        self._ledger = ledger
        self._catalog = catalog
        # One lock for all items: transactions run strictly one at a time.
        self._lock = lock or threading.RLock()

    # --- Public operations ----------------------------------------------------

    def record_borrow(self, request: BorrowRequest) -> TransactionResult:
        """Record a student borrowing ``request.qty`` units of an item."""
        with self._lock, LogContext.bind(actor_id=request.user_id):
            try:
                entries, item, warnings = self._borrow(request)
            except DomainException as exc:
                logger.warning(
                    "borrow_rejected",
                    extra={
                        "item_id": request.item_id,
                        "qty": request.qty,
                        "reason": exc.code,
                        "detail": str(exc),
                    },
                )
                return TransactionResult.failure(exc)
        return TransactionResult.success(entries, item, warnings)

    def record_settlement(self, request: SettlementRequest) -> TransactionResult:
        """Record staff returning, consuming or losing borrowed units."""
        with self._lock, LogContext.bind(actor_id=request.staff_id):
            try:
                entries, item, warnings = self._settle(request)
            except DomainException as exc:
                logger.warning(
                    "settlement_rejected",
                    extra={
                        "borrow_activity_id": request.original_borrow_activity_id,
                        "item_id": request.item_id,
                        "qty": request.qty,
                        "reason": exc.code,
                        "detail": str(exc),
                    },
                )
                return TransactionResult.failure(exc)
        return TransactionResult.success(entries, item, warnings)

    # --- Validation -----------------------------------------------------------

    def _borrow(self, request: BorrowRequest) -> tuple[list[ActivityEntry], Item, list[str]]:
        item = self._require_item(request.item_id)
        qty = Quantity(request.qty)

        if qty.value > item.quantity_remaining:
            raise InsufficientStockError(
                item_id=item.item_id,
                item_name=item.item_name,
                requested=qty.value,
                available=item.quantity_remaining,
            )

        entry = ActivityEntry.borrowed(
            user_id=request.user_id,
            user_name=request.user_name,
            user_specs=request.user_specs,
            item=item,
            qty=qty,
            notes=request.notes,
        )
        return self._commit(item, [entry])

    def _settle(
        self, request: SettlementRequest
    ) -> tuple[list[ActivityEntry], Item, list[str]]:
        action = request.action
        if not isinstance(action, ActivityAction):
            action = ActivityAction.parse(action)
        if not action.is_settlement:
            raise ValidationError(
                "Action must be Returned, Used or Lost", field="action"
            )
        qty = Quantity(request.qty)

        borrow = self._ledger.get_by_id(request.original_borrow_activity_id)
        if (
            borrow is None
            or borrow.action != ActivityAction.BORROWED
            or borrow.item_id != request.item_id
        ):
            raise BorrowNotFoundError(
                request.original_borrow_activity_id, request.item_id
            )
        item = self._require_item(request.item_id)

        # Returned + Used + Lost share one cap per borrow.
        balance = BorrowBalance.from_ledger(
            borrow, self._ledger.entries_settling(borrow.activity_id)
        )
        balance = balance.settle(qty.value)

        pending = [
            ActivityEntry.settlement(
                action=action,
                user_id=request.staff_id,
                user_name=request.staff_name,
                user_specs=request.staff_specs,
                item=item,
                original_borrow_activity_id=borrow.activity_id,
                qty=qty,
                notes=request.notes,
            )
        ]
        if (
            request.shortfall_policy == ShortfallPolicy.MARK_LOST
            and action == ActivityAction.RETURNED
            and balance.remaining > 0
        ):
            pending.append(
                ActivityEntry.settlement(
                    action=ActivityAction.LOST,
                    user_id=request.staff_id,
                    user_name=request.staff_name,
                    user_specs=request.staff_specs,
                    item=item,
                    original_borrow_activity_id=borrow.activity_id,
                    qty=Quantity(balance.remaining),
                    notes=SHORTFALL_NOTE,
                )
            )
        return self._commit(item, pending)

    def _require_item(self, item_id: int) -> Item:
        item = self._catalog.get_by_id(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        return item

    # --- Commit ---------------------------------------------------------------

    def _commit(
        self, item: Item, pending: list[ActivityEntry]
    ) -> tuple[list[ActivityEntry], Item, list[str]]:
        """Append *pending* entries, then reconcile and write back *item*.

        Nothing in here raises a domain error: past the first append the
        transaction is committed and problems become warnings.
        """
        warnings: list[str] = []
        stored: list[ActivityEntry] = []
        history = self._ledger.entries_for_item(item.item_id)

        for entry in pending:
            # Snapshot what the item will look like once this entry is in.
            snapshot = reconcile_item(item, [*history, entry])
            entry = entry.with_remaining_snapshot(snapshot.quantity_remaining)
            try:
                entry = self._ledger.append(entry)
            except PersistenceError as exc:
                logger.warning(
                    "ledger_not_persisted",
                    extra={"path": exc.path, "detail": exc.reason},
                )
                warnings.append(f"Activity recorded but not saved to disk: {exc.reason}")
                entry = exc.record
            history.append(entry)
            stored.append(entry)
            logger.info(
                "activity_recorded",
                extra={
                    "activity_id": entry.activity_id,
                    "action": entry.action.value,
                    "item_id": entry.item_id,
                    "qty": entry.qty,
                    "original_borrow_activity_id": entry.original_borrow_activity_id,
                },
            )

        levels = reconcile_item(item, self._ledger.entries_for_item(item.item_id))
        warnings.extend(report_anomalies(levels))

        try:
            item = self._catalog.apply_recalculated_state(
                item.item_id, levels.actual_stock, levels.quantity_remaining
            )
        except PersistenceError as exc:
            logger.warning(
                "catalog_not_persisted",
                extra={"path": exc.path, "detail": exc.reason},
            )
            warnings.append(f"Stock levels updated but not saved to disk: {exc.reason}")
            item = exc.record
        except DomainException as exc:
            logger.error(
                "stock_write_back_failed",
                extra={"item_id": item.item_id, "detail": str(exc)},
            )
            warnings.append(
                f"Activity recorded but stock levels were not updated ({exc}); "
                f"run an inventory reconcile"
            )

        return stored, item, warnings
