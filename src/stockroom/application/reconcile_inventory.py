"""Application service: Reconcile Inventory use case.

Replays the full ledger for every catalog item and rewrites the derived
stock fields.  Repairs the catalog after a transaction whose write-back
step failed.
"""

from __future__ import annotations

from stockroom.application.dto import ItemDTO
from stockroom.domain.model.activity import ActivityEntry
from stockroom.domain.repository.activity_ledger import ActivityLedger
from stockroom.domain.repository.inventory_catalog import InventoryCatalog
from stockroom.domain.service.reconciliation import reconcile_item, report_anomalies
from stockroom.logging_config import get_logger

logger = get_logger("application.reconcile_inventory")


class ReconcileInventoryHandler:

    def __init__(self, catalog: InventoryCatalog, ledger: ActivityLedger) -> None:
        self._catalog = catalog
        self._ledger = ledger

    def handle(self) -> list[ItemDTO]:
        by_item: dict[int, list[ActivityEntry]] = {}
        for entry in self._ledger.list_all():
            by_item.setdefault(entry.item_id, []).append(entry)

        result: list[ItemDTO] = []
        changed = 0
        for item in sorted(self._catalog.list_all(), key=lambda i: i.item_id):
            levels = reconcile_item(item, by_item.get(item.item_id, []))
            report_anomalies(levels)
            if (levels.actual_stock, levels.quantity_remaining) != (
                item.actual_stock,
                item.quantity_remaining,
            ):
                changed += 1
                logger.info(
                    "item_reconciled",
                    extra={
                        "item_id": item.item_id,
                        "actual_stock": levels.actual_stock,
                        "quantity_remaining": levels.quantity_remaining,
                    },
                )
            item = self._catalog.apply_recalculated_state(
                item.item_id, levels.actual_stock, levels.quantity_remaining
            )
            result.append(ItemDTO.from_domain(item))

        logger.info("inventory_reconciled", extra={"items": len(result), "changed": changed})
        return result
