"""Application service: Import Inventory use case.

Replaces the whole catalog from spreadsheet rows.  Each row is validated
on its own; malformed rows are skipped with a reason and the valid ones
are committed.  Imported items start with derived fields equal to their
stock, then get reconciled against the existing activity ledger so that
history recorded before the import still counts.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from stockroom.application.columns import (
    INVENTORY_COLUMNS,
    ColumnResolver,
    is_blank,
    parse_whole_number,
)
from stockroom.application.dto import ImportReport, SkippedRow
from stockroom.domain.exceptions import ValidationError
from stockroom.domain.model.item import Item
from stockroom.domain.repository.activity_ledger import ActivityLedger
from stockroom.domain.repository.inventory_catalog import InventoryCatalog
from stockroom.domain.service.reconciliation import reconcile_item, report_anomalies
from stockroom.logging_config import get_logger

logger = get_logger("application.import_inventory")


class ImportInventoryHandler:

    def __init__(
        self,
        catalog: InventoryCatalog,
        ledger: ActivityLedger,
        resolver: ColumnResolver | None = None,
    ) -> None:
        self._catalog = catalog
        self._ledger = ledger
        self._resolver = resolver or ColumnResolver(INVENTORY_COLUMNS)

    def handle(self, rows: Sequence[Mapping[str, Any]]) -> ImportReport:
        items: list[Item] = []
        skipped: list[SkippedRow] = []
        seen_ids: set[int] = set()

        for index, row in enumerate(rows):
            row_number = index + 2  # row 1 is the header
            try:
                item = self._parse_row(row)
                if item.item_id in seen_ids:
                    raise ValidationError(f"Duplicate ItemID {item.item_id}", field="itemID")
            except ValidationError as exc:
                logger.warning(
                    "inventory_row_skipped",
                    extra={"row_number": row_number, "reason": str(exc)},
                )
                skipped.append(SkippedRow(row_number, str(exc), dict(row)))
                continue
            seen_ids.add(item.item_id)
            items.append(item)

        if items:
            self._catalog.replace_all(items)
            self._reconcile(items)

        logger.info(
            "inventory_imported",
            extra={"imported": len(items), "skipped": len(skipped)},
        )
        return ImportReport(imported_count=len(items), skipped=skipped)

    def _parse_row(self, row: Mapping[str, Any]) -> Item:
        fields = self._resolver.extract(row)

        raw_id = fields["ItemID"]
        if is_blank(raw_id):
            raise ValidationError("ItemID is missing", field="itemID")
        item_id = parse_whole_number(raw_id)
        if item_id is None:
            raise ValidationError("ItemID must be a number", field="itemID")

        if is_blank(fields["ItemName"]):
            raise ValidationError("ItemName is missing", field="itemName")

        raw_stock = fields["Stock"]
        if is_blank(raw_stock):
            raise ValidationError("Stock is missing", field="stock")
        stock = parse_whole_number(raw_stock)
        if stock is None or stock < 0:
            raise ValidationError("Stock must be a non-negative number", field="stock")

        return Item.create(
            item_id=item_id,
            item_name=str(fields["ItemName"]),
            initial_stock=stock,
            item_specs="" if is_blank(fields["ItemSpecs"]) else str(fields["ItemSpecs"]),
            category="" if is_blank(fields["Category"]) else str(fields["Category"]),
        )

    def _reconcile(self, items: list[Item]) -> None:
        entries = self._ledger.list_all()
        for item in items:
            history = [e for e in entries if e.item_id == item.item_id]
            if not history:
                continue
            levels = reconcile_item(item, history)
            report_anomalies(levels)
            self._catalog.apply_recalculated_state(
                item.item_id, levels.actual_stock, levels.quantity_remaining
            )
