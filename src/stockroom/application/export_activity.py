"""Application service: Export Activity use case.

Flattens ledger entries into spreadsheet rows.  Writing the file is the
infrastructure layer's job; this only decides what goes in it.
"""

from __future__ import annotations

from typing import Any

from stockroom.application.dto import ActivityFilter
from stockroom.domain.exceptions import ValidationError
from stockroom.domain.model.activity import ActivityEntry
from stockroom.domain.repository.activity_ledger import ActivityLedger

EXPORT_COLUMNS = (
    "ActivityID",
    "Timestamp",
    "Action",
    "ItemID",
    "ItemName",
    "ItemSpecs",
    "Qty",
    "UserID",
    "UserName",
    "UserSpecs",
    "Notes",
    "ItemQtyRemainingAfterThisAction",
    "OriginalBorrowActivityID",
)


class ExportActivityHandler:

    def __init__(self, ledger: ActivityLedger) -> None:
        self._ledger = ledger

    def handle(
        self, activity_filter: ActivityFilter = ActivityFilter.SETTLEMENTS
    ) -> list[dict[str, Any]]:
        entries = self._ledger.list_all()
        if activity_filter == ActivityFilter.SETTLEMENTS:
            entries = [e for e in entries if e.is_settlement]
        elif activity_filter != ActivityFilter.ALL:
            raise ValidationError(
                f"Cannot export with filter '{activity_filter.value}'", field="filter"
            )

        if not entries:
            if activity_filter == ActivityFilter.SETTLEMENTS:
                raise ValidationError("No staff actions (Returned, Used, Lost) to export")
            raise ValidationError("No activity data to export")
        return [self._to_row(entry) for entry in entries]

    @staticmethod
    def _to_row(entry: ActivityEntry) -> dict[str, Any]:
        return {
            "ActivityID": entry.activity_id,
            "Timestamp": entry.timestamp.isoformat(),
            "Action": entry.action.value,
            "ItemID": entry.item_id,
            "ItemName": entry.item_name,
            "ItemSpecs": entry.item_specs,
            "Qty": entry.qty,
            "UserID": entry.user_id,
            "UserName": entry.user_name,
            "UserSpecs": entry.user_specs,
            "Notes": entry.notes,
            "ItemQtyRemainingAfterThisAction": entry.item_qty_remaining_after_this_action,
            "OriginalBorrowActivityID": entry.original_borrow_activity_id or "",
        }
