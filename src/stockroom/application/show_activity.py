"""Application service: Show Activity use case (query).

Borrow rows are annotated with their settlement status so staff can see
what is still pending ("2 of 5 pending action").
"""

from __future__ import annotations

from stockroom.application.dto import ActivityDTO, ActivityFilter
from stockroom.domain.model.activity import ActivityEntry
from stockroom.domain.model.borrow import BorrowBalance, BorrowStatus
from stockroom.domain.model.value_objects import ActivityAction
from stockroom.domain.repository.activity_ledger import ActivityLedger


class ShowActivityHandler:

    def __init__(self, ledger: ActivityLedger) -> None:
        self._ledger = ledger

    def handle(
        self,
        activity_filter: ActivityFilter = ActivityFilter.ALL,
        newest_first: bool = False,
    ) -> list[ActivityDTO]:
        entries = self._ledger.list_all()

        settled: dict[int, int] = {}
        for entry in entries:
            if entry.is_settlement and entry.original_borrow_activity_id is not None:
                key = entry.original_borrow_activity_id
                settled[key] = settled.get(key, 0) + entry.qty

        rows: list[ActivityDTO] = []
        for entry in entries:
            balance = self._balance(entry, settled)
            if not self._matches(entry, balance, activity_filter):
                continue
            rows.append(ActivityDTO.from_domain(entry, balance))

        if newest_first:
            rows.reverse()
        return rows

    @staticmethod
    def _balance(entry: ActivityEntry, settled: dict[int, int]) -> BorrowBalance | None:
        if entry.action != ActivityAction.BORROWED:
            return None
        return BorrowBalance(
            borrow=entry, settled_quantity=settled.get(entry.activity_id, 0)
        )

    @staticmethod
    def _matches(
        entry: ActivityEntry,
        balance: BorrowBalance | None,
        activity_filter: ActivityFilter,
    ) -> bool:
        if activity_filter == ActivityFilter.SETTLEMENTS:
            return entry.is_settlement
        if activity_filter == ActivityFilter.OPEN_BORROWS:
            return balance is not None and balance.status != BorrowStatus.FULLY_SETTLED
        return True
