"""BorrowBalance — the settlement state machine of a single borrow.

A ``Borrowed`` entry is settled by any mix of Returned / Used / Lost
entries. All three share one running total: a unit can only be settled
once, whatever its disposition.

    OPEN ──settle──> PARTIALLY_SETTLED ──settle──> FULLY_SETTLED
      └────────────────settle all──────────────────────┘
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from stockroom.domain.exceptions import OverSettlementError, ValidationError
from stockroom.domain.model.activity import ActivityEntry
from stockroom.domain.model.value_objects import ActivityAction


class BorrowStatus(Enum):
    OPEN = "OPEN"
    PARTIALLY_SETTLED = "PARTIALLY_SETTLED"
    FULLY_SETTLED = "FULLY_SETTLED"


@dataclass(frozen=True)
class BorrowBalance:
    """A borrow entry plus how much of it has been settled so far."""

    borrow: ActivityEntry
    settled_quantity: int = 0

    def __post_init__(self) -> None:
        if self.borrow.action != ActivityAction.BORROWED:
            raise ValidationError(
                f"Activity #{self.borrow.activity_id} is a "
                f"{self.borrow.action.value} entry, not a borrow"
            )

    @staticmethod
    def from_ledger(borrow: ActivityEntry, entries: Iterable[ActivityEntry]) -> BorrowBalance:
        """Sum every settlement in *entries* that points at *borrow*."""
        settled = sum(
            entry.qty for entry in entries if entry.settles(borrow.activity_id)
        )
        return BorrowBalance(borrow=borrow, settled_quantity=settled)

    @property
    def borrowed_quantity(self) -> int:
        return self.borrow.qty

    @property
    def remaining(self) -> int:
        return self.borrowed_quantity - self.settled_quantity

    @property
    def status(self) -> BorrowStatus:
        if self.remaining <= 0:
            return BorrowStatus.FULLY_SETTLED
        if self.settled_quantity > 0:
            return BorrowStatus.PARTIALLY_SETTLED
        return BorrowStatus.OPEN

    def check_settlement(self, qty: int) -> None:
        """Raise OverSettlementError unless *qty* more units may be settled."""
        if qty > self.remaining:
            raise OverSettlementError(
                borrow_activity_id=self.borrow.activity_id,
                requested=qty,
                remaining=max(self.remaining, 0),
            )

    def settle(self, qty: int) -> BorrowBalance:
        """Return the balance after settling *qty* units."""
        self.check_settlement(qty)
        return BorrowBalance(
            borrow=self.borrow, settled_quantity=self.settled_quantity + qty
        )
