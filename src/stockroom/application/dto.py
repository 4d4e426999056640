"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from stockroom.domain.exceptions import DomainException
from stockroom.domain.model.activity import ActivityEntry
from stockroom.domain.model.borrow import BorrowBalance
from stockroom.domain.model.item import Item
from stockroom.domain.model.user import User
from stockroom.domain.model.value_objects import ActivityAction


class ShortfallPolicy(Enum):
    """What to do with the unreturned part of a borrow on a Returned settlement."""

    KEEP_OPEN = "KEEP_OPEN"  # staff settle the rest with separate calls
    MARK_LOST = "MARK_LOST"  # record the rest as Lost right away


class ActivityFilter(Enum):
    ALL = "all"
    SETTLEMENTS = "settlements"
    OPEN_BORROWS = "open"


# --- Inputs -------------------------------------------------------------------


@dataclass(frozen=True)
class BorrowRequest:
    """Input: a student taking *qty* units of an item."""

    user_id: int
    user_name: str
    item_id: int
    qty: int
    user_specs: str = ""
    notes: str = ""


@dataclass(frozen=True)
class SettlementRequest:
    """Input: staff settling part or all of an earlier borrow."""

    staff_id: int
    staff_name: str
    original_borrow_activity_id: int
    item_id: int
    action: ActivityAction | str
    qty: int
    staff_specs: str = ""
    notes: str = ""
    shortfall_policy: ShortfallPolicy = ShortfallPolicy.KEEP_OPEN


# --- Outputs ------------------------------------------------------------------


@dataclass(frozen=True)
class ItemDTO:
    item_id: int
    item_name: str
    item_specs: str
    category: str
    initial_stock: int
    actual_stock: int
    quantity_remaining: int

    @staticmethod
    def from_domain(item: Item) -> ItemDTO:
        return ItemDTO(
            item_id=item.item_id,
            item_name=item.item_name,
            item_specs=item.item_specs,
            category=item.category,
            initial_stock=item.initial_stock,
            actual_stock=item.actual_stock,
            quantity_remaining=item.quantity_remaining,
        )


@dataclass(frozen=True)
class ActivityDTO:
    activity_id: int
    timestamp: str  # ISO-8601, UTC
    action: str
    user_id: int
    user_name: str
    user_specs: str
    item_id: int
    item_name: str
    item_specs: str
    qty: int
    notes: str
    original_borrow_activity_id: int | None
    item_qty_remaining_after_this_action: int | None
    # Borrow rows only
    borrow_status: str | None = None
    pending_quantity: int | None = None

    @staticmethod
    def from_domain(
        entry: ActivityEntry, balance: BorrowBalance | None = None
    ) -> ActivityDTO:
        return ActivityDTO(
            activity_id=entry.activity_id,  # type: ignore[arg-type]
            timestamp=entry.timestamp.isoformat(),
            action=entry.action.value,
            user_id=entry.user_id,
            user_name=entry.user_name,
            user_specs=entry.user_specs,
            item_id=entry.item_id,
            item_name=entry.item_name,
            item_specs=entry.item_specs,
            qty=entry.qty,
            notes=entry.notes,
            original_borrow_activity_id=entry.original_borrow_activity_id,
            item_qty_remaining_after_this_action=entry.item_qty_remaining_after_this_action,
            borrow_status=balance.status.value if balance is not None else None,
            pending_quantity=balance.remaining if balance is not None else None,
        )


@dataclass(frozen=True)
class UserDTO:
    user_id: int
    user_name: str
    role: str
    user_specs: str

    @staticmethod
    def from_domain(user: User) -> UserDTO:
        # Passcodes never leave the application layer.
        return UserDTO(
            user_id=user.user_id,
            user_name=user.user_name,
            role=user.role.value,
            user_specs=user.user_specs,
        )


@dataclass(frozen=True)
class SkippedRow:
    row_number: int  # as shown in the spreadsheet (header is row 1)
    reason: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ImportReport:
    imported_count: int
    skipped: list[SkippedRow]

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


@dataclass(frozen=True)
class TransactionError:
    """Plain-language failure, plus whatever numbers help the caller retry."""

    code: str
    message: str
    field: str | None = None
    available: int | None = None
    remaining: int | None = None


@dataclass(frozen=True)
class TransactionResult:
    """Outcome of a borrow or settlement.

    ``ok`` is False only for rejected requests, which never touch the
    ledger.  A committed transaction whose follow-up steps failed is
    still ``ok`` and lists the problem in ``warnings``.
    """

    ok: bool
    entries: tuple[ActivityDTO, ...] = ()
    item: ItemDTO | None = None
    error: TransactionError | None = None
    warnings: tuple[str, ...] = ()

    @property
    def entry(self) -> ActivityDTO | None:
        return self.entries[0] if self.entries else None

    @staticmethod
    def success(
        entries: list[ActivityEntry],
        item: Item,
        warnings: list[str] | None = None,
    ) -> TransactionResult:
        return TransactionResult(
            ok=True,
            entries=tuple(ActivityDTO.from_domain(e) for e in entries),
            item=ItemDTO.from_domain(item),
            warnings=tuple(warnings or ()),
        )

    @staticmethod
    def failure(exc: DomainException) -> TransactionResult:
        return TransactionResult(
            ok=False,
            error=TransactionError(
                code=exc.code,
                message=str(exc),
                field=getattr(exc, "field", None),
                available=getattr(exc, "available", None),
                remaining=getattr(exc, "remaining", None),
            ),
        )
