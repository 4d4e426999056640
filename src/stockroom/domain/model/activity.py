"""ActivityEntry — one immutable line of the activity ledger.

Item and user identity are snapshotted at transaction time so history
stays readable even if the catalog is re-imported later.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from stockroom.domain.exceptions import ValidationError
from stockroom.domain.model.item import Item
from stockroom.domain.model.value_objects import ActivityAction, Quantity


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ActivityEntry:
    """A single ledger record.

    ``activity_id`` is None until the ledger assigns one on append.
    ``original_borrow_activity_id`` is set on settlements only.
    """

    activity_id: int | None
    action: ActivityAction
    user_id: int
    user_name: str
    user_specs: str
    item_id: int
    item_name: str
    item_specs: str
    qty: int
    notes: str = ""
    original_borrow_activity_id: int | None = None
    item_qty_remaining_after_this_action: int | None = None
    timestamp: datetime = field(default_factory=_utcnow)

    # --- Factories (used for NEW entries only) --------------------------------

    @staticmethod
    def borrowed(
        user_id: int,
        user_name: str,
        user_specs: str,
        item: Item,
        qty: Quantity,
        notes: str = "",
    ) -> ActivityEntry:
        return ActivityEntry(
            activity_id=None,
            action=ActivityAction.BORROWED,
            user_id=user_id,
            user_name=str(user_name),
            user_specs=str(user_specs or ""),
            item_id=item.item_id,
            item_name=item.item_name,
            item_specs=item.item_specs,
            qty=qty.value,
            notes=(notes or "").strip(),
        )

    @staticmethod
    def settlement(
        action: ActivityAction,
        user_id: int,
        user_name: str,
        user_specs: str,
        item: Item,
        original_borrow_activity_id: int,
        qty: Quantity,
        notes: str = "",
    ) -> ActivityEntry:
        if not action.is_settlement:
            raise ValidationError(
                f"{action.value} is not a settlement action", field="action"
            )
        return ActivityEntry(
            activity_id=None,
            action=action,
            user_id=user_id,
            user_name=str(user_name),
            user_specs=str(user_specs or ""),
            item_id=item.item_id,
            item_name=item.item_name,
            item_specs=item.item_specs,
            qty=qty.value,
            notes=(notes or "").strip(),
            original_borrow_activity_id=original_borrow_activity_id,
        )

    # --- Copies ---------------------------------------------------------------

    def with_id(self, activity_id: int) -> ActivityEntry:
        return replace(self, activity_id=activity_id)

    def with_remaining_snapshot(self, quantity_remaining: int) -> ActivityEntry:
        return replace(self, item_qty_remaining_after_this_action=quantity_remaining)

    # --- Computed properties --------------------------------------------------

    @property
    def is_settlement(self) -> bool:
        return self.action.is_settlement

    def settles(self, borrow_activity_id: int) -> bool:
        return (
            self.is_settlement
            and self.original_borrow_activity_id == borrow_activity_id
        )
