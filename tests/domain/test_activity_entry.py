"""Unit tests for ActivityEntry factories and helpers."""

import dataclasses

import pytest

from stockroom.domain.exceptions import ValidationError
from stockroom.domain.model.activity import ActivityEntry
from stockroom.domain.model.item import Item
from stockroom.domain.model.value_objects import ActivityAction, Quantity


def _item():
    return Item.create(item_id=3, item_name="Arduino Uno", initial_stock=10, item_specs="R3")


class TestBorrowedFactory:

    def test_snapshots_item_identity(self):
        entry = ActivityEntry.borrowed(
            user_id=11, user_name="Ana", user_specs="10-B",
            item=_item(), qty=Quantity(2), notes=" lab 4 ",
        )
        assert entry.activity_id is None
        assert entry.action == ActivityAction.BORROWED
        assert (entry.item_id, entry.item_name, entry.item_specs) == (3, "Arduino Uno", "R3")
        assert entry.qty == 2
        assert entry.notes == "lab 4"
        assert entry.original_borrow_activity_id is None

    def test_timestamp_is_timezone_aware(self):
        entry = ActivityEntry.borrowed(11, "Ana", "", _item(), Quantity(1))
        assert entry.timestamp.tzinfo is not None


class TestSettlementFactory:

    def test_links_to_borrow(self):
        entry = ActivityEntry.settlement(
            action=ActivityAction.LOST, user_id=90, user_name="Mr. Reyes",
            user_specs="", item=_item(), original_borrow_activity_id=5, qty=Quantity(1),
        )
        assert entry.original_borrow_activity_id == 5
        assert entry.is_settlement
        assert entry.settles(5)
        assert not entry.settles(6)

    def test_borrowed_is_not_a_settlement_action(self):
        with pytest.raises(ValidationError, match="not a settlement"):
            ActivityEntry.settlement(
                action=ActivityAction.BORROWED, user_id=90, user_name="Mr. Reyes",
                user_specs="", item=_item(), original_borrow_activity_id=5, qty=Quantity(1),
            )


class TestImmutability:

    def test_entries_are_frozen(self):
        entry = ActivityEntry.borrowed(11, "Ana", "", _item(), Quantity(1))
        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.qty = 5  # type: ignore[misc]

    def test_with_id_returns_copy(self):
        entry = ActivityEntry.borrowed(11, "Ana", "", _item(), Quantity(1))
        stored = entry.with_id(4).with_remaining_snapshot(9)
        assert entry.activity_id is None
        assert stored.activity_id == 4
        assert stored.item_qty_remaining_after_this_action == 9
        assert stored.timestamp == entry.timestamp
