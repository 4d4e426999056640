"""Abstract repository for the append-only activity ledger.

Defined in the domain layer so the domain never depends on
infrastructure.  Entries are never edited or removed once appended.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockroom.domain.model.activity import ActivityEntry


class ActivityLedger(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Return the ID the next appended entry will receive."""

    @abstractmethod
    def append(self, entry: ActivityEntry) -> ActivityEntry:
        """Assign the next ID, store and persist *entry*; return the stored copy."""

    @abstractmethod
    def list_all(self) -> list[ActivityEntry]:
        """Return every entry in append order (ID ascending)."""

    @abstractmethod
    def get_by_id(self, activity_id: int) -> ActivityEntry | None:
        """Return an entry by its ID, or None if not found."""

    def entries_for_item(self, item_id: int) -> list[ActivityEntry]:
        """Return the entries that reference *item_id*, order preserved."""
        return [entry for entry in self.list_all() if entry.item_id == item_id]

    def entries_settling(self, borrow_activity_id: int) -> list[ActivityEntry]:
        """Return the settlements that point at *borrow_activity_id*."""
        return [
            entry for entry in self.list_all()
            if entry.original_borrow_activity_id == borrow_activity_id
        ]
