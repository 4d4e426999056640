"""Abstract repository for the Item aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockroom.domain.model.item import Item


class InventoryCatalog(ABC):

    @abstractmethod
    def get_by_id(self, item_id: int) -> Item | None:
        """Return an item by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Item]:
        """Return every item in the catalog."""

    @abstractmethod
    def replace_all(self, items: list[Item]) -> None:
        """Replace the whole catalog with *items* (catalog import)."""

    @abstractmethod
    def apply_recalculated_state(
        self, item_id: int, actual_stock: int, quantity_remaining: int
    ) -> Item:
        """Overwrite the derived stock fields of one item and persist.

        Raises ItemNotFoundError if the item does not exist.
        """
