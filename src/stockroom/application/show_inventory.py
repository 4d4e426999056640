"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from stockroom.application.dto import ItemDTO
from stockroom.domain.repository.inventory_catalog import InventoryCatalog


class ShowInventoryHandler:

    def __init__(self, catalog: InventoryCatalog) -> None:
        self._catalog = catalog

    def handle(self, search: str | None = None) -> list[ItemDTO]:
        """List items ordered by ID, optionally filtered by a search term.

        The term matches name, specs or category, case-insensitively.
        """
        items = sorted(self._catalog.list_all(), key=lambda i: i.item_id)
        if search:
            needle = search.strip().lower()
            items = [
                item for item in items
                if needle in item.item_name.lower()
                or needle in item.item_specs.lower()
                or needle in item.category.lower()
            ]
        return [ItemDTO.from_domain(item) for item in items]
