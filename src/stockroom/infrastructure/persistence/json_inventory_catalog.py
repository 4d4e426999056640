"""JSON-file-backed implementation of InventoryCatalog."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from stockroom.domain.exceptions import ItemNotFoundError, PersistenceError
from stockroom.domain.model.item import Item
from stockroom.domain.repository.inventory_catalog import InventoryCatalog
from stockroom.infrastructure.persistence.json_file import (
    lowercase_keys,
    read_records,
    write_records,
)
from stockroom.logging_config import get_logger

logger = get_logger("infrastructure.inventory_catalog")


class JsonInventoryCatalog(InventoryCatalog):
    """Keeps items in memory and writes the whole catalog on every change.

    Lookups hand out copies; only ``replace_all`` and
    ``apply_recalculated_state`` change stored items.
    """

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._items: dict[int, Item] = {}

    @classmethod
    def open(cls, file_path: Path) -> JsonInventoryCatalog:
        catalog = cls(file_path)
        catalog.load()
        return catalog

    # --- Lifecycle ------------------------------------------------------------

    def load(self) -> None:
        try:
            items = [self._to_domain(raw) for raw in read_records(self._file_path)]
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise PersistenceError(self._file_path, f"malformed item record ({exc})") from exc
        self._items = {item.item_id: item for item in items}
        logger.info(
            "catalog_loaded",
            extra={"path": str(self._file_path), "items": len(self._items)},
        )

    def save(self, record: Item | None = None) -> None:
        write_records(
            self._file_path,
            [self._to_raw(item) for item in self._items.values()],
            record=record,
        )

    # --- InventoryCatalog interface -------------------------------------------

    def get_by_id(self, item_id: int) -> Item | None:
        item = self._items.get(item_id)
        return replace(item) if item is not None else None

    def list_all(self) -> list[Item]:
        return [replace(item) for item in self._items.values()]

    def replace_all(self, items: list[Item]) -> None:
        self._items = {item.item_id: replace(item) for item in items}
        self.save()

    def apply_recalculated_state(
        self, item_id: int, actual_stock: int, quantity_remaining: int
    ) -> Item:
        item = self._items.get(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        item.apply_stock_levels(actual_stock, quantity_remaining)
        self.save(record=replace(item))
        return replace(item)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(item: Item) -> dict:
        return {
            "itemID": item.item_id,
            "itemName": item.item_name,
            "itemSpecs": item.item_specs,
            "category": item.category,
            "initialStock": item.initial_stock,
            "actualStock": item.actual_stock,
            "quantityRemaining": item.quantity_remaining,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Item:
        r = lowercase_keys(raw)
        initial = int(r.get("initialstock", r.get("stock", 0)) or 0)
        actual = r.get("actualstock")
        remaining = r.get("quantityremaining", r.get("qtyremaining"))
        return Item(
            item_id=int(r["itemid"]),
            item_name=str(r.get("itemname", "")),
            item_specs=str(r.get("itemspecs") or ""),
            category=str(r.get("category") or ""),
            initial_stock=initial,
            actual_stock=initial if actual is None else int(actual),
            quantity_remaining=initial if remaining is None else int(remaining),
        )
