"""Item aggregate — one stockroom article and its derived stock levels.

Static fields (name, specs, initial stock) come from catalog import.
``actual_stock`` and ``quantity_remaining`` are a cache of what the
activity ledger says; only reconciliation writes them.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockroom.domain.exceptions import ValidationError


@dataclass
class Item:
    """Aggregate root for a catalog item.

    Invariants:
    - ``0 <= actual_stock <= initial_stock``
    - ``0 <= quantity_remaining <= actual_stock``

    Use ``Item.create()`` for new items; ``__init__`` stays simple so the
    catalog can reconstitute persisted items without re-validating.
    """

    item_id: int
    item_name: str
    item_specs: str
    category: str
    initial_stock: int
    actual_stock: int
    quantity_remaining: int

    @staticmethod
    def create(
        item_id: int,
        item_name: str,
        initial_stock: int,
        item_specs: str = "",
        category: str = "",
        actual_stock: int | None = None,
        quantity_remaining: int | None = None,
    ) -> Item:
        """Create a new item, seeding derived fields from ``initial_stock``."""
        if isinstance(item_id, bool) or not isinstance(item_id, int):
            raise ValidationError("ItemID must be a number", field="itemID")
        if not item_name or not item_name.strip():
            raise ValidationError("ItemName is missing", field="itemName")
        if isinstance(initial_stock, bool) or not isinstance(initial_stock, int):
            raise ValidationError("Stock must be a whole number", field="stock")
        if initial_stock < 0:
            raise ValidationError("Stock must be a non-negative number", field="stock")

        actual = initial_stock if actual_stock is None else actual_stock
        remaining = initial_stock if quantity_remaining is None else quantity_remaining
        if not 0 <= actual <= initial_stock:
            raise ValidationError(
                f"Actual stock {actual} outside 0..{initial_stock}",
                field="actualStock",
            )
        if not 0 <= remaining <= actual:
            raise ValidationError(
                f"Quantity remaining {remaining} outside 0..{actual}",
                field="quantityRemaining",
            )

        return Item(
            item_id=item_id,
            item_name=item_name.strip(),
            item_specs=(item_specs or "").strip(),
            category=(category or "").strip(),
            initial_stock=initial_stock,
            actual_stock=actual,
            quantity_remaining=remaining,
        )

    @property
    def on_loan(self) -> int:
        """Units physically present but currently checked out."""
        return self.actual_stock - self.quantity_remaining

    def apply_stock_levels(self, actual_stock: int, quantity_remaining: int) -> None:
        """Overwrite the derived fields with reconciled values."""
        self.actual_stock = actual_stock
        self.quantity_remaining = quantity_remaining
