"""Domain service: Stock Reconciliation.

Derives an item's stock levels from its initial stock and the complete
set of ledger entries that reference it.  The ledger is authoritative;
``Item.actual_stock`` and ``Item.quantity_remaining`` are a materialized
view of it, recomputed from scratch after every transaction.

    actual_stock       = max(0, initial_stock - used - lost)
    quantity_remaining = clamp(actual_stock - (borrowed - returned), 0, actual_stock)

Out-of-range raw values are clamped rather than rejected, and each clamp
is reported as a DataQualityWarning; callers log them via
``report_anomalies`` once the final levels are known.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from stockroom.domain.model.activity import ActivityEntry
from stockroom.domain.model.item import Item
from stockroom.domain.model.value_objects import ActivityAction
from stockroom.logging_config import get_logger

logger = get_logger("domain.reconciliation")


@dataclass(frozen=True)
class DataQualityWarning:
    """Non-fatal note that a derived value needed clamping."""

    code: str
    message: str
    item_id: int | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class StockLevels:
    actual_stock: int
    quantity_remaining: int
    anomalies: tuple[DataQualityWarning, ...] = ()


def reconcile(
    initial_stock: int,
    entries: Iterable[ActivityEntry],
    item_id: int | None = None,
) -> StockLevels:
    """Recompute stock levels for one item.

    When *item_id* is given, entries for other items are ignored;
    otherwise every entry is assumed to belong to the item.
    """
    totals = {action: 0 for action in ActivityAction}
    for entry in entries:
        if item_id is not None and entry.item_id != item_id:
            continue
        totals[entry.action] += abs(entry.qty)

    anomalies: list[DataQualityWarning] = []

    total_used_or_lost = totals[ActivityAction.USED] + totals[ActivityAction.LOST]
    actual_stock = initial_stock - total_used_or_lost
    if actual_stock < 0:
        anomalies.append(
            DataQualityWarning(
                code="ACTUAL_STOCK_BELOW_ZERO",
                message=(
                    f"Used/lost total {total_used_or_lost} exceeds initial "
                    f"stock {initial_stock}; actual stock clamped to 0"
                ),
                item_id=item_id,
            )
        )
        actual_stock = 0

    net_borrowed = totals[ActivityAction.BORROWED] - totals[ActivityAction.RETURNED]
    quantity_remaining = actual_stock - net_borrowed
    if quantity_remaining < 0:
        anomalies.append(
            DataQualityWarning(
                code="REMAINING_BELOW_ZERO",
                message=(
                    f"{net_borrowed} units on loan against actual stock "
                    f"{actual_stock}; quantity remaining clamped to 0"
                ),
                item_id=item_id,
            )
        )
        quantity_remaining = 0
    elif quantity_remaining > actual_stock:
        anomalies.append(
            DataQualityWarning(
                code="REMAINING_ABOVE_ACTUAL",
                message=(
                    f"Returned total exceeds borrowed total by {-net_borrowed}; "
                    f"quantity remaining clamped to actual stock {actual_stock}"
                ),
                item_id=item_id,
            )
        )
        quantity_remaining = actual_stock

    return StockLevels(
        actual_stock=actual_stock,
        quantity_remaining=quantity_remaining,
        anomalies=tuple(anomalies),
    )


def reconcile_item(item: Item, entries: Iterable[ActivityEntry]) -> StockLevels:
    """Reconcile *item* against the entries that reference it."""
    return reconcile(item.initial_stock, entries, item_id=item.item_id)


def report_anomalies(levels: StockLevels) -> list[str]:
    """Log each clamp as a data-quality warning and return the messages."""
    for anomaly in levels.anomalies:
        logger.warning(
            "stock_clamped",
            extra={
                "item_id": anomaly.item_id,
                "anomaly": anomaly.code,
                "detail": anomaly.message,
            },
        )
    return [anomaly.message for anomaly in levels.anomalies]
