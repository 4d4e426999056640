"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  Stores are loaded once
here and shared for the lifetime of the process.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockroom.application.transaction_coordinator import TransactionCoordinator
from stockroom.infrastructure.config import Settings
from stockroom.infrastructure.persistence.json_activity_ledger import JsonActivityLedger
from stockroom.infrastructure.persistence.json_inventory_catalog import (
    JsonInventoryCatalog,
)
from stockroom.infrastructure.persistence.json_user_directory import JsonUserDirectory


@dataclass
class Stockroom:
    settings: Settings
    ledger: JsonActivityLedger
    catalog: JsonInventoryCatalog
    users: JsonUserDirectory
    coordinator: TransactionCoordinator


def build(settings: Settings) -> Stockroom:
    ledger = JsonActivityLedger.open(settings.activity_path)
    catalog = JsonInventoryCatalog.open(settings.inventory_path)
    users = JsonUserDirectory.open(settings.users_path)
    return Stockroom(
        settings=settings,
        ledger=ledger,
        catalog=catalog,
        users=users,
        coordinator=TransactionCoordinator(ledger=ledger, catalog=catalog),
    )
