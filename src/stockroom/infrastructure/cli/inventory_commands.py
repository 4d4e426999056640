"""CLI commands for the inventory catalog."""

from __future__ import annotations

from pathlib import Path

import click

from stockroom.application.import_inventory import ImportInventoryHandler
from stockroom.application.reconcile_inventory import ReconcileInventoryHandler
from stockroom.application.show_inventory import ShowInventoryHandler
from stockroom.domain.exceptions import DomainException
from stockroom.infrastructure.cli.context import AppContext, pass_app
from stockroom.infrastructure.cli.report import echo_import_report
from stockroom.infrastructure.spreadsheet.xlsx_reader import read_rows


def _print_items(items) -> None:
    click.echo(
        f"{'ID':>5}  {'Item':<24} {'Specs':<16} {'Initial':>8} {'Actual':>7} {'Available':>10}"
    )
    click.echo("-" * 75)
    for item in items:
        click.echo(
            f"{item.item_id:>5}  {item.item_name:<24} {item.item_specs:<16} "
            f"{item.initial_stock:>8} {item.actual_stock:>7} {item.quantity_remaining:>10}"
        )


@click.command("list")
@click.option("--search", default=None, help="Filter by name, specs or category.")
@pass_app
def inventory_list(app: AppContext, search: str | None) -> None:
    """Show current stock levels."""
    handler = ShowInventoryHandler(catalog=app.stockroom.catalog)
    items = handler.handle(search=search)

    if not items:
        click.echo("No inventory records found.")
        return
    _print_items(items)


@click.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@pass_app
def inventory_import(app: AppContext, file: Path) -> None:
    """Replace the catalog from an Excel file (ItemID, ItemName, Stock, ...)."""
    handler = ImportInventoryHandler(
        catalog=app.stockroom.catalog,
        ledger=app.stockroom.ledger,
    )

    try:
        report = handler.handle(read_rows(file))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    echo_import_report(report, "inventory items")


@click.command("reconcile")
@pass_app
def inventory_reconcile(app: AppContext) -> None:
    """Recompute every item's stock from the full activity log."""
    handler = ReconcileInventoryHandler(
        catalog=app.stockroom.catalog,
        ledger=app.stockroom.ledger,
    )

    try:
        items = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Reconciled {len(items)} items.")
    if items:
        _print_items(items)
