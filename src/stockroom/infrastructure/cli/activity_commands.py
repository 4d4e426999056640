"""CLI commands for the activity ledger: borrow, settle, list, export."""

from __future__ import annotations

from pathlib import Path

import click

from stockroom.application.actors import resolve_actor
from stockroom.application.dto import (
    ActivityFilter,
    BorrowRequest,
    SettlementRequest,
    ShortfallPolicy,
    TransactionResult,
)
from stockroom.application.export_activity import EXPORT_COLUMNS, ExportActivityHandler
from stockroom.application.show_activity import ShowActivityHandler
from stockroom.domain.exceptions import DomainException
from stockroom.domain.model.user import Role
from stockroom.domain.model.value_objects import ActivityAction
from stockroom.infrastructure.cli.context import AppContext, echo_warnings, pass_app
from stockroom.infrastructure.spreadsheet.xlsx_writer import write_rows

_FILTERS = {f.value: f for f in ActivityFilter}


def _report(result: TransactionResult) -> None:
    """Shared output for borrow / settle results."""
    if not result.ok:
        raise click.ClickException(result.error.message)

    for entry in result.entries:
        click.echo(
            f"Activity #{entry.activity_id}: {entry.action} {entry.qty} x "
            f"{entry.item_name} ({entry.user_name})"
        )
    item = result.item
    click.echo(
        f"{item.item_name}: {item.quantity_remaining} available, "
        f"{item.actual_stock} in stock"
    )
    echo_warnings(result.warnings)


@click.command("borrow")
@click.option("--user-id", required=True, type=int, help="Borrowing student's ID.")
@click.option("--item-id", required=True, type=int, help="Item to borrow.")
@click.option("--qty", required=True, type=int, help="Number of units.")
@click.option("--notes", default="", help="Optional note.")
@pass_app
def activity_borrow(app: AppContext, user_id: int, item_id: int, qty: int, notes: str) -> None:
    """Record a student borrowing an item."""
    stockroom = app.stockroom
    try:
        student = resolve_actor(stockroom.users, user_id, Role.STUDENT)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    result = stockroom.coordinator.record_borrow(
        BorrowRequest(
            user_id=student.user_id,
            user_name=student.user_name,
            user_specs=student.user_specs,
            item_id=item_id,
            qty=qty,
            notes=notes,
        )
    )
    _report(result)


@click.command("settle")
@click.option("--staff-id", required=True, type=int, help="Staff member recording the action.")
@click.option("--borrow-id", required=True, type=int, help="Activity ID of the original borrow.")
@click.option("--item-id", required=True, type=int, help="Item of the original borrow.")
@click.option(
    "--action",
    "action_name",
    required=True,
    type=click.Choice(["returned", "used", "lost"], case_sensitive=False),
    help="What happened to the units.",
)
@click.option("--qty", required=True, type=int, help="Number of units.")
@click.option("--notes", default="", help="Optional note.")
@click.option(
    "--mark-shortfall-lost",
    is_flag=True,
    default=False,
    help="On a return, record whatever is still outstanding as Lost.",
)
@pass_app
def activity_settle(
    app: AppContext,
    staff_id: int,
    borrow_id: int,
    item_id: int,
    action_name: str,
    qty: int,
    notes: str,
    mark_shortfall_lost: bool,
) -> None:
    """Confirm a return, or mark borrowed units used or lost."""
    stockroom = app.stockroom
    try:
        staff = resolve_actor(stockroom.users, staff_id, Role.STAFF)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    result = stockroom.coordinator.record_settlement(
        SettlementRequest(
            staff_id=staff.user_id,
            staff_name=staff.user_name,
            staff_specs=staff.user_specs,
            original_borrow_activity_id=borrow_id,
            item_id=item_id,
            action=ActivityAction.parse(action_name),
            qty=qty,
            notes=notes,
            shortfall_policy=(
                ShortfallPolicy.MARK_LOST if mark_shortfall_lost else ShortfallPolicy.KEEP_OPEN
            ),
        )
    )
    _report(result)


@click.command("list")
@click.option(
    "--filter",
    "filter_name",
    type=click.Choice(list(_FILTERS), case_sensitive=False),
    default=ActivityFilter.ALL.value,
    show_default=True,
    help="Which entries to show.",
)
@click.option("--newest-first", is_flag=True, default=False, help="Reverse chronological order.")
@pass_app
def activity_list(app: AppContext, filter_name: str, newest_first: bool) -> None:
    """Show the activity log."""
    handler = ShowActivityHandler(ledger=app.stockroom.ledger)
    rows = handler.handle(_FILTERS[filter_name.lower()], newest_first=newest_first)

    if not rows:
        click.echo("No activity records found.")
        return

    click.echo(
        f"{'ID':>5}  {'When':<17} {'Action':<9} {'Item':<20} {'Qty':>4}  {'User':<18} {'Status'}"
    )
    click.echo("-" * 95)
    for row in rows:
        if row.pending_quantity is not None:
            status = (
                f"{row.pending_quantity} of {row.qty} pending"
                if row.pending_quantity > 0
                else "settled"
            )
        else:
            status = f"for #{row.original_borrow_activity_id}"
        click.echo(
            f"{row.activity_id:>5}  {row.timestamp[:16].replace('T', ' '):<17} "
            f"{row.action:<9} {row.item_name:<20} {row.qty:>4}  {row.user_name:<18} {status}"
        )


@click.command("export")
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--filter",
    "filter_name",
    type=click.Choice([ActivityFilter.ALL.value, ActivityFilter.SETTLEMENTS.value], case_sensitive=False),
    default=ActivityFilter.SETTLEMENTS.value,
    show_default=True,
    help="Export staff actions only, or the full history.",
)
@pass_app
def activity_export(app: AppContext, file: Path, filter_name: str) -> None:
    """Export the activity log to an Excel file."""
    handler = ExportActivityHandler(ledger=app.stockroom.ledger)

    try:
        rows = handler.handle(_FILTERS[filter_name.lower()])
        write_rows(file, EXPORT_COLUMNS, rows)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Exported {len(rows)} entries to {file}")
