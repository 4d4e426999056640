"""CLI commands for users and login."""

from __future__ import annotations

from pathlib import Path

import click

from stockroom.application.import_users import ImportUsersHandler
from stockroom.application.login import LoginHandler
from stockroom.domain.exceptions import DomainException
from stockroom.infrastructure.cli.context import AppContext, pass_app
from stockroom.infrastructure.cli.report import echo_import_report
from stockroom.infrastructure.spreadsheet.xlsx_reader import read_rows


@click.command("login")
@click.option("--passcode", prompt=True, hide_input=True, help="Student or staff passcode.")
@pass_app
def login(app: AppContext, passcode: str) -> None:
    """Check a passcode and show who it belongs to."""
    handler = LoginHandler(users=app.stockroom.users)

    try:
        user = handler.handle(passcode)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    specs = f" ({user.user_specs})" if user.user_specs else ""
    click.echo(f"Logged in as {user.user_name}{specs}, {user.role} #{user.user_id}")


@click.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@pass_app
def users_import(app: AppContext, file: Path) -> None:
    """Replace the user list from an Excel file (UserID, UserName, Role, Passcode)."""
    handler = ImportUsersHandler(users=app.stockroom.users)

    try:
        report = handler.handle(read_rows(file))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    echo_import_report(report, "users")


@click.command("list")
@pass_app
def users_list(app: AppContext) -> None:
    """List users (without passcodes)."""
    users = app.stockroom.users.list_all()
    if not users:
        click.echo("No users found.")
        return

    click.echo(f"{'ID':>5}  {'Name':<24} {'Role':<8} {'Specs':<16}")
    click.echo("-" * 56)
    for user in users:
        click.echo(
            f"{user.user_id:>5}  {user.user_name:<24} {user.role.value:<8} {user.user_specs:<16}"
        )
