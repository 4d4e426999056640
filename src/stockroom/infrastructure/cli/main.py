import sys
from pathlib import Path

import click

from stockroom.infrastructure.cli.activity_commands import (
    activity_borrow,
    activity_export,
    activity_list,
    activity_settle,
)
from stockroom.infrastructure.cli.context import AppContext
from stockroom.infrastructure.cli.inventory_commands import (
    inventory_import,
    inventory_list,
    inventory_reconcile,
)
from stockroom.infrastructure.cli.user_commands import login, users_import, users_list
from stockroom.infrastructure.config import Settings
from stockroom.logging_config import configure_logging, get_logger

logger = get_logger("cli")


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding inventory, activity and user files.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log verbosity (logs go to stderr as JSON lines).",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, log_level: str | None) -> None:
    """Stockroom — lending tracker for borrowed stockroom items"""
    settings = Settings.from_env().override(data_dir=data_dir, log_level=log_level)
    configure_logging(level=settings.log_level)
    ctx.obj = AppContext(settings)


@cli.group()
def inventory() -> None:
    """Manage the item catalog."""


@cli.group()
def activity() -> None:
    """Borrow, settle and review activity."""


@cli.group()
def users() -> None:
    """Manage users."""


# Register subcommands
cli.add_command(login)
inventory.add_command(inventory_import)
inventory.add_command(inventory_list)
inventory.add_command(inventory_reconcile)
activity.add_command(activity_borrow)
activity.add_command(activity_export)
activity.add_command(activity_list)
activity.add_command(activity_settle)
users.add_command(users_import)
users.add_command(users_list)


def main() -> None:
    """Console entry point; logs anything unexpected instead of dumping a traceback."""
    try:
        cli()
    except Exception:
        logger.exception("unhandled_error")
        click.echo("Error: unexpected failure, see the log for details.", err=True)
        sys.exit(1)
