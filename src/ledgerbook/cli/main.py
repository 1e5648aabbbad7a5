"""Main CLI entry point."""

import click

from ledgerbook.config import Settings
from ledgerbook.database.factories import create_sqlite_storage
from ledgerbook.domain.expense import ExpenseService
from ledgerbook.domain.household import HouseholdService
from ledgerbook.domain.store import LedgerStore
from ledgerbook.domain.sync import SyncReconciler
from ledgerbook.log import configure_logging
from ledgerbook.remote.base import RemoteStoreError
from ledgerbook.remote.factories import create_remote_store

# Import and register all commands at module level
from ledgerbook.cli.commands import (
    add,
    expense,
    view,
    summary,
    import_cmd,
    export,
    household,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERBOOK_DB_PATH environment variable)",
    envvar="LEDGERBOOK_DB_PATH",
)
@click.pass_context
def cli(ctx, db_path: str | None):
    """Ledgerbook - Household expense ledger.

    Record expenses locally and, when a shared store is configured, keep them
    in sync with everyone else in your household.
    """
    ctx.ensure_object(dict)

    # Open storage only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is None:
        return

    try:
        settings = Settings.from_env(database_path=db_path)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    configure_logging(settings.log_level)

    storage = create_sqlite_storage(database_path=settings.database_path)
    storage.connect()
    storage.initialize_schema()
    ctx.call_on_close(storage.disconnect)

    store = LedgerStore(storage)
    store.load()

    try:
        remote = create_remote_store(settings)
    except RemoteStoreError as e:
        click.echo(f"Warning: shared store unavailable, working locally: {e}", err=True)
        remote = None
    reconciler = SyncReconciler(store, remote) if remote is not None else None

    ctx.obj["settings"] = settings
    ctx.obj["storage"] = storage
    ctx.obj["store"] = store
    ctx.obj["remote"] = remote
    ctx.obj["household"] = HouseholdService(storage, store, reconciler)
    ctx.obj["expenses"] = ExpenseService(store)


# Register all commands
add.register_commands(cli)
expense.register_commands(cli)
view.register_commands(cli)
summary.register_commands(cli)
import_cmd.register_commands(cli)
export.register_commands(cli)
household.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
