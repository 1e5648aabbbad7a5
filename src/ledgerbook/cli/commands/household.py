"""Household sharing commands."""

import click

from ledgerbook.cli.session import run_in_session
from ledgerbook.domain.errors import sharing_disabled


@click.group("household")
def household():
    """Manage the shared household this ledger syncs with."""
    pass


@household.command("show")
@click.pass_context
def show_household(ctx):
    """Show the configured household."""
    service = ctx.obj["household"]
    current = service.current

    if not current:
        click.echo("No household set; expenses are kept on this device only.")
    else:
        click.echo(f"Household: {current}")
    if not service.sharing_enabled:
        click.echo(sharing_disabled())


@household.command("set")
@click.argument("name")
@click.pass_context
def set_household(ctx, name: str):
    """Switch to household NAME.

    The local expense list is replaced by the household's shared expenses.
    """
    service = ctx.obj["household"]
    name = name.strip()
    if not name:
        click.echo("Error: Household name cannot be empty", err=True)
        ctx.exit(1)

    changed = run_in_session(ctx, lambda: service.switch(name))
    if not changed:
        click.echo(f"Already using household {name}")
        return

    click.echo(f"Switched to household {name} ({len(ctx.obj['store'])} expenses)")
    if not service.sharing_enabled:
        click.echo(sharing_disabled())


@household.command("clear")
@click.pass_context
def clear_household(ctx):
    """Stop sharing and keep expenses on this device only."""
    service = ctx.obj["household"]

    changed = run_in_session(ctx, lambda: service.switch(""))
    if changed:
        click.echo("Household cleared; expenses are kept on this device only.")
    else:
        click.echo("No household set.")


@click.command("sync")
@click.pass_context
def sync(ctx):
    """Pull the latest expenses of the household now."""
    service = ctx.obj["household"]
    if not service.sharing_enabled:
        click.echo(f"Error: {sharing_disabled()}", err=True)
        ctx.exit(1)
    if not service.current:
        click.echo("Error: No household set. Use 'ledgerbook household set NAME' first.", err=True)
        ctx.exit(1)

    synced = run_in_session(ctx, service.sync)
    if not synced:
        click.echo("Error: Could not reach the shared store; local expenses unchanged.", err=True)
        ctx.exit(1)

    click.echo(f"Synced household {service.current} ({len(ctx.obj['store'])} expenses)")


def register_commands(cli):
    """Register household commands with main CLI."""
    cli.add_command(household)
    cli.add_command(sync)
