"""CSV import command."""

from pathlib import Path

import click

from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.cli.session import run_in_session
from ledgerbook.domain.errors import DomainError


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_csv(ctx, csv_file: str):
    """Import expenses from a CSV file.

    Rows whose id matches an existing expense replace it; other rows are added.
    Rows without an id get a fresh one.
    """
    service = ctx.obj["expenses"]

    try:
        text = Path(csv_file).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        click.echo(f"Error: Could not read {csv_file}: {e}", err=True)
        ctx.exit(1)

    try:
        result = run_in_session(ctx, lambda: service.import_csv(text))
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo("\nImport complete:")
    click.echo(f"  Added: {result.imported} expenses")
    click.echo(f"  Replaced: {result.updated} expenses")
    click.echo(f"  Total in ledger: {result.total}")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
