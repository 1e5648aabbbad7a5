"""Export commands."""

from pathlib import Path

import click

from ledgerbook.cli.date_filters import build_expense_filter, filter_options
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.cli.session import run_in_session
from ledgerbook.domain.csv_codec import export_filename
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.workbook import build_workbook_sheets, write_workbook


@click.group("export")
def export():
    """Export expenses to a file."""
    pass


@export.command("csv")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Output file (default: expenses_<today>.csv)")
@click.pass_context
def export_csv(ctx, output: str | None):
    """Export the whole ledger as CSV."""
    service = ctx.obj["expenses"]

    text, filename = run_in_session(ctx, service.export_csv)
    path = Path(output or filename)
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        click.echo(f"Error: Could not write {path}: {e}", err=True)
        ctx.exit(1)

    click.echo(f"Exported {len(ctx.obj['store'])} expenses to {path}")


@export.command("xlsx")
@filter_options
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Output file (default: expenses_<today>.xlsx)")
@click.pass_context
def export_xlsx(ctx, output: str | None, **filters):
    """Export the filtered expenses and their summaries as a workbook."""
    criteria = build_expense_filter(ctx, **filters)
    service = ctx.obj["expenses"]

    expenses = run_in_session(ctx, lambda: service.list_expenses(criteria))
    path = Path(output or export_filename("xlsx"))
    try:
        write_workbook(build_workbook_sheets(expenses), path)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Exported {len(expenses)} expenses to {path}")


def register_commands(cli):
    """Register export commands with main CLI."""
    cli.add_command(export)
