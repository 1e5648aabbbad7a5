"""Summary commands."""

import click

from ledgerbook.cli.date_filters import build_expense_filter, filter_options
from ledgerbook.cli.session import run_in_session
from ledgerbook.domain.entities import LedgerReport
from ledgerbook.domain.report import ReportView

LABEL_WIDTH = 30
AMOUNT_WIDTH = 16


def _display_totals(title: str, totals: dict) -> None:
    """Display label/amount rows sorted by amount (highest first)."""
    click.echo(f"\n{title}")
    click.echo("-" * (LABEL_WIDTH + AMOUNT_WIDTH + 1))
    for label, total in sorted(totals.items(), key=lambda item: (-abs(item[1]), item[0])):
        click.echo(f"{label[:LABEL_WIDTH]:<{LABEL_WIDTH}} {total:>{AMOUNT_WIDTH},.2f}")


def _display_months(report: LedgerReport) -> None:
    click.echo("\nBy month")
    click.echo("-" * (LABEL_WIDTH + AMOUNT_WIDTH + 1))
    for item in report.by_month:
        click.echo(f"{item.month:<{LABEL_WIDTH}} {item.total:>{AMOUNT_WIDTH},.2f}")


def _display_pivot(report: LedgerReport) -> None:
    pivot = report.pivot
    if not pivot.rows:
        click.echo("\nNo dated expenses to pivot.")
        return

    width = max([12] + [len(spender) + 2 for spender in pivot.spenders])
    click.echo("\nSpender by month")
    click.echo(f"{'Month':<8}" + "".join(f"{spender:>{width}}" for spender in pivot.spenders))
    for row in pivot.rows:
        cells = "".join(f"{row.cells[spender]:>{width},.2f}" for spender in pivot.spenders)
        click.echo(f"{row.month:<8}{cells}")


@click.command("summary")
@filter_options
@click.option(
    "--by",
    "group_by",
    type=click.Choice(["spender", "category", "month", "pivot"]),
    default="category",
    show_default=True,
    help="How to group the totals",
)
@click.pass_context
def summary(ctx, group_by: str, **filters):
    """Show totals of the filtered expenses."""
    criteria = build_expense_filter(ctx, **filters)
    store = ctx.obj["store"]

    view = ReportView(store, criteria)
    try:
        # The view follows the household pull made at session start
        run_in_session(ctx, lambda: None)
    finally:
        view.close()

    report = view.report
    if not report.expenses:
        click.echo("No expenses found.")
        return

    if group_by == "spender":
        _display_totals("By spender", report.by_spender)
    elif group_by == "category":
        _display_totals("By category", report.by_category)
    elif group_by == "month":
        _display_months(report)
    else:
        _display_pivot(report)

    click.echo("-" * (LABEL_WIDTH + AMOUNT_WIDTH + 1))
    click.echo(f"{'Total':<{LABEL_WIDTH}} {report.grand_total:>{AMOUNT_WIDTH},.2f}")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
