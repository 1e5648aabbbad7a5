"""Expense listing command."""

import click

from ledgerbook.cli.date_filters import build_expense_filter, filter_options
from ledgerbook.cli.session import run_in_session
from ledgerbook.domain.aggregation import grand_total


@click.command("list")
@filter_options
@click.option("--verbose", "-v", is_flag=True, help="Show every field of each expense")
@click.pass_context
def list_expenses(ctx, verbose: bool, **filters):
    """List expenses, newest first, with optional filters.

    Use --verbose to show the from, to and note fields as well.
    """
    criteria = build_expense_filter(ctx, **filters)
    service = ctx.obj["expenses"]

    expenses = run_in_session(ctx, lambda: service.list_expenses(criteria))

    if not expenses:
        click.echo("No expenses found.")
        return

    click.echo(f"\nFound {len(expenses)} expense(s):")
    if verbose:
        click.echo("=" * 100)
        for expense in expenses:
            click.echo(f"\nExpense ID: {expense.id}")
            click.echo(f"  Date: {expense.date}")
            click.echo(f"  Amount: {expense.amount:,.2f}")
            click.echo(f"  Category: {expense.category}")
            click.echo(f"  Spender: {expense.spender}")
            if expense.from_:
                click.echo(f"  From: {expense.from_}")
            if expense.to:
                click.echo(f"  To: {expense.to}")
            if expense.note:
                click.echo(f"  Note: {expense.note}")
            click.echo("-" * 100)
    else:
        click.echo("-" * 100)
        click.echo(
            f"{'ID':<10} {'Date':<12} {'Amount':>12}  {'Category':<20} {'Spender':<16} {'To':<24}"
        )
        click.echo("-" * 100)
        for expense in expenses:
            amount_str = f"{expense.amount:,.2f}"
            click.echo(
                f"{expense.id:<10} {expense.date:<12} {amount_str:>12}  "
                f"{expense.category[:20]:<20} {expense.spender[:16]:<16} {expense.to[:24]:<24}"
            )

    click.echo(f"\nTotal: {grand_total(expenses):,.2f}")


def register_commands(cli):
    """Register list command with main CLI."""
    cli.add_command(list_expenses)
