"""Add expense command."""

import click

from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.cli.session import run_in_session
from ledgerbook.domain.errors import DomainError


@click.command("add")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Expense date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--category", required=True, help="Expense category")
@click.option("--amount", required=True, help="Amount (e.g., 12.50, 12,50 or $1,200.00)")
@click.option("--spender", required=True, help="Household member who paid")
@click.option("--from", "from_", default="", help="Where the money came from (e.g., card)")
@click.option("--to", default="", help="Who was paid (e.g., shop)")
@click.option("--note", default="", help="Free-text note")
@click.pass_context
def add_expense(
    ctx,
    date: str,
    category: str,
    amount: str,
    spender: str,
    from_: str,
    to: str,
    note: str,
):
    """Add an expense.

    Examples:
        ledgerbook add --category Groceries --amount 42.10 --spender Sam --to Market
        ledgerbook add --date yesterday --category Fuel --amount "35,00" --spender Alex
    """
    service = ctx.obj["expenses"]

    try:
        expense = run_in_session(
            ctx,
            lambda: service.add_expense(
                date=date,
                category=category,
                amount=amount,
                spender=spender,
                from_=from_,
                to=to,
                note=note,
            ),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"Added expense {expense.id}: {expense.date} {expense.category} "
        f"{expense.amount:,.2f} ({expense.spender})"
    )


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_expense)
