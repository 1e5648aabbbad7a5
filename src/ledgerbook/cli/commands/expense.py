"""Expense edit and delete commands."""

import click

from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.cli.session import run_in_session
from ledgerbook.domain.errors import DomainError


@click.command("edit")
@click.argument("expense_id")
@click.option("--date", help="New date")
@click.option("--category", help="New category")
@click.option("--amount", help="New amount")
@click.option("--spender", help="New spender")
@click.option("--from", "from_", help="New source of the money")
@click.option("--to", help="New payee")
@click.option("--note", help="New note")
@click.pass_context
def edit_expense(ctx, expense_id: str, **changes):
    """Edit an expense. Options not given keep their current value."""
    service = ctx.obj["expenses"]

    try:
        expense = run_in_session(ctx, lambda: service.edit_expense(expense_id, **changes))
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"Updated expense {expense.id}: {expense.date} {expense.category} "
        f"{expense.amount:,.2f} ({expense.spender})"
    )


@click.command("delete")
@click.argument("expense_id")
@click.pass_context
def delete_expense(ctx, expense_id: str):
    """Delete an expense by id. Deleting an unknown id changes nothing."""
    service = ctx.obj["expenses"]

    deleted = run_in_session(ctx, lambda: service.delete_expense(expense_id))
    if deleted:
        click.echo(f"Deleted expense {expense_id}")
    else:
        click.echo(f"No expense with id {expense_id}; nothing to delete.")


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(edit_expense)
    cli.add_command(delete_expense)
