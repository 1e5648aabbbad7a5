"""CLI helpers for date range resolution and expense filter options."""

from datetime import date

import click

from ledgerbook.domain.filters import ExpenseFilter
from ledgerbook.utils.date_parser import PERIODS, get_date_range, parse_date


def filter_options(command):
    """Attach the shared filter and period options to a command."""
    options = [
        click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')"),
        click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')"),
        click.option("--spender", help="Only expenses by this spender"),
        click.option("--category", help="Only expenses in this category"),
        click.option("--search", help="Case-insensitive text in from, to, category, spender or note"),
    ]
    options += [
        click.option(f"--{period}", is_flag=True, help=f"Filter to {period.replace('-', ' ')}")
        for period in PERIODS
    ]
    for option in reversed(options):
        command = option(command)
    return command


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    periods: tuple[str, ...] = (),
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    if len(periods) > 1:
        click.echo(
            "Error: Only one period option (--this-month, --this-year, --this-week, --last-month, --last-year, --last-week) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if periods and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-month, --this-year, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if periods:
        return get_date_range(periods[0])

    start = None
    end = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    return start, end


def build_expense_filter(
    ctx,
    *,
    start_date: str | None = None,
    end_date: str | None = None,
    spender: str | None = None,
    category: str | None = None,
    search: str | None = None,
    **period_flags: bool,
) -> ExpenseFilter:
    """Turn the values of filter_options into an ExpenseFilter."""
    periods = tuple(
        period for period in PERIODS if period_flags.get(period.replace("-", "_"))
    )
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, periods=periods
    )
    return ExpenseFilter(
        start_date=start.isoformat() if start else None,
        end_date=end.isoformat() if end else None,
        spender=spender or None,
        category=category or None,
        search=search or None,
    )
