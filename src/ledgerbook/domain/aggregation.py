"""Aggregation of expenses into grouped totals, monthly totals and pivots.

Every function here is a pure function of the expense sequence it is given,
usually the filtered set rather than the whole store.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Sequence

from ledgerbook.domain.entities import (
    Expense,
    GroupBy,
    LedgerReport,
    MonthlyTotal,
    PivotRow,
    SpenderMonthPivot,
)
from ledgerbook.utils.date_parser import parse_iso_date

UNSPECIFIED_SPENDER = "(unspecified)"
UNCATEGORIZED = "(uncategorized)"

_ZERO = Decimal("0")


def amount_value(expense: Expense) -> Decimal:
    """Return the expense amount, or zero when it is not a finite number."""
    amount = expense.amount
    if isinstance(amount, Decimal):
        return amount if amount.is_finite() else _ZERO
    try:
        value = Decimal(str(amount))
    except (ArithmeticError, ValueError):
        return _ZERO
    return value if value.is_finite() else _ZERO


def month_key(date_text: str) -> str:
    """Return the ``YYYY-MM`` month of an ISO date, or "" if it does not parse."""
    parsed = parse_iso_date(date_text)
    if parsed is None:
        return ""
    return parsed.strftime("%Y-%m")


def grand_total(expenses: Iterable[Expense]) -> Decimal:
    """Sum of all amounts."""
    return sum((amount_value(expense) for expense in expenses), _ZERO)


def group_label(expense: Expense, group_by: GroupBy) -> str:
    """Return the group label of an expense, using the sentinel for empty keys."""
    if group_by == GroupBy.SPENDER:
        return expense.spender or UNSPECIFIED_SPENDER
    return expense.category or UNCATEGORIZED


def group_totals(expenses: Iterable[Expense], group_by: GroupBy) -> dict[str, Decimal]:
    """Sum amounts per spender or per category."""
    totals: dict[str, Decimal] = defaultdict(lambda: _ZERO)
    for expense in expenses:
        totals[group_label(expense, group_by)] += amount_value(expense)
    return dict(totals)


def group_expenses_by_month(expenses: Iterable[Expense]) -> dict[str, list[Expense]]:
    """Group expenses by month key; expenses with unparsable dates are left out."""
    grouped: dict[str, list[Expense]] = defaultdict(list)
    for expense in expenses:
        key = month_key(expense.date)
        if key:
            grouped[key].append(expense)
    return dict(grouped)


def monthly_totals(expenses: Iterable[Expense]) -> list[MonthlyTotal]:
    """Sum amounts per month, ascending by month."""
    grouped = group_expenses_by_month(expenses)
    return [MonthlyTotal(month=month, total=grand_total(grouped[month])) for month in sorted(grouped)]


def _distinct(values: Iterable[str]) -> list[str]:
    return sorted({value for value in values if value})


def distinct_spenders(expenses: Iterable[Expense]) -> list[str]:
    """Non-empty spenders present, ascending."""
    return _distinct(expense.spender for expense in expenses)


def distinct_categories(expenses: Iterable[Expense]) -> list[str]:
    """Non-empty categories present, ascending."""
    return _distinct(expense.category for expense in expenses)


def distinct_months(expenses: Iterable[Expense]) -> list[str]:
    """Month keys present, ascending."""
    return _distinct(month_key(expense.date) for expense in expenses)


def spender_month_pivot(expenses: Sequence[Expense]) -> SpenderMonthPivot:
    """Build the spender x month pivot.

    One row per month present; each row has a cell for every spender present,
    zero when that spender has nothing in the month. Expenses without a
    spender or with an unparsable date are not placed in any cell.
    """
    spenders = distinct_spenders(expenses)
    grouped = group_expenses_by_month(expenses)

    rows = []
    for month in sorted(grouped):
        cells = {spender: _ZERO for spender in spenders}
        for expense in grouped[month]:
            if expense.spender:
                cells[expense.spender] += amount_value(expense)
        rows.append(PivotRow(month=month, cells=cells))

    return SpenderMonthPivot(
        months=tuple(sorted(grouped)),
        spenders=tuple(spenders),
        rows=tuple(rows),
    )


def build_report(expenses: Sequence[Expense]) -> LedgerReport:
    """Compute every derived view for one expense set."""
    expenses = tuple(expenses)
    return LedgerReport(
        expenses=expenses,
        grand_total=grand_total(expenses),
        by_spender=group_totals(expenses, GroupBy.SPENDER),
        by_category=group_totals(expenses, GroupBy.CATEGORY),
        by_month=tuple(monthly_totals(expenses)),
        pivot=spender_month_pivot(expenses),
        spenders=tuple(distinct_spenders(expenses)),
        categories=tuple(distinct_categories(expenses)),
    )
