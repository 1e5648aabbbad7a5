"""Mapper functions to convert between domain expenses and SQLAlchemy rows."""

from decimal import Decimal
from typing import Any

from ledgerbook.domain import entities as domain
from ledgerbook.database.models import SharedExpense as ORMSharedExpense


def shared_expense_to_domain(orm_expense: ORMSharedExpense) -> domain.Expense:
    """Convert a SharedExpense row to a domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        date=orm_expense.date,
        from_=orm_expense.from_ or "",
        to=orm_expense.to or "",
        category=orm_expense.category or "",
        amount=Decimal(orm_expense.amount),
        spender=orm_expense.spender or "",
        note=orm_expense.note or "",
    )


def expense_to_shared_values(namespace: str, expense: domain.Expense) -> dict[str, Any]:
    """Return the column values of a SharedExpense row for an expense."""
    return {
        "namespace": namespace,
        "id": expense.id,
        "date": expense.date,
        "from_": expense.from_,
        "to": expense.to,
        "category": expense.category,
        "amount": str(expense.amount),
        "spender": expense.spender,
        "note": expense.note,
    }
