"""Domain model entities for ledgerbook.

These are pure data classes representing ledger concepts, independent of the
local storage format and of whichever remote store a household shares.
"""

import secrets
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from ledgerbook.domain.errors import ValidationError

_ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_ID_LENGTH = 8


def generate_expense_id() -> str:
    """Return a fresh client-side expense id."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


@dataclass(frozen=True)
class Expense:
    """Expense domain entity.

    ``date`` is kept as ISO ``YYYY-MM-DD`` text: filters compare it lexically
    and imported files may carry dates that do not parse.
    """

    id: str
    date: str
    category: str
    amount: Decimal
    spender: str
    from_: str = ""
    to: str = ""
    note: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-safe mapping keyed by the CSV column names."""
        return {
            "id": self.id,
            "date": self.date,
            "from": self.from_,
            "to": self.to,
            "category": self.category,
            "amount": str(self.amount),
            "spender": self.spender,
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Expense":
        """Build an expense from a mapping produced by ``to_dict``.

        Raises:
            ValidationError: If the id or amount is missing or invalid
        """
        if not isinstance(data, dict):
            raise ValidationError("Expense entry must be a mapping")
        expense_id = data.get("id")
        if not expense_id:
            raise ValidationError("Expense entry has no id")
        try:
            amount = Decimal(str(data.get("amount")))
        except (InvalidOperation, ValueError) as e:
            raise ValidationError(f"Expense {expense_id} has invalid amount: {e}")

        def text(key: str) -> str:
            value = data.get(key)
            return "" if value is None else str(value)

        return cls(
            id=str(expense_id),
            date=text("date"),
            category=text("category"),
            amount=amount,
            spender=text("spender"),
            from_=text("from"),
            to=text("to"),
            note=text("note"),
        )


class GroupBy(Enum):
    """Fields that group totals can be keyed by."""

    SPENDER = "spender"
    CATEGORY = "category"


@dataclass(frozen=True)
class GroupTotal:
    """Sum of amounts for one group label."""

    label: str
    total: Decimal


@dataclass(frozen=True)
class MonthlyTotal:
    """Sum of amounts for one ``YYYY-MM`` month."""

    month: str
    total: Decimal


@dataclass(frozen=True)
class PivotRow:
    """One month row of the spender x month pivot."""

    month: str
    cells: dict[str, Decimal]


@dataclass(frozen=True)
class SpenderMonthPivot:
    """Spender x month pivot, months and spenders ascending."""

    months: tuple[str, ...] = ()
    spenders: tuple[str, ...] = ()
    rows: tuple[PivotRow, ...] = ()


@dataclass(frozen=True)
class LedgerReport:
    """All derived views computed from one filtered expense set."""

    expenses: tuple[Expense, ...]
    grand_total: Decimal
    by_spender: dict[str, Decimal]
    by_category: dict[str, Decimal]
    by_month: tuple[MonthlyTotal, ...]
    pivot: SpenderMonthPivot
    spenders: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()


@dataclass(frozen=True)
class ImportResult:
    """Outcome of a CSV import merge."""

    imported: int
    updated: int
    total: int
