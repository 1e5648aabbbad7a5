"""Filter predicate narrowing the working expense set."""

from dataclasses import dataclass
from typing import Iterable, Optional

from ledgerbook.domain.entities import Expense


@dataclass(frozen=True)
class ExpenseFilter:
    """Optional, AND-combined filter criteria.

    Date bounds are inclusive and compared lexically against the ISO date
    text. ``search`` is matched case-insensitively against the from, to,
    category, spender and note fields joined by spaces. Unset or empty
    criteria match everything.
    """

    start_date: Optional[str] = None
    end_date: Optional[str] = None
    spender: Optional[str] = None
    category: Optional[str] = None
    search: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not any((self.start_date, self.end_date, self.spender, self.category, self.search))

    def matches(self, expense: Expense) -> bool:
        """Return True if the expense satisfies every active criterion."""
        if self.start_date and expense.date < self.start_date:
            return False
        if self.end_date and expense.date > self.end_date:
            return False
        if self.spender and expense.spender != self.spender:
            return False
        if self.category and expense.category != self.category:
            return False
        if self.search:
            haystack = " ".join(
                (expense.from_, expense.to, expense.category, expense.spender, expense.note or "")
            ).lower()
            if self.search.lower() not in haystack:
                return False
        return True


def filter_expenses(expenses: Iterable[Expense], criteria: Optional[ExpenseFilter] = None) -> list[Expense]:
    """Return a new list of the expenses matching criteria, order preserved."""
    if criteria is None or criteria.is_empty:
        return list(expenses)
    return [expense for expense in expenses if criteria.matches(expense)]
