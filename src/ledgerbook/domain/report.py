"""Derived views recomputed whenever the store or the active filter changes."""

from typing import Optional

from ledgerbook.domain.aggregation import build_report
from ledgerbook.domain.entities import Expense, LedgerReport
from ledgerbook.domain.filters import ExpenseFilter, filter_expenses
from ledgerbook.domain.store import LedgerStore


class ReportView:
    """Keeps the filtered set and its LedgerReport current.

    The view listens to store mutations; readers get derived copies and never
    write back into the store.
    """

    def __init__(self, store: LedgerStore, criteria: Optional[ExpenseFilter] = None):
        self.store = store
        self.criteria = criteria or ExpenseFilter()
        self.filtered: tuple[Expense, ...] = ()
        self.report: LedgerReport = build_report(())
        self.recompute(store.expenses)
        store.add_listener(self.recompute)

    def set_filter(self, criteria: Optional[ExpenseFilter]) -> LedgerReport:
        """Change the active filter and recompute."""
        self.criteria = criteria or ExpenseFilter()
        return self.recompute(self.store.expenses)

    def recompute(self, expenses: tuple[Expense, ...]) -> LedgerReport:
        self.filtered = tuple(filter_expenses(expenses, self.criteria))
        self.report = build_report(self.filtered)
        return self.report

    def close(self) -> None:
        """Stop following the store."""
        self.store.remove_listener(self.recompute)
