"""Domain layer for ledgerbook application."""

from ledgerbook.domain.entities import Expense, ImportResult, LedgerReport
from ledgerbook.domain.store import LedgerStore
from ledgerbook.domain.sync import SyncReconciler
from ledgerbook.domain.expense import ExpenseService
from ledgerbook.domain.household import HouseholdService
from ledgerbook.domain.filters import ExpenseFilter
from ledgerbook.domain.report import ReportView

__all__ = [
    "Expense",
    "ImportResult",
    "LedgerReport",
    "LedgerStore",
    "SyncReconciler",
    "ExpenseService",
    "HouseholdService",
    "ExpenseFilter",
    "ReportView",
]
