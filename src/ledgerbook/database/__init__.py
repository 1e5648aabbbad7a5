"""Database layer for ledgerbook application."""

from ledgerbook.database.base import EXPENSES_SLOT, HOUSEHOLD_SLOT, LocalStorage
from ledgerbook.database.factories import create_sqlite_storage

__all__ = ["EXPENSES_SLOT", "HOUSEHOLD_SLOT", "LocalStorage", "create_sqlite_storage"]
