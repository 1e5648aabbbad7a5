"""Shared pytest fixtures for ledgerbook tests."""

import os
import tempfile
from decimal import Decimal

import pytest

from ledgerbook.database.factories import create_sqlite_storage
from ledgerbook.domain.entities import Expense
from ledgerbook.domain.expense import ExpenseService
from ledgerbook.domain.store import LedgerStore
from ledgerbook.remote.memory import InMemoryRemoteStore


@pytest.fixture
def temp_storage():
    """Create a temporary local storage for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    storage = create_sqlite_storage(database_path=db_path)
    # Store the path for tests that need it
    storage.database_path = db_path
    storage.connect()
    storage.initialize_schema()

    yield storage

    storage.disconnect()
    storage.session_factory.kw["bind"].dispose()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def store(temp_storage):
    """Create a loaded LedgerStore over temporary storage."""
    ledger = LedgerStore(temp_storage)
    ledger.load()
    return ledger


@pytest.fixture
def expense_service(store):
    """Create an ExpenseService over the temporary store."""
    return ExpenseService(store)


@pytest.fixture
def remote():
    """Create an in-process shared household store."""
    return InMemoryRemoteStore()


@pytest.fixture
def make_expense():
    """Factory for expenses with sensible defaults."""

    def _make(expense_id="e1", date="2024-03-01", category="Groceries", amount="10", spender="A", **extra):
        return Expense(
            id=expense_id,
            date=date,
            category=category,
            amount=Decimal(amount),
            spender=spender,
            **extra,
        )

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def db_path(tmp_path):
    """Path of a fresh database file for CLI runs."""
    return str(tmp_path / "ledgerbook.db")
