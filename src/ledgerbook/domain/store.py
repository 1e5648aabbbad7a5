"""Ledger store: the authoritative in-memory expense set for a household."""

import json
from typing import Callable, Iterable, Iterator, Optional, Protocol, Sequence

import structlog

from ledgerbook.database.base import EXPENSES_SLOT, LocalStorage
from ledgerbook.domain.entities import Expense
from ledgerbook.domain.errors import DomainError

logger = structlog.get_logger(__name__)

Listener = Callable[[tuple[Expense, ...]], None]


class Replicator(Protocol):
    """Receives committed local mutations for best-effort remote delivery."""

    def push_upsert(self, expenses: Sequence[Expense]) -> None: ...

    def push_delete(self, expense_id: str) -> None: ...


def sort_expenses(expenses: Iterable[Expense]) -> list[Expense]:
    """Sort newest date first; equal dates keep their given order."""
    return sorted(expenses, key=lambda expense: expense.date, reverse=True)


class LedgerStore:
    """Owns the working expense set and serializes every mutation through itself.

    Each committed mutation is persisted to the local expenses slot, announced
    to listeners, and (for user mutations only) handed to the replicator.
    """

    def __init__(self, storage: LocalStorage, replicator: Optional[Replicator] = None):
        """Initialize ledger store.

        Args:
            storage: Local storage holding the expenses slot
            replicator: Optional sink for local mutations (the sync reconciler)
        """
        self.storage = storage
        self.replicator = replicator
        self._expenses: list[Expense] = []
        self._listeners: list[Listener] = []

    @property
    def expenses(self) -> tuple[Expense, ...]:
        """Snapshot of the working set, newest first."""
        return tuple(self._expenses)

    def __len__(self) -> int:
        return len(self._expenses)

    def __iter__(self) -> Iterator[Expense]:
        return iter(self.expenses)

    def get(self, expense_id: str) -> Optional[Expense]:
        """Return the expense with the given id, if present."""
        for expense in self._expenses:
            if expense.id == expense_id:
                return expense
        return None

    def add_listener(self, listener: Listener) -> None:
        """Call listener with the new set after every committed mutation."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def load(self) -> tuple[Expense, ...]:
        """Restore the last persisted set.

        A missing, unreadable or corrupt slot yields an empty set; entries
        that cannot be converted are dropped.
        """
        self._expenses = sort_expenses(self._read_cache())
        self._notify()
        return self.expenses

    def _read_cache(self) -> list[Expense]:
        try:
            raw = self.storage.read_slot(EXPENSES_SLOT)
        except Exception as e:
            logger.warning("cache_read_failed", error=str(e))
            return []
        if not raw:
            return []

        try:
            payload = json.loads(raw)
        except ValueError as e:
            logger.warning("cache_corrupt", error=str(e))
            return []
        if not isinstance(payload, list):
            logger.warning("cache_corrupt", error="payload is not a list")
            return []

        expenses: list[Expense] = []
        seen: set[str] = set()
        for index, entry in enumerate(payload):
            try:
                expense = Expense.from_dict(entry)
            except DomainError as e:
                logger.warning("cache_entry_dropped", index=index, error=str(e))
                continue
            if expense.id in seen:
                continue
            seen.add(expense.id)
            expenses.append(expense)
        return expenses

    def upsert(self, expense: Expense) -> tuple[Expense, ...]:
        """Insert the expense, or replace the one with the same id."""
        self._merge([expense], prepend_new=True)
        self._commit()
        if self.replicator is not None:
            self.replicator.push_upsert([expense])
        return self.expenses

    def upsert_many(self, expenses: Sequence[Expense]) -> tuple[Expense, ...]:
        """Merge a batch by id: existing ids are replaced, new ids appended."""
        if not expenses:
            return self.expenses
        self._merge(expenses, prepend_new=False)
        self._commit()
        if self.replicator is not None:
            self.replicator.push_upsert(list(expenses))
        return self.expenses

    def delete(self, expense_id: str) -> tuple[Expense, ...]:
        """Remove the expense if present. Deleting an unknown id is a no-op."""
        remaining = [expense for expense in self._expenses if expense.id != expense_id]
        if len(remaining) == len(self._expenses):
            return self.expenses
        self._expenses = remaining
        self._commit()
        if self.replicator is not None:
            self.replicator.push_delete(expense_id)
        return self.expenses

    def replace_all(self, expenses: Iterable[Expense]) -> tuple[Expense, ...]:
        """Swap the whole working set, e.g. after a remote pull.

        Never replicated: the new contents came from the remote side.
        """
        by_id: dict[str, Expense] = {}
        for expense in expenses:
            by_id[expense.id] = expense
        self._expenses = sort_expenses(by_id.values())
        self._commit()
        return self.expenses

    def persist(self) -> bool:
        """Write the working set to the local slot.

        Failures are logged and reported through the return value only; the
        in-memory set stays authoritative for the session.
        """
        try:
            payload = json.dumps([expense.to_dict() for expense in self._expenses], ensure_ascii=False)
            self.storage.write_slot(EXPENSES_SLOT, payload)
        except Exception as e:
            logger.error("persist_failed", error=str(e), count=len(self._expenses))
            return False
        return True

    def _merge(self, incoming: Sequence[Expense], prepend_new: bool) -> None:
        merged = list(self._expenses)
        positions = {expense.id: index for index, expense in enumerate(merged)}
        added_ids: set[str] = set()
        for expense in incoming:
            if expense.id in positions:
                merged[positions[expense.id]] = expense
            else:
                positions[expense.id] = len(merged)
                merged.append(expense)
                added_ids.add(expense.id)
        if prepend_new and added_ids:
            merged = [expense for expense in merged if expense.id in added_ids] + [
                expense for expense in merged if expense.id not in added_ids
            ]
        self._expenses = sort_expenses(merged)

    def _commit(self) -> None:
        self.persist()
        self._notify()

    def _notify(self) -> None:
        snapshot = self.expenses
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.warning("listener_failed", error=str(e))
