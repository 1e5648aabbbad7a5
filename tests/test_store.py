"""Tests for the ledger store."""

import json

from ledgerbook.database.base import EXPENSES_SLOT
from ledgerbook.domain.store import LedgerStore


class RecordingReplicator:
    def __init__(self):
        self.upserts = []
        self.deletes = []

    def push_upsert(self, expenses):
        self.upserts.append([expense.id for expense in expenses])

    def push_delete(self, expense_id):
        self.deletes.append(expense_id)


def test_load_empty_storage(store):
    assert store.expenses == ()
    assert len(store) == 0


def test_upsert_adds_and_persists(store, temp_storage, make_expense):
    store.upsert(make_expense("a"))

    assert [e.id for e in store] == ["a"]
    reloaded = LedgerStore(temp_storage)
    assert reloaded.load() == store.expenses


def test_upsert_is_idempotent(store, make_expense):
    expense = make_expense("a")
    store.upsert(expense)
    first = store.expenses
    store.upsert(expense)

    assert store.expenses == first


def test_upsert_replaces_by_id(store, make_expense):
    store.upsert(make_expense("a", amount="1"))
    store.upsert(make_expense("a", amount="2", note="edited"))

    assert len(store) == 1
    assert store.get("a").note == "edited"


def test_expenses_are_sorted_newest_first(store, make_expense):
    store.upsert(make_expense("old", date="2024-01-01"))
    store.upsert(make_expense("new", date="2024-05-01"))
    store.upsert(make_expense("mid", date="2024-03-01"))

    assert [e.id for e in store] == ["new", "mid", "old"]


def test_new_expense_goes_before_existing_ones_with_same_date(store, make_expense):
    store.upsert(make_expense("first", date="2024-01-01"))
    store.upsert(make_expense("second", date="2024-01-01"))

    assert [e.id for e in store] == ["second", "first"]


def test_upsert_many_merges_batch(store, make_expense):
    store.upsert(make_expense("a", amount="1"))

    store.upsert_many([make_expense("a", amount="9"), make_expense("b")])

    assert len(store) == 2
    assert store.get("a").amount == 9


def test_delete_removes_expense(store, make_expense):
    store.upsert(make_expense("a"))
    store.upsert(make_expense("b"))

    store.delete("a")

    assert [e.id for e in store] == ["b"]


def test_delete_unknown_id_changes_nothing(temp_storage, make_expense):
    replicator = RecordingReplicator()
    store = LedgerStore(temp_storage, replicator)
    store.load()
    store.upsert(make_expense("a"))
    notified = []
    store.add_listener(notified.append)

    store.delete("missing")

    assert [e.id for e in store] == ["a"]
    assert notified == []
    assert replicator.deletes == []


def test_replace_all_is_not_replicated(temp_storage, make_expense):
    replicator = RecordingReplicator()
    store = LedgerStore(temp_storage, replicator)
    store.load()

    store.replace_all([make_expense("a"), make_expense("b", date="2024-09-01")])

    assert [e.id for e in store] == ["b", "a"]
    assert replicator.upserts == []


def test_user_mutations_are_replicated(temp_storage, make_expense):
    replicator = RecordingReplicator()
    store = LedgerStore(temp_storage, replicator)
    store.load()

    store.upsert(make_expense("a"))
    store.upsert_many([make_expense("b"), make_expense("c")])
    store.delete("a")

    assert replicator.upserts == [["a"], ["b", "c"]]
    assert replicator.deletes == ["a"]


def test_listeners_receive_every_committed_set(store, make_expense):
    seen = []
    store.add_listener(lambda expenses: seen.append(len(expenses)))

    store.upsert(make_expense("a"))
    store.upsert(make_expense("b"))
    store.delete("a")

    assert seen == [1, 2, 1]


def test_failing_listener_does_not_break_mutation(store, make_expense):
    def broken(expenses):
        raise RuntimeError("boom")

    store.add_listener(broken)
    store.upsert(make_expense("a"))

    assert store.get("a") is not None


def test_corrupt_cache_loads_as_empty(temp_storage):
    temp_storage.write_slot(EXPENSES_SLOT, "{not json")

    assert LedgerStore(temp_storage).load() == ()


def test_non_list_cache_loads_as_empty(temp_storage):
    temp_storage.write_slot(EXPENSES_SLOT, json.dumps({"id": "a"}))

    assert LedgerStore(temp_storage).load() == ()


def test_invalid_cache_entries_are_dropped(temp_storage):
    payload = [
        {"id": "a", "date": "2024-01-01", "amount": "5", "category": "X", "spender": "S"},
        {"date": "2024-01-02", "amount": "5"},
        {"id": "c", "amount": "not a number"},
        "garbage",
        {"id": "a", "date": "2024-01-09", "amount": "7"},
    ]
    temp_storage.write_slot(EXPENSES_SLOT, json.dumps(payload))

    expenses = LedgerStore(temp_storage).load()

    assert [e.id for e in expenses] == ["a"]
    assert expenses[0].date == "2024-01-01"


class FailingStorage:
    def read_slot(self, key):
        raise OSError("disk gone")

    def write_slot(self, key, value):
        raise OSError("disk full")


def test_persist_failure_keeps_in_memory_state(make_expense):
    store = LedgerStore(FailingStorage())

    assert store.load() == ()
    store.upsert(make_expense("a"))

    assert [e.id for e in store] == ["a"]
    assert store.persist() is False
