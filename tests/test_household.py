"""Tests for the household service."""

import asyncio

from ledgerbook.database.base import HOUSEHOLD_SLOT
from ledgerbook.domain.household import HouseholdService
from ledgerbook.domain.store import LedgerStore
from ledgerbook.domain.sync import SyncReconciler


def _service(temp_storage, remote=None):
    store = LedgerStore(temp_storage)
    store.load()
    reconciler = SyncReconciler(store, remote) if remote is not None else None
    return store, HouseholdService(temp_storage, store, reconciler)


def test_current_defaults_to_local_only(temp_storage):
    _, service = _service(temp_storage)

    assert service.current == ""
    assert service.sharing_enabled is False


def test_switch_without_sharing_persists_and_clears(temp_storage, make_expense):
    store, service = _service(temp_storage)
    store.upsert(make_expense("a"))

    changed = asyncio.run(service.switch("  Home  "))

    assert changed is True
    assert service.current == "Home"
    assert temp_storage.read_slot(HOUSEHOLD_SLOT) == "Home"
    assert len(store) == 0


def test_switch_to_current_namespace_is_noop(temp_storage, make_expense):
    store, service = _service(temp_storage)
    asyncio.run(service.switch("home"))
    store.upsert(make_expense("a"))

    assert asyncio.run(service.switch("home")) is False
    assert len(store) == 1


def test_switch_pulls_new_partition(temp_storage, remote, make_expense):
    async def scenario():
        await remote.upsert("home", [make_expense("shared")])
        store, service = _service(temp_storage, remote)
        store.upsert(make_expense("local"))

        await service.switch("home")
        ids = [e.id for e in store]
        await service.close()
        return ids

    assert asyncio.run(scenario()) == ["shared"]


def test_start_keeps_cache_until_pull_and_then_uses_remote(temp_storage, remote, make_expense):
    temp_storage.write_slot(HOUSEHOLD_SLOT, "home")

    async def scenario():
        await remote.upsert("home", [make_expense("shared")])
        store, service = _service(temp_storage, remote)
        store.replace_all([make_expense("cached")])
        assert [e.id for e in store] == ["cached"]

        pulled = await service.start()
        ids = [e.id for e in store]
        await service.close()
        return pulled, ids

    assert asyncio.run(scenario()) == (True, ["shared"])


def test_clearing_household_stops_sharing(temp_storage, remote, make_expense):
    async def scenario():
        store, service = _service(temp_storage, remote)
        await service.switch("home")
        await service.switch("")
        store.upsert(make_expense("private"))
        await service.close()
        return service.current, service.reconciler.active

    assert asyncio.run(scenario()) == ("", False)
    assert temp_storage.read_slot(HOUSEHOLD_SLOT) is None
    assert remote.partition("home") == []


def test_sync_requires_active_household(temp_storage, remote):
    _, local_only = _service(temp_storage)
    assert asyncio.run(local_only.sync()) is False

    _, shared = _service(temp_storage, remote)
    assert asyncio.run(shared.sync()) is False


def test_sync_refreshes_active_household(temp_storage, remote, make_expense):
    async def scenario():
        store, service = _service(temp_storage, remote)
        await service.switch("home")
        remote._partitions["home"] = {"x": make_expense("x")}
        synced = await service.sync()
        ids = [e.id for e in store]
        await service.close()
        return synced, ids

    assert asyncio.run(scenario()) == (True, ["x"])
