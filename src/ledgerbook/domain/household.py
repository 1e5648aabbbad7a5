"""Household (namespace) lifecycle: persistence, activation and switching."""

from typing import Optional

import structlog

from ledgerbook.database.base import HOUSEHOLD_SLOT, LocalStorage
from ledgerbook.domain.store import LedgerStore
from ledgerbook.domain.sync import SyncReconciler

logger = structlog.get_logger(__name__)


class HouseholdService:
    """Owns the configured namespace and drives the reconciler for it.

    Without a reconciler sharing is inert: the namespace is remembered but no
    remote calls are made.
    """

    def __init__(
        self,
        storage: LocalStorage,
        store: LedgerStore,
        reconciler: Optional[SyncReconciler] = None,
    ):
        self.storage = storage
        self.store = store
        self.reconciler = reconciler

    @property
    def sharing_enabled(self) -> bool:
        return self.reconciler is not None

    @property
    def current(self) -> str:
        """The persisted namespace, "" for local-only."""
        try:
            return (self.storage.read_slot(HOUSEHOLD_SLOT) or "").strip()
        except Exception as e:
            logger.warning("household_read_failed", error=str(e))
            return ""

    async def start(self) -> bool:
        """Activate the persisted namespace on top of the already loaded cache.

        Returns:
            True if the initial remote pull succeeded
        """
        if self.reconciler is None:
            return False
        return await self.reconciler.activate(self.current)

    async def switch(self, namespace: str) -> bool:
        """Switch to another namespace ("" for local-only).

        A switch discards the working set and reloads it from the new
        partition; switching to the current namespace does nothing.

        Returns:
            True if the namespace changed
        """
        namespace = (namespace or "").strip()
        if namespace == self.current:
            return False

        if namespace:
            self.storage.write_slot(HOUSEHOLD_SLOT, namespace)
        else:
            self.storage.delete_slot(HOUSEHOLD_SLOT)

        if self.reconciler is not None:
            # Drop the old partition's subscription before clearing the set
            self.reconciler.deactivate()
        self.store.replace_all([])
        logger.info("household_switched", namespace=namespace)

        if self.reconciler is not None:
            await self.reconciler.activate(namespace)
        return True

    async def sync(self) -> bool:
        """Pull the active household now. False when sharing is inactive."""
        if self.reconciler is None or not self.reconciler.active:
            return False
        return await self.reconciler.refresh()

    async def close(self) -> None:
        if self.reconciler is not None:
            await self.reconciler.close()
