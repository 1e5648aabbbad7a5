"""Sync reconciler: keeps a ledger store consistent with a shared household.

Reconciliation is deliberately coarse. Any change notification triggers a
full read of the household partition followed by ``replace_all`` on the
store, so the remote side is ground truth after every signal. Local
mutations are pushed fire-and-forget after the store has committed them.

Known gap: a refresh triggered by an unrelated notification can land before
a local push reaches the remote, in which case the refresh replaces the store
with a snapshot that does not yet contain that local change. The change
reappears once its push lands and the resulting notification triggers another
refresh; if the push fails it is lost from the shared view.
"""

import asyncio
from typing import Awaitable, Callable, Coroutine, Optional, Sequence

import structlog

from ledgerbook.domain.entities import Expense
from ledgerbook.domain.store import LedgerStore
from ledgerbook.remote.base import ChangeEvent, RemoteStore, Subscription

logger = structlog.get_logger(__name__)


class SyncReconciler:
    """Bridges a LedgerStore and a RemoteStore for one active namespace."""

    def __init__(self, store: LedgerStore, remote: RemoteStore):
        """Initialize the reconciler and register it as the store's replicator.

        Args:
            store: Ledger store to keep in sync
            remote: Shared household store
        """
        self.store = store
        self.remote = remote
        self.store.replicator = self
        self._namespace = ""
        # Bumped on every activation so late results of a previous namespace are ignored
        self._token = 0
        self._subscription: Optional[Subscription] = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def namespace(self) -> str:
        """Active household namespace ("" when sharing is inactive)."""
        return self._namespace

    @property
    def active(self) -> bool:
        return bool(self._namespace)

    async def activate(self, namespace: str) -> bool:
        """Make ``namespace`` the active household.

        Pulls the partition into the store and subscribes to its changes. An
        empty namespace deactivates sharing.

        Returns:
            True if the initial pull succeeded
        """
        self.deactivate()
        namespace = namespace.strip()
        if not namespace:
            return False
        self._namespace = namespace
        token = self._token

        pulled = await self.refresh()
        if token != self._token:
            # Switched to another namespace while pulling
            return False
        try:
            self._subscription = self.remote.subscribe(namespace, self._on_remote_change)
        except Exception as e:
            logger.warning("remote_subscribe_failed", namespace=namespace, error=str(e))
            return pulled
        logger.info("household_activated", namespace=self._namespace, pulled=pulled)
        return pulled

    def deactivate(self) -> None:
        """Cancel the subscription; no remote interaction until the next activation."""
        self._token += 1
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None
        self._namespace = ""

    async def refresh(self) -> bool:
        """Replace the store with the remote partition.

        On failure the store is left as it is. A result that arrives after
        the namespace changed is discarded.

        Returns:
            True if the store was replaced
        """
        namespace, token = self._namespace, self._token
        if not namespace:
            return False
        try:
            expenses = await self.remote.fetch_all(namespace)
        except Exception as e:
            logger.warning("remote_refresh_failed", namespace=namespace, error=str(e))
            return False
        if token != self._token:
            logger.info("remote_refresh_discarded", namespace=namespace)
            return False
        self.store.replace_all(expenses)
        return True

    def push_upsert(self, expenses: Sequence[Expense]) -> None:
        """Schedule an identity-keyed write of committed local expenses."""
        if not self._namespace or not expenses:
            return
        namespace = self._namespace
        batch = list(expenses)
        self._schedule(self._push(namespace, "upsert", lambda: self.remote.upsert(namespace, batch)))

    def push_delete(self, expense_id: str) -> None:
        """Schedule a scoped remote delete of a committed local delete."""
        if not self._namespace:
            return
        namespace = self._namespace
        self._schedule(self._push(namespace, "delete", lambda: self.remote.delete(namespace, expense_id)))

    async def drain(self) -> None:
        """Wait for every in-flight push and refresh to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        """Finish in-flight work and deactivate."""
        await self.drain()
        self.deactivate()

    def _on_remote_change(self, event: ChangeEvent) -> None:
        if event.namespace != self._namespace:
            return
        self._schedule(self.refresh())

    async def _push(
        self, namespace: str, kind: str, operation: Callable[[], Awaitable[None]]
    ) -> None:
        # At-most-once: failures are logged, never retried or rolled back
        try:
            await operation()
        except Exception as e:
            logger.warning("remote_push_failed", namespace=namespace, kind=kind, error=str(e))

    def _schedule(self, coro: Coroutine) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            logger.warning("remote_call_dropped", namespace=self._namespace, reason="no running event loop")
            return
        task = loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
