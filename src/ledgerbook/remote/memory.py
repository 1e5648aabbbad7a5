"""In-process remote store."""

from typing import Sequence

import structlog

from ledgerbook.domain.entities import Expense
from ledgerbook.remote.base import ChangeCallback, ChangeEvent, RemoteStore, Subscription

logger = structlog.get_logger(__name__)


class _MemorySubscription(Subscription):
    def __init__(self, store: "InMemoryRemoteStore", namespace: str, callback: ChangeCallback):
        self._store = store
        self.namespace = namespace
        self.callback = callback
        self._active = True

    def cancel(self) -> None:
        if self._active:
            self._active = False
            self._store._unsubscribe(self)

    @property
    def active(self) -> bool:
        return self._active


class InMemoryRemoteStore(RemoteStore):
    """Remote store kept in a dict of namespace -> {id: expense}.

    Subscribers of a namespace are notified synchronously after each write,
    so several ledgers in one process can share a household.
    """

    def __init__(self):
        self._partitions: dict[str, dict[str, Expense]] = {}
        self._subscriptions: list[_MemorySubscription] = []

    def partition(self, namespace: str) -> list[Expense]:
        """Return the namespace contents, newest date first."""
        records = list(self._partitions.get(namespace, {}).values())
        return sorted(records, key=lambda expense: expense.date, reverse=True)

    async def fetch_all(self, namespace: str) -> list[Expense]:
        return self.partition(namespace)

    async def upsert(self, namespace: str, expenses: Sequence[Expense]) -> None:
        partition = self._partitions.setdefault(namespace, {})
        for expense in expenses:
            partition[expense.id] = expense
        self._notify(namespace, "upsert", tuple(expense.id for expense in expenses))

    async def delete(self, namespace: str, expense_id: str) -> None:
        self._partitions.get(namespace, {}).pop(expense_id, None)
        self._notify(namespace, "delete", (expense_id,))

    def subscribe(self, namespace: str, callback: ChangeCallback) -> Subscription:
        subscription = _MemorySubscription(self, namespace, callback)
        self._subscriptions.append(subscription)
        return subscription

    def _unsubscribe(self, subscription: _MemorySubscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def _notify(self, namespace: str, kind: str, expense_ids: tuple[str, ...]) -> None:
        event = ChangeEvent(namespace=namespace, kind=kind, expense_ids=expense_ids)
        for subscription in list(self._subscriptions):
            if subscription.namespace != namespace or not subscription.active:
                continue
            try:
                subscription.callback(event)
            except Exception as e:
                logger.warning("remote_subscriber_failed", namespace=namespace, error=str(e))
