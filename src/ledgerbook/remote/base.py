"""Abstract interface of the shared household record store.

A remote store is a partitioned keyed record store: every call is scoped to
one household namespace, writes are identity-keyed overwrites, and
subscribers get a payload-free "something changed" event.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Sequence

if TYPE_CHECKING:
    from ledgerbook.domain.entities import Expense


@dataclass(frozen=True)
class ChangeEvent:
    """Notification that something changed in a household partition."""

    namespace: str
    kind: str = "change"
    expense_ids: tuple[str, ...] = ()


ChangeCallback = Callable[[ChangeEvent], None]


class RemoteStoreError(Exception):
    """A remote store operation failed."""


class Subscription(ABC):
    """Handle returned by RemoteStore.subscribe."""

    @abstractmethod
    def cancel(self) -> None:
        """Stop delivering change events. Safe to call more than once."""
        pass

    @property
    @abstractmethod
    def active(self) -> bool:
        """True until cancel() is called."""
        pass


class RemoteStore(ABC):
    """Abstract shared record store, partitioned by household namespace."""

    @abstractmethod
    async def fetch_all(self, namespace: str) -> list["Expense"]:
        """Return every expense of the namespace, newest date first.

        Raises:
            RemoteStoreError: If the store cannot be read
        """
        pass

    @abstractmethod
    async def upsert(self, namespace: str, expenses: Sequence["Expense"]) -> None:
        """Insert or replace expenses by id within the namespace.

        Raises:
            RemoteStoreError: If the write fails
        """
        pass

    @abstractmethod
    async def delete(self, namespace: str, expense_id: str) -> None:
        """Delete one expense by id within the namespace.

        Raises:
            RemoteStoreError: If the delete fails
        """
        pass

    @abstractmethod
    def subscribe(self, namespace: str, callback: ChangeCallback) -> Subscription:
        """Call ``callback`` whenever the namespace changes, whatever the origin.

        Raises:
            RemoteStoreError: If the subscription cannot be established
        """
        pass

    async def close(self) -> None:
        """Release backend resources."""
        pass
