"""Shared household store backed by any SQLAlchemy database."""

import asyncio
from typing import Sequence, Union

import structlog
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ledgerbook.database.mappers import expense_to_shared_values, shared_expense_to_domain
from ledgerbook.database.models import (
    HouseholdRevision,
    SharedBase,
    SharedExpense,
    create_session_factory,
)
from ledgerbook.domain.entities import Expense
from ledgerbook.remote.base import (
    ChangeCallback,
    ChangeEvent,
    RemoteStore,
    RemoteStoreError,
    Subscription,
)

logger = structlog.get_logger(__name__)


class _PollingSubscription(Subscription):
    def __init__(self, task: "asyncio.Task[None]"):
        self._task = task

    def cancel(self) -> None:
        if not self._task.done():
            self._task.cancel()

    @property
    def active(self) -> bool:
        return not self._task.done()


class SQLAlchemyRemoteStore(RemoteStore):
    """Remote store keeping every household in one pair of shared tables.

    Each write bumps the namespace's row in ``household_revisions``;
    subscriptions poll that counter and report any movement as a change.
    """

    def __init__(self, database_url: Union[str, URL], poll_interval: float = 5.0):
        """Initialize the shared store.

        Args:
            database_url: SQLAlchemy URL of the shared database
            poll_interval: Seconds between revision checks for subscriptions
        """
        self.database_url = database_url
        self.poll_interval = poll_interval
        try:
            engine_options = {"pool_pre_ping": True}
            if make_url(database_url).drivername.startswith("sqlite"):
                # Sessions run on worker threads
                engine_options["connect_args"] = {"check_same_thread": False}
            self.session_factory = create_session_factory(
                database_url, base=SharedBase, **engine_options
            )
        except SQLAlchemyError as e:
            raise RemoteStoreError(f"Could not connect to shared store: {e}") from e

    def _bump_revision(self, session: Session, namespace: str) -> None:
        row = session.get(HouseholdRevision, namespace)
        if row is None:
            session.add(HouseholdRevision(namespace=namespace, revision=1))
        else:
            row.revision += 1

    def get_revision(self, namespace: str) -> int:
        """Return the current change counter of a namespace (0 if never written).

        Blocking; async callers go through a worker thread.
        """
        try:
            with self.session_factory() as session:
                row = session.get(HouseholdRevision, namespace)
                return 0 if row is None else row.revision
        except SQLAlchemyError as e:
            raise RemoteStoreError(f"Could not read revision of '{namespace}': {e}") from e

    def _read_partition(self, namespace: str) -> list[Expense]:
        try:
            with self.session_factory() as session:
                rows = (
                    session.query(SharedExpense)
                    .filter(SharedExpense.namespace == namespace)
                    .order_by(SharedExpense.date.desc())
                    .all()
                )
                return [shared_expense_to_domain(row) for row in rows]
        except SQLAlchemyError as e:
            raise RemoteStoreError(f"Could not read household '{namespace}': {e}") from e

    def _write_partition(self, namespace: str, expenses: Sequence[Expense]) -> None:
        try:
            with self.session_factory() as session, session.begin():
                for expense in expenses:
                    session.merge(SharedExpense(**expense_to_shared_values(namespace, expense)))
                self._bump_revision(session, namespace)
        except SQLAlchemyError as e:
            raise RemoteStoreError(f"Could not write to household '{namespace}': {e}") from e

    def _delete_from_partition(self, namespace: str, expense_id: str) -> None:
        try:
            with self.session_factory() as session, session.begin():
                session.query(SharedExpense).filter(
                    SharedExpense.namespace == namespace,
                    SharedExpense.id == expense_id,
                ).delete(synchronize_session=False)
                self._bump_revision(session, namespace)
        except SQLAlchemyError as e:
            raise RemoteStoreError(f"Could not delete from household '{namespace}': {e}") from e

    async def fetch_all(self, namespace: str) -> list[Expense]:
        return await asyncio.to_thread(self._read_partition, namespace)

    async def upsert(self, namespace: str, expenses: Sequence[Expense]) -> None:
        if not expenses:
            return
        await asyncio.to_thread(self._write_partition, namespace, list(expenses))

    async def delete(self, namespace: str, expense_id: str) -> None:
        await asyncio.to_thread(self._delete_from_partition, namespace, expense_id)

    def subscribe(self, namespace: str, callback: ChangeCallback) -> Subscription:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise RemoteStoreError("Subscriptions need a running event loop") from e
        # Baseline read before returning so writes made after subscribe are seen
        revision = self.get_revision(namespace)
        task = loop.create_task(self._poll(namespace, callback, revision))
        return _PollingSubscription(task)

    async def _poll(self, namespace: str, callback: ChangeCallback, revision: int) -> None:
        last_seen = revision
        while True:
            await asyncio.sleep(self.poll_interval)
            try:
                current = await asyncio.to_thread(self.get_revision, namespace)
            except RemoteStoreError as e:
                logger.warning("remote_poll_failed", namespace=namespace, error=str(e))
                continue
            if current == last_seen:
                continue
            last_seen = current
            try:
                callback(ChangeEvent(namespace=namespace))
            except Exception as e:
                logger.warning("remote_subscriber_failed", namespace=namespace, error=str(e))

    async def close(self) -> None:
        self.session_factory.kw["bind"].dispose()
