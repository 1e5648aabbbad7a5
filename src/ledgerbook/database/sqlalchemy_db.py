"""SQLAlchemy implementation of the local slot storage."""

from datetime import datetime, UTC
from typing import Optional

from sqlalchemy.orm import Session

from ledgerbook.database.base import LocalStorage
from ledgerbook.database.models import StorageSlot, create_session_factory


class SQLAlchemyStorage(LocalStorage):
    """SQLAlchemy-based implementation of LocalStorage."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy storage.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    def read_slot(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if the slot is empty."""
        session = self._get_session()
        slot = session.get(StorageSlot, key)
        if slot is None:
            return None
        return slot.value

    def write_slot(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        session = self._get_session()
        try:
            slot = session.get(StorageSlot, key)
            if slot is None:
                session.add(StorageSlot(key=key, value=value))
            else:
                slot.value = value
                slot.updated_at = datetime.now(UTC)
            session.commit()
        except Exception:
            session.rollback()
            raise

    def delete_slot(self, key: str) -> None:
        """Remove the slot if present."""
        session = self._get_session()
        slot = session.get(StorageSlot, key)
        if slot is not None:
            session.delete(slot)
            session.commit()
