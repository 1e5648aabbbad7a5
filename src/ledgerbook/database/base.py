"""Abstract local storage interface."""

from abc import ABC, abstractmethod
from typing import Optional

# Slot holding the serialized expense array (last known state, for offline use)
EXPENSES_SLOT = "ledgerbook.expenses.v1"
# Slot holding the configured household namespace
HOUSEHOLD_SLOT = "ledgerbook.household"


class LocalStorage(ABC):
    """Abstract keyed-slot storage used for the local expense cache."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the storage backend."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the storage backend."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize storage schema (create tables)."""
        pass

    @abstractmethod
    def read_slot(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if the slot is empty."""
        pass

    @abstractmethod
    def write_slot(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def delete_slot(self, key: str) -> None:
        """Remove the slot if present."""
        pass
