"""Shared household stores."""

from ledgerbook.remote.base import ChangeEvent, RemoteStore, RemoteStoreError, Subscription
from ledgerbook.remote.memory import InMemoryRemoteStore
from ledgerbook.remote.sqlalchemy_remote import SQLAlchemyRemoteStore
from ledgerbook.remote.factories import create_remote_store

__all__ = [
    "ChangeEvent",
    "RemoteStore",
    "RemoteStoreError",
    "Subscription",
    "InMemoryRemoteStore",
    "SQLAlchemyRemoteStore",
    "create_remote_store",
]
