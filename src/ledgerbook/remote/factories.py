"""Factory for the configured shared household store."""

from typing import Optional

from sqlalchemy.engine import make_url

from ledgerbook.config import Settings
from ledgerbook.remote.sqlalchemy_remote import SQLAlchemyRemoteStore


def create_remote_store(settings: Settings) -> Optional[SQLAlchemyRemoteStore]:
    """Create the shared household store, or None when sharing is not configured.

    The remote key is used as the password of the remote database URL
    (file-based SQLite URLs carry no password and ignore it).
    """
    if not settings.remote_enabled:
        return None

    url = make_url(settings.remote_url)
    if not url.drivername.startswith("sqlite"):
        url = url.set(password=settings.remote_key)
    return SQLAlchemyRemoteStore(url, poll_interval=settings.poll_interval)
