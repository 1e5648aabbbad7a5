"""Environment configuration for ledgerbook.

Sharing is enabled only when both remote credentials are present; otherwise
the application runs local-only and household commands are inert.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DB_PATH_ENV = "LEDGERBOOK_DB_PATH"
REMOTE_URL_ENV = "LEDGERBOOK_REMOTE_URL"
REMOTE_KEY_ENV = "LEDGERBOOK_REMOTE_KEY"
POLL_INTERVAL_ENV = "LEDGERBOOK_POLL_INTERVAL"
LOG_LEVEL_ENV = "LEDGERBOOK_LOG_LEVEL"

DEFAULT_POLL_INTERVAL = 5.0


def default_database_path() -> str:
    """Return ~/.ledgerbook/ledgerbook.db, creating the directory."""
    db_dir = Path.home() / ".ledgerbook"
    db_dir.mkdir(exist_ok=True)
    return str(db_dir / "ledgerbook.db")


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration passed into the storage and sync layers."""

    database_path: Optional[str] = None
    remote_url: Optional[str] = None
    remote_key: Optional[str] = None
    poll_interval: float = DEFAULT_POLL_INTERVAL
    log_level: str = "WARNING"

    @property
    def remote_enabled(self) -> bool:
        """True when both remote credentials are configured."""
        return bool(self.remote_url) and bool(self.remote_key)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        database_path: Optional[str] = None,
    ) -> "Settings":
        """Load settings from environment variables.

        Args:
            environ: Mapping to read instead of os.environ
            database_path: Explicit database path overriding LEDGERBOOK_DB_PATH
        """
        env = os.environ if environ is None else environ

        poll_interval = DEFAULT_POLL_INTERVAL
        raw_interval = env.get(POLL_INTERVAL_ENV)
        if raw_interval:
            try:
                poll_interval = max(float(raw_interval), 0.1)
            except ValueError:
                raise ValueError(f"{POLL_INTERVAL_ENV} must be a number, got '{raw_interval}'")

        return cls(
            database_path=database_path or env.get(DB_PATH_ENV) or None,
            remote_url=(env.get(REMOTE_URL_ENV) or "").strip() or None,
            remote_key=(env.get(REMOTE_KEY_ENV) or "").strip() or None,
            poll_interval=poll_interval,
            log_level=(env.get(LOG_LEVEL_ENV) or "WARNING").upper(),
        )
