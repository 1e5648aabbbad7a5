"""SQLAlchemy models for ledgerbook storage.

``Base`` holds the local slot table. ``SharedBase`` holds the tables of the
shared household store, which normally live in a different database.
"""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    PrimaryKeyConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()
SharedBase = declarative_base()


class StorageSlot(Base):
    """Keyed slot in the local cache."""

    __tablename__ = "storage_slots"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class SharedExpense(SharedBase):
    """Expense row in a shared household partition."""

    __tablename__ = "shared_expenses"

    namespace = Column(String, nullable=False)
    id = Column(String, nullable=False)
    date = Column(String, nullable=False, index=True)
    from_ = Column("from", String, nullable=False, default="")
    to = Column(String, nullable=False, default="")
    category = Column(String, nullable=False, default="")
    # Decimal text, lossless on every backend
    amount = Column(String, nullable=False)
    spender = Column(String, nullable=False, default="")
    note = Column(Text, nullable=False, default="")
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (PrimaryKeyConstraint("namespace", "id", name="pk_shared_expenses"),)


class HouseholdRevision(SharedBase):
    """Per-namespace change counter polled by subscribers."""

    __tablename__ = "household_revisions"

    namespace = Column(String, primary_key=True)
    revision = Column(Integer, nullable=False, default=0)


def create_session_factory(database_url: str, base=Base, **engine_options) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory and the tables of ``base``."""
    engine = create_engine(database_url, echo=False, **engine_options)
    base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
