"""
Defines the declarative base for SQLAlchemy ORM models used by local storage.

Rows carry an update timestamp that is refreshed automatically whenever
the row is written.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampedModel(Base):
    """
    Base model class for locally persisted rows.

    :ivar updated_at: Timestamp of the last write to the row.
    :type updated_at: datetime
    """

    __abstract__ = True

    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
