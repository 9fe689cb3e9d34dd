"""
Key-value row backing the durable local storage.
"""

from sqlalchemy import Column, String, Text

from .base import TimestampedModel


class KeyValueEntry(TimestampedModel):
    """
    One persisted payload, addressed by its storage key.
    """

    __tablename__ = "kv_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
