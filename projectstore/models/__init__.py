"""
Models package initialization.
"""

from .base import Base, TimestampedModel
from .kv_entry import KeyValueEntry

__all__ = [
    "Base",
    "TimestampedModel",
    "KeyValueEntry",
]
