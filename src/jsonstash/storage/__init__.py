"""
Storage layer for jsonstash.

JSON values keyed by string id, grouped into collections, persisted in SQLite.
"""

from .base import KeyValueDriver
from .sqlite import SQLiteJsonStore

__all__ = [
    "KeyValueDriver",
    "SQLiteJsonStore",
]
