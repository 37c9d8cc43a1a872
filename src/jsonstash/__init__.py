"""
jsonstash - JSON key-value collections on SQLite

Async adapter storing JSON values by string key, one table per collection.
"""

__version__ = "1.0.0"

# Core exports
from jsonstash.exceptions import (
    ConstraintViolation,
    DecodeError,
    EncodeError,
    JsonStashError,
    MalformedQuery,
    StorageUnavailable,
    StoreAlreadyOpen,
    StoreNotOpen,
)
from jsonstash.registry import close_store, get_store, open_store
from jsonstash.schemas import Entry
from jsonstash.storage import KeyValueDriver, SQLiteJsonStore

__all__ = [
    "__version__",
    "open_store",
    "get_store",
    "close_store",
    "SQLiteJsonStore",
    "KeyValueDriver",
    "Entry",
    "JsonStashError",
    "StorageUnavailable",
    "ConstraintViolation",
    "MalformedQuery",
    "DecodeError",
    "EncodeError",
    "StoreNotOpen",
    "StoreAlreadyOpen",
]
