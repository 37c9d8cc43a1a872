"""
Process-wide store accessor.

Applications that prefer explicit wiring construct a SQLiteJsonStore and pass
it around. Code that needs a shared handle calls open_store() once at startup
and get_store() afterwards.
"""

import asyncio
from pathlib import Path
from typing import Optional, Union

from jsonstash.logging_config import logger
from jsonstash.exceptions import StoreAlreadyOpen, StoreNotOpen
from jsonstash.paths import get_paths
from jsonstash.storage.sqlite import SQLiteJsonStore
from jsonstash.storage.sqlite.persistence import normalize_db_path

_store: Optional[SQLiteJsonStore] = None
_lock: Optional[asyncio.Lock] = None


def _get_lock() -> asyncio.Lock:
    global _lock
    if _lock is None:
        _lock = asyncio.Lock()
    return _lock


async def open_store(path: Union[str, Path, None] = None) -> SQLiteJsonStore:
    """
    Open the process-wide store, or return it if already open.

    Args:
        path: Database file. Defaults to .jsonstash/stash.db under the
            working directory on first open; ignored afterwards.

    Returns:
        The shared, connected SQLiteJsonStore

    Raises:
        StoreAlreadyOpen: If a store is open at a different path
        StorageUnavailable: If the database file cannot be opened
    """
    global _store
    async with _get_lock():
        if _store is not None:
            if path is not None and normalize_db_path(path) != _store.path:
                raise StoreAlreadyOpen(_store.path, normalize_db_path(path))
            return _store

        if path is None:
            store = SQLiteJsonStore(get_paths().default_db, create_dirs=True)
        else:
            store = SQLiteJsonStore(path)
        await store.connect()
        _store = store
        logger.debug(f"Registered process-wide store at {store.path}")
        return _store


def get_store() -> SQLiteJsonStore:
    """Return the open process-wide store."""
    if _store is None:
        raise StoreNotOpen("No store is open; call open_store() first")
    return _store


async def close_store() -> None:
    """Close and forget the process-wide store. No-op if none is open."""
    global _store
    async with _get_lock():
        store, _store = _store, None
        if store is not None:
            await store.close()
