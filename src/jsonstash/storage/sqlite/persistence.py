"""
SQLite Persistence Layer

Handles the connection lifecycle, statement execution and translation of
sqlite3 errors into the jsonstash exception hierarchy.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List, Optional, Sequence, Union

import aiosqlite

from jsonstash.logging_config import logger
from jsonstash.exceptions import (
    ConstraintViolation,
    MalformedQuery,
    StorageUnavailable,
    StoreNotOpen,
)
from jsonstash.storage.sqlite.config import DEFAULT_TIMEOUT, ENABLE_WAL_MODE

MEMORY_DB = ":memory:"


def normalize_db_path(db_path: Union[str, Path]) -> str:
    """Return an absolute path string, leaving ':memory:' untouched."""
    if str(db_path) == MEMORY_DB:
        return MEMORY_DB
    return str(Path(db_path).expanduser().resolve())


class SQLitePersistence:
    """
    Owns the single aiosqlite connection of a store.

    Responsibilities:
    - Connection creation and configuration
    - Statement execution (each statement autocommits)
    - Error translation
    """

    def __init__(self, db_path: Union[str, Path], create_dirs: bool = False):
        """
        Args:
            db_path: Path to the .db file, or ':memory:'
            create_dirs: Create missing parent directories on connect
        """
        self.db_path = normalize_db_path(db_path)
        self.create_dirs = create_dirs
        self._conn: Optional[aiosqlite.Connection] = None

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    @property
    def database(self) -> aiosqlite.Connection:
        """The underlying connection."""
        if self._conn is None:
            raise StoreNotOpen(f"Store at {self.db_path} is not connected")
        return self._conn

    async def connect(self) -> None:
        """
        Open the database file, creating it if absent.

        Raises:
            StorageUnavailable: If the file cannot be opened or configured
        """
        if self._conn is not None:
            return

        if self.create_dirs and self.db_path != MEMORY_DB:
            try:
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StorageUnavailable(self.db_path, str(e)) from e

        try:
            # isolation_level=None: every statement is its own autocommit unit
            conn = await aiosqlite.connect(
                self.db_path, timeout=DEFAULT_TIMEOUT, isolation_level=None
            )
        except sqlite3.Error as e:
            raise StorageUnavailable(self.db_path, str(e)) from e

        try:
            conn.row_factory = aiosqlite.Row
            if ENABLE_WAL_MODE and self.db_path != MEMORY_DB:
                await conn.execute("PRAGMA journal_mode = WAL")
            await conn.execute(f"PRAGMA busy_timeout = {int(DEFAULT_TIMEOUT * 1000)}")
        except sqlite3.Error as e:
            await conn.close()
            raise StorageUnavailable(self.db_path, str(e)) from e

        self._conn = conn
        logger.info(f"Opened SQLite store at {self.db_path}")

    async def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        await conn.close()
        logger.info(f"Closed SQLite store at {self.db_path}")

    @contextmanager
    def translate_errors(
        self, collection: Optional[str] = None, key: Optional[str] = None
    ) -> Iterator[None]:
        """Map sqlite3 exceptions raised inside the block to jsonstash errors."""
        try:
            yield
        except sqlite3.IntegrityError as e:
            logger.error(f"Constraint violation in {collection!r} for key {key!r}: {e}")
            raise ConstraintViolation(collection or "?", key or "?") from e
        except sqlite3.OperationalError as e:
            message = str(e)
            logger.error(f"SQLite operational error in {collection!r}: {message}")
            if message.startswith("no such table"):
                raise MalformedQuery(
                    f"Collection '{collection}' does not exist; call prepare_collection() first"
                ) from e
            if "syntax error" in message:
                raise MalformedQuery(message) from e
            raise StorageUnavailable(self.db_path, message) from e
        except sqlite3.ProgrammingError as e:
            logger.error(f"SQLite programming error in {collection!r}: {e}")
            raise MalformedQuery(str(e)) from e
        except sqlite3.DatabaseError as e:
            logger.error(f"SQLite database error in {collection!r}: {e}")
            raise StorageUnavailable(self.db_path, str(e)) from e

    async def execute(
        self,
        sql: str,
        params: Sequence[Any] = (),
        collection: Optional[str] = None,
        key: Optional[str] = None,
    ) -> int:
        """
        Run a write statement.

        Returns:
            Number of rows changed (SQLite reports -1 for DDL)
        """
        conn = self.database
        logger.debug(f"execute: {sql.strip()} params={len(params)}")
        with self.translate_errors(collection, key):
            async with conn.execute(sql, params) as cursor:
                return cursor.rowcount

    async def fetch_one(
        self,
        sql: str,
        params: Sequence[Any] = (),
        collection: Optional[str] = None,
        key: Optional[str] = None,
    ) -> Optional[sqlite3.Row]:
        conn = self.database
        logger.debug(f"fetch_one: {sql.strip()}")
        with self.translate_errors(collection, key):
            async with conn.execute(sql, params) as cursor:
                return await cursor.fetchone()

    async def fetch_all(
        self,
        sql: str,
        params: Sequence[Any] = (),
        collection: Optional[str] = None,
    ) -> List[sqlite3.Row]:
        conn = self.database
        logger.debug(f"fetch_all: {sql.strip()}")
        with self.translate_errors(collection):
            async with conn.execute(sql, params) as cursor:
                rows = await cursor.fetchall()
        return list(rows)
