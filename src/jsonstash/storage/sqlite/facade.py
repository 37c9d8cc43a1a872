"""
SQLite Storage Facade

Public API of the JSON key-value store. Builds statements through the schema
module, runs them through the persistence layer and converts rows with the
codec.
"""

from pathlib import Path
from typing import Any, List, Optional, Tuple, Type, TypeVar, Union

import aiosqlite

from jsonstash.logging_config import logger
from jsonstash.schemas import Entry
from jsonstash.storage.sqlite import schema
from jsonstash.storage.sqlite.codec import decode_value, encode_value
from jsonstash.storage.sqlite.config import KEY_COLUMN, VALUE_COLUMN
from jsonstash.storage.sqlite.persistence import SQLitePersistence

T = TypeVar("T")


class SQLiteJsonStore:
    """
    JSON documents keyed by string id, one SQLite table per collection.

    Every operation is a single parameter-bound statement that autocommits.
    Collection names are validated before any SQL is built.

    Usage:
        async with SQLiteJsonStore("app.db") as store:
            await store.prepare_collection("items")
            await store.set_by_key("items", "a", {"n": 1}, is_update=False)
            value, found = await store.get_by_key("items", "a")

    Args:
        db_path: Path to the .db file (created if absent), or ':memory:'
        create_dirs: Create missing parent directories on connect
    """

    def __init__(self, db_path: Union[str, Path], create_dirs: bool = False):
        self.persistence = SQLitePersistence(db_path, create_dirs=create_dirs)

    # ========== CONNECTION MANAGEMENT ==========

    @property
    def path(self) -> str:
        return self.persistence.db_path

    @property
    def is_open(self) -> bool:
        return self.persistence.is_open

    @property
    def database(self) -> aiosqlite.Connection:
        """Underlying aiosqlite connection."""
        return self.persistence.database

    async def connect(self) -> "SQLiteJsonStore":
        await self.persistence.connect()
        return self

    async def close(self) -> None:
        await self.persistence.close()

    async def __aenter__(self) -> "SQLiteJsonStore":
        return await self.connect()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # ========== COLLECTIONS ==========

    async def prepare_collection(self, name: str) -> None:
        """Create the collection table if it does not exist."""
        await self.persistence.execute(schema.create_collection_sql(name), collection=name)
        logger.debug(f"Prepared collection: {name}")

    # ========== READS ==========

    async def get_all(self, name: str) -> List[Entry]:
        """Every entry in the collection, in storage order."""
        rows = await self.persistence.fetch_all(schema.select_all_sql(name), collection=name)
        return self._rows_to_entries(name, rows)

    async def get_by_key(
        self, name: str, key: str, as_type: Optional[Type[T]] = None
    ) -> Tuple[Optional[Any], bool]:
        """
        Exact-match lookup.

        Args:
            name: Collection name
            key: Row id
            as_type: Optional type (pydantic model, TypedDict, list[int], ...)
                the decoded value is validated into

        Returns:
            (value, True) when the key exists, (None, False) otherwise

        Raises:
            DecodeError: If the stored JSON is corrupt or fails validation
        """
        row = await self.persistence.fetch_one(
            schema.select_by_key_sql(name), (key,), collection=name, key=key
        )
        if row is None:
            return None, False
        return decode_value(row[VALUE_COLUMN], name, key, as_type), True

    async def get_by_prefix(self, name: str, prefix: str) -> List[Entry]:
        """
        Entries whose id starts with `prefix`.

        '%' and '_' in the prefix match literally. Matching follows SQLite
        LIKE, which ignores ASCII case.
        """
        rows = await self.persistence.fetch_all(
            schema.select_by_prefix_sql(name),
            (schema.escape_like_prefix(prefix),),
            collection=name,
        )
        return self._rows_to_entries(name, rows)

    # ========== WRITES ==========

    async def set_by_key(self, name: str, key: str, value: Any, is_update: bool) -> Any:
        """
        Insert or update a single entry.

        The caller decides which: an update of a missing key changes nothing
        and raises nothing; an insert of an existing key raises
        ConstraintViolation.

        Returns:
            The value passed in
        """
        encoded = encode_value(value)
        if is_update:
            changed = await self.persistence.execute(
                schema.update_sql(name), (encoded, key), collection=name, key=key
            )
            if changed == 0:
                logger.debug(f"Update of missing key {key!r} in {name} affected no rows")
        else:
            await self.persistence.execute(
                schema.insert_sql(name), (key, encoded), collection=name, key=key
            )
        return value

    async def upsert_by_key(self, name: str, key: str, value: Any) -> Any:
        """Insert the entry, or replace its value if the key exists."""
        await self.persistence.execute(
            schema.upsert_sql(name), (key, encode_value(value)), collection=name, key=key
        )
        return value

    async def delete_all(self, name: str) -> int:
        """Remove every entry. Returns the number of rows removed."""
        removed = await self.persistence.execute(schema.delete_all_sql(name), collection=name)
        logger.debug(f"Deleted {removed} rows from {name}")
        return removed

    async def delete_by_key(self, name: str, key: str) -> int:
        """Remove one entry. Returns 1 if it existed, else 0."""
        return await self.persistence.execute(
            schema.delete_by_key_sql(name), (key,), collection=name, key=key
        )

    # ========== HELPERS ==========

    @staticmethod
    def _rows_to_entries(name: str, rows) -> List[Entry]:
        # json.loads output is already a JsonValue; skip re-validation
        return [
            Entry.model_construct(
                id=row[KEY_COLUMN],
                value=decode_value(row[VALUE_COLUMN], name, row[KEY_COLUMN]),
            )
            for row in rows
        ]
