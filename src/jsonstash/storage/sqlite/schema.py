"""
SQLite Schema Definitions

Every collection is one table with the same two columns. Collection names are
validated and quoted here; nothing else in the package builds SQL text from
caller input.
"""

import re

from jsonstash.exceptions import MalformedQuery
from jsonstash.storage.sqlite.config import (
    COLLECTION_NAME_PATTERN,
    KEY_COLUMN,
    LIKE_ESCAPE_CHAR,
    MAX_COLLECTION_NAME_LENGTH,
    VALUE_COLUMN,
)

_NAME_RE = re.compile(rf"^{COLLECTION_NAME_PATTERN}$")

# Table template for a collection
COLLECTION_DDL = (
    'CREATE TABLE IF NOT EXISTS {table} '
    f'({KEY_COLUMN} TEXT PRIMARY KEY, {VALUE_COLUMN} TEXT)'
)


def validate_collection_name(name: str) -> str:
    """
    Check that a collection name is a safe SQL identifier.

    Args:
        name: Caller-supplied collection name

    Returns:
        The name unchanged

    Raises:
        MalformedQuery: If the name is empty, too long, reserved, or contains
            anything other than letters, digits and underscores
    """
    if not isinstance(name, str) or not name:
        raise MalformedQuery("Collection name must be a non-empty string")
    if len(name) > MAX_COLLECTION_NAME_LENGTH:
        raise MalformedQuery(
            f"Collection name exceeds {MAX_COLLECTION_NAME_LENGTH} characters: {name[:16]}..."
        )
    if not _NAME_RE.match(name):
        raise MalformedQuery(f"Invalid collection name: {name!r}")
    # SQLite reserves the sqlite_ prefix for internal tables
    if name.lower().startswith("sqlite_"):
        raise MalformedQuery(f"Collection name uses reserved prefix: {name!r}")
    return name


def quote_identifier(name: str) -> str:
    """Validate and double-quote a collection name for use as a table identifier."""
    return f'"{validate_collection_name(name)}"'


def escape_like_prefix(prefix: str) -> str:
    """
    Build a LIKE pattern that matches ids starting with `prefix` literally.

    The escape character, '%' and '_' are escaped so they lose their
    wildcard meaning. Use with ESCAPE LIKE_ESCAPE_CHAR.

    Examples:
        escape_like_prefix("user:")   -> "user:%"
        escape_like_prefix("50%_off") -> "50\\%\\_off%"
    """
    escaped = (
        prefix.replace(LIKE_ESCAPE_CHAR, LIKE_ESCAPE_CHAR * 2)
        .replace("%", LIKE_ESCAPE_CHAR + "%")
        .replace("_", LIKE_ESCAPE_CHAR + "_")
    )
    return escaped + "%"


def create_collection_sql(name: str) -> str:
    return COLLECTION_DDL.format(table=quote_identifier(name))


def select_all_sql(name: str) -> str:
    return f"SELECT {KEY_COLUMN}, {VALUE_COLUMN} FROM {quote_identifier(name)}"


def select_by_key_sql(name: str) -> str:
    return f"SELECT {VALUE_COLUMN} FROM {quote_identifier(name)} WHERE {KEY_COLUMN} = ?"


def select_by_prefix_sql(name: str) -> str:
    return (
        f"SELECT {KEY_COLUMN}, {VALUE_COLUMN} FROM {quote_identifier(name)} "
        f"WHERE {KEY_COLUMN} LIKE ? ESCAPE '{LIKE_ESCAPE_CHAR}'"
    )


def insert_sql(name: str) -> str:
    return f"INSERT INTO {quote_identifier(name)} ({KEY_COLUMN}, {VALUE_COLUMN}) VALUES (?, ?)"


def update_sql(name: str) -> str:
    return f"UPDATE {quote_identifier(name)} SET {VALUE_COLUMN} = ? WHERE {KEY_COLUMN} = ?"


def upsert_sql(name: str) -> str:
    return f"""
        INSERT INTO {quote_identifier(name)} ({KEY_COLUMN}, {VALUE_COLUMN}) VALUES (?, ?)
        ON CONFLICT({KEY_COLUMN}) DO UPDATE SET
            {VALUE_COLUMN}=excluded.{VALUE_COLUMN}
    """


def delete_all_sql(name: str) -> str:
    return f"DELETE FROM {quote_identifier(name)}"


def delete_by_key_sql(name: str) -> str:
    return f"DELETE FROM {quote_identifier(name)} WHERE {KEY_COLUMN} = ?"
