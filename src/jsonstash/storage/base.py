"""KeyValueDriver protocol for JSON key-value storage backends."""

from typing import Any, List, Optional, Protocol, Tuple, runtime_checkable

from jsonstash.schemas import Entry


@runtime_checkable
class KeyValueDriver(Protocol):
    """Operations every collection-based key-value driver provides."""

    async def prepare_collection(self, name: str) -> None:
        """Create the collection if missing. No-op if it exists."""
        ...

    async def get_all(self, name: str) -> List[Entry]:
        """Return every entry of a collection. Order is unspecified."""
        ...

    async def get_by_key(self, name: str, key: str, as_type: Optional[type] = None) -> Tuple[Optional[Any], bool]:
        """Return (value, True), or (None, False) when the key is absent."""
        ...

    async def get_by_prefix(self, name: str, prefix: str) -> List[Entry]:
        """Return entries whose id starts with prefix."""
        ...

    async def set_by_key(self, name: str, key: str, value: Any, is_update: bool) -> Any:
        """Insert (is_update=False) or update (is_update=True) an entry."""
        ...

    async def upsert_by_key(self, name: str, key: str, value: Any) -> Any:
        """Insert or replace an entry."""
        ...

    async def delete_all(self, name: str) -> int:
        """Delete every entry. Returns the number removed."""
        ...

    async def delete_by_key(self, name: str, key: str) -> int:
        """Delete one entry. Returns 0 or 1."""
        ...
