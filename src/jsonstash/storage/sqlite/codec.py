"""
JSON encoding at the storage boundary.

Values go in as JSON text and come back out as plain Python structures, or
validated into a caller-supplied type through a pydantic TypeAdapter.
"""

import json
from functools import lru_cache
from typing import Any, Optional, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from jsonstash.exceptions import DecodeError, EncodeError

T = TypeVar("T")


def encode_value(value: Any) -> str:
    """
    Serialize a value to compact JSON text.

    pydantic models are dumped in JSON mode first so they can be stored
    directly.

    Raises:
        EncodeError: If the value is not JSON-representable (cycles, sets,
            NaN/Infinity, nesting past the recursion limit, arbitrary objects)
    """
    if hasattr(value, "model_dump"):
        value = value.model_dump(mode="json")
    try:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError, RecursionError) as e:
        raise EncodeError(f"Value is not JSON-serializable: {e}") from e


@lru_cache(maxsize=128)
def _adapter_for(as_type: Any) -> TypeAdapter:
    return TypeAdapter(as_type)


def decode_value(
    raw: Optional[str],
    collection: str,
    key: str,
    as_type: Optional[Type[T]] = None,
) -> Any:
    """
    Parse stored JSON text.

    Args:
        raw: Contents of the json column
        collection: Collection name (for error reporting)
        key: Row id (for error reporting)
        as_type: Optional type to validate the decoded structure against

    Raises:
        DecodeError: If the text is not valid JSON or fails validation
    """
    if raw is None:
        raise DecodeError(collection, key, "stored value is NULL")
    try:
        decoded = json.loads(raw)
    except (TypeError, ValueError, RecursionError) as e:
        raise DecodeError(collection, key, str(e)) from e

    if as_type is None:
        return decoded

    try:
        return _adapter_for(as_type).validate_python(decoded)
    except ValidationError as e:
        raise DecodeError(collection, key, f"does not match {as_type!r}: {e}") from e
