# Custom exceptions for jsonstash

class JsonStashError(Exception):
    """Base exception for all application-specific errors."""
    pass

class StorageUnavailable(JsonStashError):
    """Raised when the database file cannot be opened or written."""
    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"Storage at {path} unavailable: {message}")

class ConstraintViolation(JsonStashError):
    """Raised when an insert collides with an existing key."""
    def __init__(self, collection: str, key: str):
        self.collection = collection
        self.key = key
        super().__init__(f"Key '{key}' already exists in collection '{collection}'")

class MalformedQuery(JsonStashError):
    """Raised for invalid collection names or statements SQLite rejects."""
    pass

class DecodeError(JsonStashError):
    """Raised when a stored value cannot be decoded."""
    def __init__(self, collection: str, key: str, message: str):
        self.collection = collection
        self.key = key
        self.message = message
        super().__init__(
            f"Failed to decode '{key}' in collection '{collection}': {message}"
        )

class EncodeError(JsonStashError):
    """Raised when a value cannot be serialized to JSON."""
    pass


class StoreNotOpen(JsonStashError):
    """Raised when a store is used before it is connected."""
    pass


class StoreAlreadyOpen(JsonStashError):
    """Raised when the process-wide store is reopened with another path."""

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(
            f"A store is already open at {current}; refusing to open {requested}. "
            "Call close_store() first."
        )
