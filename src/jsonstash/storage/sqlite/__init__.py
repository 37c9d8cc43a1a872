"""
SQLite Storage Package

Public API:
- SQLiteJsonStore: Main facade for storage operations

Internal Modules:
- schema: Collection name validation and statement builders
- persistence: Connection lifecycle, execution, error translation
- codec: JSON encode/decode at the boundary
- config: Configuration constants
"""

from jsonstash.storage.sqlite.facade import SQLiteJsonStore

__all__ = ['SQLiteJsonStore']
