"""
SQLite Storage Configuration

Centralized configuration for the SQLite storage subsystem.
"""

# Connection settings
DEFAULT_TIMEOUT = 30.0
ENABLE_WAL_MODE = True

# Collection names become table identifiers
MAX_COLLECTION_NAME_LENGTH = 64
COLLECTION_NAME_PATTERN = r"[A-Za-z_][A-Za-z0-9_]*"

# Escape character for LIKE prefix scans
LIKE_ESCAPE_CHAR = "\\"

# Column names of every collection table
KEY_COLUMN = "ID"
VALUE_COLUMN = "json"
