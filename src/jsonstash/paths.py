"""
jsonstash Path Configuration

Default on-disk locations. All paths are relative to the project root
(current working directory) unless an explicit root is given.

Directory Structure:
.jsonstash/
├── stash.db      # Default SQLite database
└── logs/         # Log files (only with JSONSTASH_FILE_LOGGING=1)
"""

from pathlib import Path
from typing import Optional


class StashPaths:
    """
    Centralized path configuration for jsonstash.

    All paths are lazily resolved relative to project_root.
    Default project_root is current working directory.
    """

    STASH_DIR = ".jsonstash"
    DB_NAME = "stash.db"
    LOGS_DIR = "logs"
    LOG_NAME = "jsonstash.log"

    def __init__(self, project_root: Optional[Path] = None):
        self._project_root = project_root

    @property
    def project_root(self) -> Path:
        """Get the project root directory."""
        if self._project_root is None:
            return Path.cwd()
        return self._project_root

    @property
    def stash_dir(self) -> Path:
        return self.project_root / self.STASH_DIR

    @property
    def default_db(self) -> Path:
        """Database used when open_store() is called without a path."""
        return self.stash_dir / self.DB_NAME

    @property
    def logs_dir(self) -> Path:
        return self.stash_dir / self.LOGS_DIR

    @property
    def log_file(self) -> Path:
        return self.logs_dir / self.LOG_NAME

    def ensure_dirs(self) -> None:
        """Create all necessary directories if they don't exist."""
        self.stash_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(exist_ok=True)


# Global instance for convenience
_default_paths: Optional[StashPaths] = None


def get_paths(project_root: Optional[Path] = None) -> StashPaths:
    """
    Get the paths configuration.

    Args:
        project_root: Optional project root override

    Returns:
        StashPaths instance
    """
    global _default_paths
    if project_root is not None:
        return StashPaths(project_root)
    if _default_paths is None:
        _default_paths = StashPaths()
    return _default_paths


def reset_paths() -> None:
    """Reset the global paths instance (useful for testing)."""
    global _default_paths
    _default_paths = None
