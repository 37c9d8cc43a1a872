"""
Logging for jsonstash.

The store logs connection open/close at INFO, each statement it runs at
DEBUG, and every sqlite3 error it translates at ERROR. Library modules import
`logger` from here; applications call setup_logging() to change the level or
add the file sink.
"""

import sys
import os
from loguru import logger

# Flag to track if logging has been configured
_logging_configured = False


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes")


def setup_logging(level="INFO", suppress_console=None, enable_file_logging=None, force=False):
    """
    Install the jsonstash sinks, replacing any loguru defaults.

    Store messages go to stderr unless JSONSTASH_QUIET is set. A rotating
    .jsonstash/logs/jsonstash.log is added only with JSONSTASH_FILE_LOGGING=1
    or enable_file_logging=True.

    Args:
        level: Logging level (default: INFO)
        suppress_console: If True, suppress console logging. If None, check JSONSTASH_QUIET.
        enable_file_logging: If True, enable file logging. If None, check JSONSTASH_FILE_LOGGING.
        force: Reconfigure even if logging was already set up.
    """
    global _logging_configured

    # Only configure once to avoid duplicate handlers
    if _logging_configured and not force:
        return
    _logging_configured = True

    logger.remove()

    if suppress_console is None:
        suppress_console = _env_flag("JSONSTASH_QUIET")

    if not suppress_console:
        logger.add(
            sys.stderr,
            level=level,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
            colorize=True
        )

    if enable_file_logging is None:
        enable_file_logging = _env_flag("JSONSTASH_FILE_LOGGING")

    if enable_file_logging:
        from jsonstash.paths import get_paths
        paths = get_paths()
        paths.ensure_dirs()

        logger.add(
            paths.log_file,
            level=level,
            rotation="10 MB",
            retention="7 days",
            compression="gz",
            catch=True,
            serialize=False
        )


# Configure the logger on import (will check env vars)
setup_logging()
