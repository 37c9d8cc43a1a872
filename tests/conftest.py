"""
Pytest configuration for the jsonstash test suite.

This conftest.py provides:
- Quiet logging (suppresses console output)
- Temporary directories and connected stores
- Cleanup of the process-wide store between tests
"""

import os
import shutil
import tempfile
from pathlib import Path

import pytest
import pytest_asyncio

from jsonstash.logging_config import setup_logging


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Keep log output off the console during test runs."""
    os.environ.setdefault("JSONSTASH_QUIET", "1")


# ============================================================================
# LOGGING FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Quiet mode by default - suppress console logs for clean test output.
    """
    setup_logging(level="DEBUG", suppress_console=True, enable_file_logging=False, force=True)


# ============================================================================
# TEMPORARY DIRECTORY FIXTURES
# ============================================================================

@pytest.fixture
def temp_dir():
    """Create a temporary directory that's cleaned up after the test."""
    tmp = Path(tempfile.mkdtemp(prefix="jsonstash_test_"))
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


# ============================================================================
# STORE FIXTURES
# ============================================================================

@pytest_asyncio.fixture
async def store(temp_dir):
    """
    A connected SQLiteJsonStore on a fresh file with an "items" collection.
    """
    from jsonstash.storage.sqlite import SQLiteJsonStore

    s = SQLiteJsonStore(temp_dir / "test.db")
    await s.connect()
    await s.prepare_collection("items")
    yield s
    await s.close()


@pytest_asyncio.fixture
async def fresh_registry():
    """Close any process-wide store before and after the test."""
    import jsonstash.registry as registry_module

    # Fresh lock per test: each test runs on its own event loop
    registry_module._lock = None
    await registry_module.close_store()
    yield
    await registry_module.close_store()
    registry_module._lock = None
