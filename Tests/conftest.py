"""
Root conftest.py for shared test fixtures and configuration.
This file provides common fixtures used across the test suite.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
import sys

from loguru import logger

# Add project root to Python path for consistent imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from quicknotes.models import Note


# ========== Path and File System Fixtures ==========

@pytest.fixture
def isolated_temp_dir():
    """Create an isolated temporary directory that's always cleaned up."""
    temp_dir = tempfile.mkdtemp(prefix="quicknotes_test_")
    temp_path = Path(temp_dir)
    yield temp_path
    # Ensure cleanup even if test fails
    if temp_path.exists():
        shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def data_dir(isolated_temp_dir):
    """A notes data directory inside the isolated temp dir."""
    path = isolated_temp_dir / "notes"
    path.mkdir()
    return path


# ========== Model Fixtures ==========

@pytest.fixture
def sample_notes():
    """Three notes in display order."""
    return [
        Note(id=1, title="Groceries", body="milk, eggs", modified=1_700_000_000),
        Note(id=2, title="Ideas", body="terminal note app", modified=1_700_000_100),
        Note(id=3, title="Todo", body="call the plumber", modified=1_700_000_200),
    ]


# ========== Logging ==========

@pytest.fixture
def loguru_messages():
    """Capture loguru output as a list of formatted messages."""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
