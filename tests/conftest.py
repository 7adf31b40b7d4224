"""Pytest configuration and shared fixtures."""

import shutil
import tempfile
from pathlib import Path

import pytest

from projectshelf.core.initializer import init_shelf


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's shelf environment out of the tests."""
    for name in ("PROJECTSHELF_DIR", "PROJECTSHELF_STORAGE_KEY", "PROJECTSHELF_REQUIRE_TITLE"):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    temp = tempfile.mkdtemp()
    yield Path(temp)
    shutil.rmtree(temp)


@pytest.fixture
def shelf_dir(temp_dir):
    """A freshly initialized shelf."""
    init_shelf(temp_dir)
    return temp_dir
