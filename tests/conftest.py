"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from localstore.adapter import LocalAdapter
from localstore.config import StoreConfig
from localstore.context import AppContext


@pytest.fixture
def store_root(tmp_path: Path) -> Path:
    """Create an empty storage root directory."""
    root = tmp_path / "store"
    root.mkdir()
    return root


@pytest.fixture
def adapter(store_root: Path) -> LocalAdapter:
    """Create an adapter over the temporary storage root."""
    return LocalAdapter(store_root)


@pytest.fixture
def populated_adapter(adapter: LocalAdapter) -> LocalAdapter:
    """Create an adapter holding a small nested tree.

    Layout:
        a.txt
        docs/readme.md
        docs/guides/intro.txt
        empty/
    """
    adapter.write("a.txt", b"alpha")
    adapter.write("docs/readme.md", b"# readme")
    adapter.write("docs/guides/intro.txt", b"intro")
    adapter.ensure_directory("empty")
    return adapter


# ============================================================================
# Mock Adapter Fixtures
# ============================================================================


@pytest.fixture
def mock_adapter() -> MagicMock:
    """Create a mock adapter for testing.

    The mock tracks all storage operations without touching real files.
    """
    adapter = MagicMock()
    adapter.exists.return_value = False
    adapter.is_directory.return_value = False
    adapter.keys.return_value = []
    adapter.read.return_value = b""
    return adapter


@pytest.fixture
def mock_context(mock_adapter: MagicMock, tmp_path: Path) -> AppContext:
    """Create an AppContext wrapping the mock adapter."""
    return AppContext(adapter=mock_adapter, config=StoreConfig(root=tmp_path))
