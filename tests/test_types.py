"""Tests for shared data types."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from localstore.types import KeyInfo


class TestKeyInfo:
    """Tests for KeyInfo."""

    def test_modified_at(self) -> None:
        info = KeyInfo(key="a", size=1, checksum="c", mime_type="text/plain", mtime=0)
        assert info.modified_at == datetime(1970, 1, 1, tzinfo=timezone.utc)

    def test_empty_key_rejected(self) -> None:
        with pytest.raises(ValueError, match="key cannot be empty"):
            KeyInfo(key="", size=1, checksum="c", mime_type="text/plain", mtime=0)

    def test_negative_size_rejected(self) -> None:
        with pytest.raises(ValueError, match="size cannot be negative"):
            KeyInfo(key="a", size=-1, checksum="c", mime_type="text/plain", mtime=0)
