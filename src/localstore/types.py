"""Shared data types for localstore."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

__all__ = ["KeyInfo"]


@dataclass
class KeyInfo:
    """Metadata about a stored file.

    Attributes:
        key: Key of the file.
        size: Size in bytes.
        checksum: Hex MD5 digest of the content.
        mime_type: Detected mime type.
        mtime: Last modification, seconds since the epoch.
    """

    key: str
    size: int
    checksum: str
    mime_type: str
    mtime: int

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.key:
            raise ValueError("key cannot be empty")
        if self.size < 0:
            raise ValueError("size cannot be negative")

    @property
    def modified_at(self) -> datetime:
        """Modification time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.mtime, tz=timezone.utc)
