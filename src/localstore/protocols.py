"""Protocol definitions for storage adapters.

The core contract is Adapter. Optional capabilities are separate
protocols, so an adapter lacking one simply does not implement it:
- StreamFactory: byte-stream access to large files
- ChecksumCalculator, SizeCalculator, MimeTypeProvider: file metadata

All concrete implementations satisfy these protocols structurally (duck typing).
Check for a capability with isinstance(adapter, ChecksumCalculator).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from localstore.stream import LocalStream


@runtime_checkable
class Adapter(Protocol):
    """Protocol for key-value storage backends.

    Implementations map string keys onto stored items.
    """

    def read(self, key: str) -> bytes:
        """Read the content stored under a key.

        Args:
            key: Key of the item.

        Returns:
            Stored bytes.

        Raises:
            StorageFailure: If the item cannot be read.
        """
        ...

    def write(self, key: str, content: bytes | str) -> int:
        """Write content under a key, replacing any previous content.

        Args:
            key: Key of the item.
            content: Bytes, or text encoded as UTF-8.

        Returns:
            Number of bytes written.
        """
        ...

    def rename(self, source_key: str, target_key: str) -> None:
        """Move an item to a new key.

        Args:
            source_key: Existing key.
            target_key: New key.
        """
        ...

    def exists(self, key: str) -> bool:
        """Check if a key denotes a stored file.

        Args:
            key: Key to check.

        Returns:
            True if a file is stored under the key.
        """
        ...

    def keys(self) -> list[str]:
        """List all keys in sorted order.

        Returns:
            Sorted list of keys.
        """
        ...

    def mtime(self, key: str) -> int:
        """Get the last modification time of an item.

        Args:
            key: Key of the item.

        Returns:
            Seconds since the epoch.
        """
        ...

    def delete(self, key: str) -> None:
        """Delete an item.

        Args:
            key: Key of the item.

        Raises:
            FileNotFound: If nothing is stored under the key.
        """
        ...

    def is_directory(self, key: str) -> bool:
        """Check if a key denotes a directory.

        Args:
            key: Key to check.

        Returns:
            True if the key is a directory.
        """
        ...


@runtime_checkable
class StreamFactory(Protocol):
    """Capability: open byte streams on stored items."""

    def create_stream(self, key: str) -> LocalStream:
        """Create an unopened stream for a key.

        Args:
            key: Key of the item.

        Returns:
            Stream over the item.
        """
        ...


@runtime_checkable
class ChecksumCalculator(Protocol):
    """Capability: compute content checksums."""

    def checksum(self, key: str) -> str:
        """Compute the checksum of an item.

        Args:
            key: Key of the item.

        Returns:
            Hex digest of the content.
        """
        ...


@runtime_checkable
class SizeCalculator(Protocol):
    """Capability: compute content sizes."""

    def size(self, key: str) -> int:
        """Compute the size of an item.

        Args:
            key: Key of the item.

        Returns:
            Size of the content in bytes.
        """
        ...


@runtime_checkable
class MimeTypeProvider(Protocol):
    """Capability: detect content mime types."""

    def mime_type(self, key: str) -> str:
        """Detect the mime type of an item from its content.

        Args:
            key: Key of the item.

        Returns:
            Mime type such as "text/plain".
        """
        ...
