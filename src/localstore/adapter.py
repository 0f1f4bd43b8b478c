"""Adapter for the local filesystem.

Keys are mapped onto paths below a fixed root directory. Every
operation resolves its key through compute_path, which rejects any
key that would escape the root before the disk is touched.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from localstore import fileinfo
from localstore.config import DEFAULT_MODE, StoreConfig
from localstore.exceptions import FileNotFound, InvalidKey, RootDeletionError, StorageFailure
from localstore.paths import SEPARATOR, dirname, normalize, resolve_under_root, walk_child_first
from localstore.stream import LocalStream

logger = logging.getLogger(__name__)


class LocalAdapter:
    """Storage adapter backed by a directory on the local filesystem.

    Satisfies the Adapter, StreamFactory, ChecksumCalculator,
    SizeCalculator and MimeTypeProvider protocols structurally.
    """

    def __init__(self, directory: str | Path, mode: int = DEFAULT_MODE) -> None:
        """Initialize the adapter.

        Args:
            directory: Existing root directory. A symbolic link is resolved
                to its real location.
            mode: Mode of every directory created by the adapter.

        Raises:
            StorageFailure: If the directory does not exist.

        Note:
            Prefer using factory methods `create()` or `from_config()` for construction.
        """
        root = normalize(os.path.abspath(directory))
        if os.path.islink(root):
            root = normalize(os.path.realpath(root))

        if not os.path.isdir(root):
            raise StorageFailure(f'Directory "{directory}" does not exist.')

        self._directory = root
        self._mode = mode

    @classmethod
    def create(cls, directory: str | Path, mode: int = DEFAULT_MODE) -> LocalAdapter:
        """Create an adapter over an existing directory.

        Args:
            directory: Root directory.
            mode: Mode of directories created by the adapter.

        Returns:
            Configured LocalAdapter instance.
        """
        return cls(directory, mode)

    @classmethod
    def from_config(cls, config: StoreConfig) -> LocalAdapter:
        """Create an adapter from a StoreConfig.

        Args:
            config: Adapter configuration.

        Returns:
            Configured LocalAdapter instance.
        """
        return cls(config.root, config.mode)

    @property
    def directory(self) -> str:
        """Normalized root directory."""
        return self._directory

    @property
    def mode(self) -> int:
        """Mode of directories created by the adapter."""
        return self._mode

    # =========================================================================
    # Key/path mapping
    # =========================================================================

    def compute_path(self, key: str) -> str:
        """Compute the path of a key.

        Args:
            key: Key to resolve, not necessarily normalized.

        Returns:
            Normalized absolute path below the root.

        Raises:
            InvalidKey: If the path is out of the root directory.
        """
        return resolve_under_root(self._directory, self._directory + SEPARATOR + key)

    def compute_key(self, path: str) -> str:
        """Compute the key of a path below the root.

        Raises:
            InvalidKey: If the path is out of the root directory.
        """
        path = resolve_under_root(self._directory, path)
        return path[len(self._directory):].lstrip(SEPARATOR)

    def ensure_directory(self, key: str) -> None:
        """Ensure a directory exists, creating it and its ancestors if needed.

        Safe to call concurrently: losing a creation race against another
        process is not an error as long as the directory ends up existing.

        Args:
            key: Directory key, relative to the root.

        Raises:
            InvalidKey: If the key is out of the root directory.
            StorageFailure: If a file is in the way or creation failed.
        """
        directory = self.compute_path(key)

        if os.path.exists(directory):
            if not os.path.isdir(directory):
                raise StorageFailure(
                    f'Could not create directory "{key}" because it\'s a file.'
                )
            return

        try:
            os.makedirs(directory, self._mode)
        except OSError as e:
            if not os.path.isdir(directory):
                raise StorageFailure(f'The directory "{key}" could not be created.') from e
            logger.debug("Directory %s was created concurrently", directory)
            return
        logger.debug("Created directory %s", directory)

    # =========================================================================
    # Primitive operations
    # =========================================================================

    def read(self, key: str) -> bytes:
        """Return the content stored under key."""
        if self.is_directory(key):
            raise StorageFailure.unexpected_failure(
                "read",
                {"key": key},
                InvalidKey(f'Cannot read "{key}" as it is a directory'),
            )

        try:
            with open(self.compute_path(key), "rb") as f:
                return f.read()
        except OSError as e:
            raise StorageFailure.unexpected_failure("read", {"key": key}, e) from e

    def write(self, key: str, content: bytes | str) -> int:
        """Write content, creating parent directories as needed.

        Returns:
            Number of bytes written.
        """
        path = self.compute_path(key)
        self.ensure_directory(dirname(key))

        data = content.encode("utf-8") if isinstance(content, str) else content
        try:
            with open(path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise StorageFailure.unexpected_failure("write", {"key": key}, e) from e
        return len(data)

    def rename(self, source_key: str, target_key: str) -> None:
        """Move source_key to target_key, creating parent directories as needed."""
        source_path = self.compute_path(source_key)
        target_path = self.compute_path(target_key)
        self.ensure_directory(dirname(target_key))

        try:
            os.rename(source_path, target_path)
        except OSError as e:
            raise StorageFailure.unexpected_failure(
                "rename", {"sourceKey": source_key, "targetKey": target_key}, e
            ) from e

    def exists(self, key: str) -> bool:
        """Check if a file is stored under key. Directories do not count."""
        return os.path.isfile(self.compute_path(key))

    def is_directory(self, key: str) -> bool:
        """Check if key names a directory."""
        return os.path.isdir(self.compute_path(key))

    def keys(self) -> list[str]:
        """List every file and directory key below the root, sorted.

        An unreadable root yields an empty list rather than an error.
        Entries whose names contain a backslash have no key of their own
        and are left out.
        """
        self.ensure_directory("")

        try:
            entries = list(walk_child_first(self._directory))
        except OSError as e:
            logger.debug("Cannot list %s: %s", self._directory, e)
            return []

        keys = set()
        for entry in entries:
            # a backslash would be read back as a separator by compute_key
            if "\\" in entry.path[len(self._directory):]:
                logger.debug("Skipping %s: no key maps to this name", entry.path)
                continue
            try:
                keys.add(self.compute_key(entry.path))
            except InvalidKey as e:
                logger.debug("Skipping %s: %s", entry.path, e)
        return sorted(keys)

    def mtime(self, key: str) -> int:
        """Return the modification time of key in whole seconds since the epoch."""
        try:
            return int(os.path.getmtime(self.compute_path(key)))
        except OSError as e:
            raise StorageFailure.unexpected_failure("mtime", {"key": key}, e) from e

    def delete(self, key: str) -> None:
        """Delete a file, or a directory recursively.

        Raises:
            FileNotFound: If nothing is stored under key.
            StorageFailure: If deletion failed, including any attempt to
                delete the root directory.
        """
        if self.is_directory(key):
            try:
                deleted = self.delete_tree(self.compute_path(key))
            except RootDeletionError as e:
                raise StorageFailure.unexpected_failure("delete", {"key": key}, e) from e
            if not deleted:
                raise StorageFailure.unexpected_failure("delete", {"key": key})
            return

        if self.exists(key):
            try:
                os.unlink(self.compute_path(key))
            except OSError as e:
                raise StorageFailure.unexpected_failure("delete", {"key": key}, e) from e
            return

        raise FileNotFound(key)

    def delete_tree(self, path: str) -> bool:
        """Delete a directory and everything below it, children first.

        Not atomic. A failed removal does not stop the walk; the remaining
        entries are still attempted.

        Args:
            path: Directory path below the root.

        Returns:
            True if every removal succeeded.

        Raises:
            RootDeletionError: If path is the root directory of this adapter.
            InvalidKey: If path is out of the root directory.
        """
        directory = resolve_under_root(self._directory, path)
        if directory == self._directory:
            raise RootDeletionError(
                f'Impossible to delete the root directory of this Local adapter ("{directory}").'
            )

        if not os.path.lexists(directory):
            return True

        # remove the link itself, never the tree it points to
        if os.path.islink(directory):
            return self._remove(directory, is_dir=False)

        status = True
        try:
            for entry in walk_child_first(directory):
                removed = self._remove(entry.path, is_dir=entry.is_dir(follow_symlinks=False))
                status = removed and status
        except OSError as e:
            logger.warning("Cannot list %s: %s", directory, e)
            status = False

        return self._remove(directory, is_dir=True) and status

    def _remove(self, path: str, is_dir: bool) -> bool:
        try:
            if is_dir:
                os.rmdir(path)
            else:
                os.unlink(path)
        except OSError as e:
            logger.warning("Failed to remove %s: %s", path, e)
            return False
        return True

    # =========================================================================
    # Optional capabilities
    # =========================================================================

    def create_stream(self, key: str) -> LocalStream:
        """Create an unopened byte stream over the file of a key."""
        return LocalStream(self.compute_path(key), self._mode)

    def checksum(self, key: str) -> str:
        if not self.exists(key):
            raise FileNotFound(key)

        checksum = fileinfo.checksum_from_file(self.compute_path(key))
        if checksum is None:
            raise StorageFailure.unexpected_failure("checksum", {"key": key})
        return checksum

    def size(self, key: str) -> int:
        if not self.exists(key):
            raise FileNotFound(key)

        size = fileinfo.size_from_file(self.compute_path(key))
        if size is None:
            raise StorageFailure.unexpected_failure("size", {"key": key})
        return size

    def mime_type(self, key: str) -> str:
        if not self.exists(key):
            raise FileNotFound(key)

        mime_type = fileinfo.mime_type_from_file(self.compute_path(key))
        if mime_type is None:
            raise StorageFailure.unexpected_failure("mimeType", {"key": key})
        return mime_type
