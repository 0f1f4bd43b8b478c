"""Byte streams over files stored by the local adapter."""

from __future__ import annotations

import io
import logging
import os
from dataclasses import dataclass
from typing import BinaryIO

from localstore.exceptions import FileNotFound, InvalidKey, StorageFailure

logger = logging.getLogger(__name__)

_BASE_MODES = ("r", "w", "a", "x")


@dataclass(frozen=True)
class StreamMode:
    """An fopen-style open mode such as "r", "w+" or "ab".

    Attributes:
        mode: The raw mode string.
    """

    mode: str

    def __post_init__(self) -> None:
        """Validate the mode string."""
        if not self.mode or self.mode[0] not in _BASE_MODES:
            raise ValueError(f'Invalid stream mode "{self.mode}"')
        if any(flag not in "+bt" for flag in self.mode[1:]):
            raise ValueError(f'Invalid stream mode "{self.mode}"')

    @property
    def base(self) -> str:
        return self.mode[0]

    @property
    def plus(self) -> bool:
        return "+" in self.mode

    def allows_read(self) -> bool:
        return self.base == "r" or self.plus

    def allows_write(self) -> bool:
        return self.base != "r" or self.plus

    def allows_existing_file_opening(self) -> bool:
        return self.base != "x"

    def allows_new_file_opening(self) -> bool:
        return self.base != "r"

    def implies_existing_content_deletion(self) -> bool:
        return self.base == "w"

    def implies_position_at_beginning(self) -> bool:
        return self.base != "a"

    def implies_position_at_end(self) -> bool:
        return self.base == "a"

    def as_python_mode(self) -> str:
        """Return the equivalent binary mode for open()."""
        return self.base + "b" + ("+" if self.plus else "")


class LocalStream:
    """Seekable byte stream over a single file.

    The stream is created closed; call open() before reading or writing.
    Used as a context manager it always releases the handle on exit.
    """

    def __init__(self, path: str, mode: int = 0o777) -> None:
        """Initialize the stream.

        Args:
            path: Resolved absolute path of the file.
            mode: Mode for any parent directory created on open.
        """
        self.path = path
        self.mode = mode
        self._handle: BinaryIO | None = None
        self._stream_mode: StreamMode | None = None

    def __enter__(self) -> LocalStream:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    def open(self, stream_mode: StreamMode | str) -> bool:
        """Open the underlying file.

        Args:
            stream_mode: StreamMode or fopen-style mode string.

        Returns:
            True once the file is open.

        Raises:
            FileNotFound: If the file is missing and the mode forbids creation.
            StorageFailure: If the file exists and the mode forbids opening it,
                or the OS call fails.
        """
        if isinstance(stream_mode, str):
            stream_mode = StreamMode(stream_mode)

        exists = os.path.exists(self.path)
        if exists and not stream_mode.allows_existing_file_opening():
            raise StorageFailure(f'The file "{self.path}" already exists.')
        if not exists and not stream_mode.allows_new_file_opening():
            raise FileNotFound(self.path)

        directory = os.path.dirname(self.path)
        if not os.path.isdir(directory):
            try:
                os.makedirs(directory, self.mode, exist_ok=True)
            except OSError as e:
                raise StorageFailure(f'The directory "{directory}" could not be created.') from e

        try:
            self._handle = open(self.path, stream_mode.as_python_mode())
        except OSError as e:
            raise StorageFailure.unexpected_failure("open", {"path": self.path}, e) from e

        self._stream_mode = stream_mode
        logger.debug("Opened %s in mode %s", self.path, stream_mode.mode)
        return True

    def _require(self, operation: str) -> BinaryIO:
        if self._handle is None:
            raise StorageFailure(f'Cannot {operation}: the stream "{self.path}" is not open.')
        return self._handle

    def read(self, count: int = -1) -> bytes:
        """Read up to count bytes, or everything left when count is negative."""
        handle = self._require("read")
        if self._stream_mode is not None and not self._stream_mode.allows_read():
            raise StorageFailure(f'The stream "{self.path}" does not allow read.')
        try:
            return handle.read(count)
        except OSError as e:
            raise StorageFailure.unexpected_failure("read", {"path": self.path}, e) from e

    def write(self, data: bytes) -> int:
        """Write data and return the number of bytes written."""
        handle = self._require("write")
        if self._stream_mode is not None and not self._stream_mode.allows_write():
            raise StorageFailure(f'The stream "{self.path}" does not allow write.')
        try:
            return handle.write(data)
        except OSError as e:
            raise StorageFailure.unexpected_failure("write", {"path": self.path}, e) from e

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> bool:
        """Move the position; returns False if the OS rejects the offset."""
        handle = self._require("seek")
        try:
            handle.seek(offset, whence)
        except (OSError, ValueError) as e:
            logger.debug("Seek failed on %s: %s", self.path, e)
            return False
        return True

    def tell(self) -> int:
        return self._require("tell").tell()

    def eof(self) -> bool:
        """Check if the position is at (or past) the end of the file."""
        handle = self._require("eof")
        return handle.tell() >= os.fstat(handle.fileno()).st_size

    def flush(self) -> bool:
        handle = self._require("flush")
        try:
            handle.flush()
        except OSError as e:
            raise StorageFailure.unexpected_failure("flush", {"path": self.path}, e) from e
        return True

    def close(self) -> None:
        """Release the handle. Closing a closed stream is a no-op."""
        if self._handle is not None:
            self._handle.close()
            self._handle = None
            self._stream_mode = None

    def stat(self) -> os.stat_result:
        """Return stat information for the file."""
        try:
            if self._handle is not None:
                return os.fstat(self._handle.fileno())
            return os.stat(self.path)
        except OSError as e:
            raise StorageFailure.unexpected_failure("stat", {"path": self.path}, e) from e

    def unlink(self) -> bool:
        """Delete the file. The stream must be closed first."""
        if self._handle is not None:
            raise InvalidKey(f'Cannot unlink "{self.path}" while the stream is open.')
        try:
            os.unlink(self.path)
        except OSError as e:
            logger.debug("Unlink failed on %s: %s", self.path, e)
            return False
        return True
