"""Error taxonomy for storage operations.

Every filesystem call failure is translated into one of these at the
point of the call, so callers only ever need to handle StorageError.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "FileNotFound",
    "InvalidKey",
    "RootDeletionError",
    "StorageError",
    "StorageFailure",
]


class StorageError(Exception):
    """Base class for all storage errors."""

    pass


class InvalidKey(StorageError):
    """Key escapes the storage root or is used in an invalid way."""

    pass


class FileNotFound(StorageError):
    """Operation targets a key that does not exist."""

    def __init__(self, key: str, message: str | None = None) -> None:
        """Initialize with the missing key.

        Args:
            key: The key that was not found.
            message: Optional override for the default message.
        """
        super().__init__(message or f'The file "{key}" was not found.')
        self.key = key


class StorageFailure(StorageError):
    """An underlying I/O call failed unexpectedly."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        args_context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.args_context = args_context or {}

    @classmethod
    def unexpected_failure(
        cls,
        operation: str,
        context: dict[str, Any],
        previous: BaseException | None = None,
    ) -> StorageFailure:
        """Build a failure naming the operation and the keys involved.

        Args:
            operation: Name of the adapter operation, e.g. "read".
            context: Arguments of the operation, e.g. {"key": "a.txt"}.
            previous: Underlying exception, chained as __cause__.

        Returns:
            StorageFailure ready to be raised.
        """
        formatted = ", ".join(f"{name}: {value!r}" for name, value in context.items())
        message = f'An unexpected error occurred during "{operation}" ({formatted}).'
        if previous is not None:
            message = f"{message} {previous}"
        failure = cls(message, operation=operation, args_context=dict(context))
        failure.__cause__ = previous
        return failure


class RootDeletionError(ValueError):
    """Attempt to delete the root directory of an adapter."""

    pass
