"""Key-value storage adapter over a local directory."""

__version__ = "0.1.0"

# Export the adapter, its capability interfaces and the error taxonomy
from localstore.adapter import LocalAdapter
from localstore.exceptions import (
    FileNotFound,
    InvalidKey,
    RootDeletionError,
    StorageError,
    StorageFailure,
)
from localstore.protocols import (
    Adapter,
    ChecksumCalculator,
    MimeTypeProvider,
    SizeCalculator,
    StreamFactory,
)

__all__ = [
    "__version__",
    "Adapter",
    "ChecksumCalculator",
    "FileNotFound",
    "InvalidKey",
    "LocalAdapter",
    "MimeTypeProvider",
    "RootDeletionError",
    "SizeCalculator",
    "StorageError",
    "StorageFailure",
    "StreamFactory",
]
