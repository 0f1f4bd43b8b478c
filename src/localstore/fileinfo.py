"""Checksum, size and mime-type helpers for stored files.

The *_from_file functions return None when the file cannot be read;
callers turn that into a StorageFailure with the key involved.
"""

from __future__ import annotations

import hashlib
import logging
import os

import magic

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def checksum_from_content(content: bytes) -> str:
    """Return the hex MD5 digest of content."""
    return hashlib.md5(content).hexdigest()


def checksum_from_file(path: str) -> str | None:
    """Return the hex MD5 digest of a file, or None if it cannot be read."""
    digest = hashlib.md5()
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as e:
        logger.debug("Checksum failed for %s: %s", path, e)
        return None
    return digest.hexdigest()


def size_from_content(content: bytes) -> int:
    """Return the number of bytes in content."""
    return len(content)


def size_from_file(path: str) -> int | None:
    """Return the size of a file in bytes, or None if it cannot be stat'ed."""
    try:
        return os.path.getsize(path)
    except OSError as e:
        logger.debug("Size failed for %s: %s", path, e)
        return None


def mime_type_from_file(path: str) -> str | None:
    """Detect the mime type of a file from its content.

    Args:
        path: Path to an existing file.

    Returns:
        Mime type string such as "image/png", or None if the file cannot
        be read.
    """
    try:
        return magic.Magic(mime=True).from_file(path)
    except (OSError, magic.MagicException) as e:
        logger.debug("Mime type detection failed for %s: %s", path, e)
        return None
