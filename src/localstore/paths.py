"""Lexical path handling: normalization, containment and traversal.

Everything here except walk_child_first is a pure function of its
arguments. Nothing touches the disk until a path has been checked
by resolve_under_root.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterator

from localstore.exceptions import InvalidKey

logger = logging.getLogger(__name__)

SEPARATOR = "/"

# "/", "C:/" or "C:" at the start of a path
_PREFIX_PATTERN = re.compile(r"^(?:[A-Za-z]:)?/?")


def _split_prefix(path: str) -> tuple[str, str]:
    """Split an absolute prefix (root or drive) from the rest of a path."""
    match = _PREFIX_PATTERN.match(path)
    prefix = match.group(0) if match else ""
    return prefix, path[len(prefix):]


def normalize(path: str) -> str:
    """Canonicalize a path lexically.

    Backslashes become forward slashes, empty and "." segments are dropped,
    and ".." removes the preceding segment. A ".." with nothing to remove
    is kept, so "/a/../../etc" becomes "/../etc".

    Args:
        path: Any path string. It does not need to exist.

    Returns:
        The normalized path.

    Example:
        >>> normalize("/store//a/./b/../c.txt")
        '/store/a/c.txt'
    """
    prefix, rest = _split_prefix(path.replace("\\", SEPARATOR))

    tokens: list[str] = []
    for part in rest.split(SEPARATOR):
        if part in ("", "."):
            continue
        if part == ".." and tokens and tokens[-1] != "..":
            tokens.pop()
        else:
            tokens.append(part)

    return prefix + SEPARATOR.join(tokens)


def is_absolute(path: str) -> bool:
    """Check if a path starts with a root or drive prefix."""
    return bool(_split_prefix(path.replace("\\", SEPARATOR))[0])


def dirname(key: str) -> str:
    """Return the lexical parent of a key, or "" for a top-level key."""
    normalized = normalize(key)
    if SEPARATOR not in normalized:
        return ""
    parent = normalized.rsplit(SEPARATOR, 1)[0]
    # keep the separator of an absolute root ("/a" -> "/")
    return parent or SEPARATOR


def is_under(root: str, path: str) -> bool:
    """Check containment on segment boundaries.

    "/data2" is not under "/data", but "/data" and "/data/x" are.
    """
    if path == root:
        return True
    base = root if root.endswith(SEPARATOR) else root + SEPARATOR
    return path.startswith(base)


def resolve_under_root(root: str, raw_path: str) -> str:
    """Normalize a path and verify it lies under root.

    Args:
        root: Normalized absolute root directory.
        raw_path: Untrusted path, possibly containing traversal segments.

    Returns:
        The normalized path.

    Raises:
        InvalidKey: If the normalized path is outside root.
    """
    path = normalize(raw_path)
    if not is_under(root, path):
        raise InvalidKey(f'The path "{path}" is out of the filesystem.')
    return path


def walk_child_first(directory: str) -> Iterator[os.DirEntry[str]]:
    """Yield every entry below directory, descendants before their parent.

    Symbolic links to directories are yielded but not followed.

    Args:
        directory: Directory to walk. The directory itself is not yielded.

    Raises:
        OSError: If directory cannot be listed. Subdirectories that cannot
            be listed are skipped.
    """
    with os.scandir(directory) as it:
        entries = list(it)

    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            try:
                yield from walk_child_first(entry.path)
            except OSError as e:
                logger.debug("Skipping unreadable directory %s: %s", entry.path, e)
        yield entry
