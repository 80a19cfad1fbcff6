"""Pure path helpers shared by filesystem implementations.

Segments are split like ``pathlib.PurePath`` (trailing separators ignored,
"." as the parent of a bare name); the last segment is split on its last dot,
so ".bashrc" is all extension. Nothing touches the filesystem and nothing
raises for a string path.
"""

from __future__ import annotations

import os
import sys
from pathlib import PurePath

__all__ = [
    "basename",
    "dirname",
    "extension",
    "name",
    "platform_max_path_length",
]

# Used when the host does not report PATH_MAX
FALLBACK_MAX_PATH_LENGTH = 4096
WINDOWS_MAX_PATH_LENGTH = 260


def platform_max_path_length() -> int:
    """Get the host's maximum path length.

    Returns:
        PATH_MAX for the root filesystem, 260 on Windows, 4096 if unknown.
    """
    if sys.platform == "win32":
        return WINDOWS_MAX_PATH_LENGTH
    try:
        return os.pathconf("/", "PC_PATH_MAX")
    except (OSError, ValueError):
        return FALLBACK_MAX_PATH_LENGTH


def _split_basename(path: str | os.PathLike[str]) -> tuple[str, str]:
    """Split the final segment on its last dot into (name, extension)."""
    stem, dot, suffix = basename(path).rpartition(".")
    if not dot:
        return stem + suffix, ""
    return stem, suffix


def name(path: str | os.PathLike[str]) -> str:
    """Get the file name without its last extension.

    Example:
        >>> name("/x/file1.txt")
        'file1'
        >>> name("/x/.bashrc")
        ''
    """
    return _split_basename(path)[0]


def basename(path: str | os.PathLike[str]) -> str:
    return PurePath(path).name


def dirname(path: str | os.PathLike[str]) -> str:
    """Get the parent path; "." for a bare file name."""
    return str(PurePath(path).parent)


def extension(path: str | os.PathLike[str]) -> str:
    """Get the text after the last dot of the file name.

    Example:
        >>> extension("/x/archive.tar.gz")
        'gz'
        >>> extension("/x/.bashrc")
        'bashrc'
    """
    return _split_basename(path)[1]
