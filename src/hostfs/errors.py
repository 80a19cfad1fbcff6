"""Error types raised by filesystem implementations.

Every failure surfaces as a subclass of FileSystemError, so callers only
need to catch one kind. The subclass and the message name the failing
operation and the path(s) involved; the underlying OS error, when there is
one, is chained as ``__cause__``.
"""

from __future__ import annotations

import os

__all__ = [
    "CopyError",
    "FileSystemError",
    "MkdirError",
    "MoveError",
    "NotFoundError",
    "PathTooLongError",
    "ReadError",
    "RmdirError",
    "TouchError",
    "UnlinkError",
    "WriteError",
]


class FileSystemError(Exception):
    """Error during a filesystem operation.

    Attributes:
        operation: Name of the failing operation (e.g. "write").
        paths: Path(s) the operation was acting on.
    """

    operation = "filesystem"

    def __init__(self, message: str, *paths: str | os.PathLike[str]) -> None:
        super().__init__(message)
        self.paths = tuple(os.fspath(p) for p in paths)


class PathTooLongError(FileSystemError):
    """Path exceeds the host's maximum path length."""

    operation = "exists"


class NotFoundError(FileSystemError):
    """A file or directory required to exist does not."""

    operation = "lookup"


class ReadError(FileSystemError):
    """An existing file could not be read."""

    operation = "read"


class WriteError(FileSystemError):
    operation = "write"


class CopyError(FileSystemError):
    operation = "copy"


class MoveError(FileSystemError):
    operation = "move"


class TouchError(FileSystemError):
    operation = "touch"


class UnlinkError(FileSystemError):
    operation = "unlink"


class MkdirError(FileSystemError):
    operation = "mkdir"


class RmdirError(FileSystemError):
    """Listing a directory failed, or its final removal failed in strict mode."""

    operation = "rmdir"
