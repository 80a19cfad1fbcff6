"""Shared data types for hostfs."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hostfs.protocols import FileSystem, PathLike

__all__ = ["PathInfo"]


@dataclass(frozen=True)
class PathInfo:
    """Snapshot of what a filesystem reports about a path.

    Attributes:
        path: The path as given.
        name: File name without extension.
        basename: Final path segment.
        dirname: Parent path.
        extension: Extension without the dot.
        is_file: True if the path is a regular file.
        is_directory: True if the path is a directory.
        size: Size in bytes (None when the path does not exist).
        mime_type: Detected MIME type (None when the path does not exist).
    """

    path: str
    name: str
    basename: str
    dirname: str
    extension: str
    is_file: bool
    is_directory: bool
    size: int | None = None
    mime_type: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.is_file and self.is_directory:
            raise ValueError("path cannot be both a file and a directory")
        if (self.size is None) != (self.mime_type is None):
            raise ValueError("size and mime_type must both be set or both be None")

    @property
    def exists(self) -> bool:
        return self.size is not None

    @classmethod
    def from_filesystem(cls, fs: FileSystem, path: PathLike) -> PathInfo:
        """Collect information about a path.

        Args:
            fs: Filesystem to query.
            path: Path to describe.

        Returns:
            PathInfo for the path.

        Raises:
            PathTooLongError: If the path exceeds the host limit.
        """
        exists = fs.exists(path)
        return cls(
            path=os.fspath(path),
            name=fs.name(path),
            basename=fs.basename(path),
            dirname=fs.dirname(path),
            extension=fs.extension(path),
            is_file=fs.is_file(path),
            is_directory=fs.is_directory(path),
            size=fs.filesize(path) if exists else None,
            mime_type=fs.mime_type(path) if exists else None,
        )
