"""Protocol definitions for filesystem access.

Calling code depends on these Protocols rather than on ``os``/``shutil``
directly. Designing to interfaces enables:
- Substituting an in-memory filesystem or a mock in tests
- Injecting MIME detection instead of hard-wiring it
- A single error contract across implementations

All concrete implementations satisfy these protocols structurally (duck typing).
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from typing import Protocol, Union, runtime_checkable

__all__ = ["FileSystem", "MimeDetector", "PathLike"]

PathLike = Union[str, os.PathLike]


@runtime_checkable
class MimeDetector(Protocol):
    """Callable mapping an existing path to its MIME type."""

    def __call__(self, path: str) -> str:
        ...


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem operations.

    Operations open, act and release within a single call. Failures raise a
    subclass of ``hostfs.errors.FileSystemError``; the only exceptions are
    ``append`` (returns False) and the final step of ``rmdir`` (best-effort).
    """

    def exists(self, path: PathLike) -> bool:
        """Check if a path exists.

        Args:
            path: Path to check.

        Returns:
            True if path exists, False otherwise.

        Raises:
            PathTooLongError: If the encoded path exceeds the host limit in bytes.
        """
        ...

    def read(self, path: PathLike) -> str:
        """Read the full text content of a file.

        Args:
            path: Path to the file.

        Returns:
            File content as string.

        Raises:
            NotFoundError: If the file does not exist.
            ReadError: If the file exists but cannot be read.
        """
        ...

    def read_bytes(self, path: PathLike) -> bytes:
        """Read the full binary content of a file.

        Args:
            path: Path to the file.

        Returns:
            File content as bytes.

        Raises:
            NotFoundError: If the file does not exist.
            ReadError: If the file exists but cannot be read.
        """
        ...

    def write(self, path: PathLike, contents: str | bytes, lock: bool = False) -> None:
        """Write contents to a file, replacing any existing content.

        Args:
            path: Path to the file.
            contents: Text or bytes to write.
            lock: Hold an exclusive lock for the duration of the write.

        Raises:
            WriteError: If the write fails.
        """
        ...

    def copy(self, source: PathLike, destination: PathLike) -> None:
        """Copy a file to a new location.

        Args:
            source: File to copy.
            destination: Target path (overwritten if present).

        Raises:
            CopyError: If the copy fails.
        """
        ...

    def move(self, source: PathLike, destination: PathLike) -> None:
        """Move a file to a new location.

        Args:
            source: File to move.
            destination: Target path (overwritten if present).

        Raises:
            MoveError: If the move fails, including across filesystems.
        """
        ...

    def append(self, path: PathLike, contents: str | bytes) -> bool:
        """Append contents to a file, creating it if needed.

        Args:
            path: Path to the file.
            contents: Text or bytes to append.

        Returns:
            True on success, False if the write failed.
        """
        ...

    def touch(
        self, path: PathLike, mtime: float | None = None, atime: float | None = None
    ) -> None:
        """Set access and modification times, creating the file if needed.

        Args:
            path: Path to the file.
            mtime: Modification time. Defaults to now.
            atime: Access time. Defaults to mtime.

        Raises:
            TouchError: If the file cannot be created or updated.
        """
        ...

    def unlink(self, paths: PathLike | Sequence[PathLike]) -> None:
        """Delete one file or an ordered sequence of files.

        Args:
            paths: A single path or a sequence of paths.

        Raises:
            UnlinkError: On the first path that cannot be removed. Paths
                after it are not attempted.
        """
        ...

    def mkdir(self, path: PathLike, mode: int = 0o777, recursive: bool = False) -> None:
        """Create a directory.

        Args:
            path: Directory to create.
            mode: Permission bits, also applied to created ancestors.
            recursive: Create missing ancestors.

        Raises:
            MkdirError: If the directory cannot be created.
        """
        ...

    def rmdir(self, path: PathLike) -> None:
        """Delete a directory and everything below it.

        Args:
            path: Directory to delete.

        Raises:
            NotFoundError: If path is not a directory or is a symbolic link.
            UnlinkError: If a contained entry cannot be removed.
        """
        ...

    def name(self, path: PathLike) -> str:
        """Get the final segment up to its last dot ("" for ".bashrc")."""
        ...

    def basename(self, path: PathLike) -> str:
        """Get the final path segment."""
        ...

    def dirname(self, path: PathLike) -> str:
        """Get the path without its final segment."""
        ...

    def extension(self, path: PathLike) -> str:
        """Get the text after the last dot of the final segment, or ""."""
        ...

    def filesize(self, path: PathLike) -> int:
        """Get the size of a file in bytes.

        Raises:
            NotFoundError: If the path does not exist.
        """
        ...

    def is_directory(self, path: PathLike) -> bool:
        """Check if a path is a directory."""
        ...

    def is_file(self, path: PathLike) -> bool:
        """Check if a path is a regular file."""
        ...

    def mime_type(self, path: PathLike) -> str:
        """Detect the MIME type of a file.

        Raises:
            NotFoundError: If the path does not exist.
        """
        ...
