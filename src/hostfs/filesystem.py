"""Host filesystem implementation.

LocalFileSystem wraps ``os``, ``shutil`` and ``pathlib`` calls and translates
their failures into ``hostfs.errors`` exceptions. It holds no handles or
state between calls; its only fields are immutable settings and the MIME
detector.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import sys
import time
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import IO

from hostfs import paths as path_utils
from hostfs.config import FileSystemSettings
from hostfs.errors import (
    CopyError,
    MkdirError,
    MoveError,
    NotFoundError,
    PathTooLongError,
    ReadError,
    RmdirError,
    TouchError,
    UnlinkError,
    WriteError,
)
from hostfs.mime import detect_mime_type
from hostfs.protocols import MimeDetector, PathLike

if sys.platform == "win32":
    import msvcrt
else:
    import fcntl

__all__ = ["LocalFileSystem", "iter_paths"]

logger = logging.getLogger(__name__)


def iter_paths(paths: PathLike | Sequence[PathLike]) -> list[PathLike]:
    """Normalize a single path or a sequence of paths to a list."""
    if isinstance(paths, (str, os.PathLike)):
        return [paths]
    return list(paths)


@contextmanager
def _exclusive_lock(f: IO[bytes]) -> Iterator[None]:
    """Hold an OS-level exclusive lock on an open file."""
    if sys.platform == "win32":
        f.seek(0)
        msvcrt.locking(f.fileno(), msvcrt.LK_LOCK, 1)
        try:
            yield
        finally:
            f.flush()
            f.seek(0)
            msvcrt.locking(f.fileno(), msvcrt.LK_UNLCK, 1)
    else:
        fcntl.flock(f.fileno(), fcntl.LOCK_EX)
        try:
            yield
        finally:
            f.flush()
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)


class LocalFileSystem:
    """Production filesystem implementation.

    Wraps standard library os, shutil and Path operations.
    Satisfies the FileSystem protocol structurally.
    """

    def __init__(
        self,
        settings: FileSystemSettings | None = None,
        mime_detector: MimeDetector | None = None,
    ) -> None:
        """Initialize the filesystem.

        Args:
            settings: Behavior settings. Defaults to FileSystemSettings().
            mime_detector: Callable used by mime_type. Defaults to
                hostfs.mime.detect_mime_type.

        Note:
            Prefer using factory methods `create()` or `create_default()` for construction.
        """
        self.settings = settings or FileSystemSettings()
        self.mime_detector = mime_detector or detect_mime_type

    @classmethod
    def create(
        cls,
        settings: FileSystemSettings,
        mime_detector: MimeDetector | None = None,
    ) -> LocalFileSystem:
        """Create a filesystem with explicit settings.

        Args:
            settings: Behavior settings.
            mime_detector: Optional MIME detection override.

        Returns:
            Configured LocalFileSystem instance.
        """
        return cls(settings=settings, mime_detector=mime_detector)

    @classmethod
    def create_default(cls) -> LocalFileSystem:
        """Create a filesystem with default settings and MIME detection."""
        return cls()

    def _encode(self, contents: str | bytes) -> bytes:
        if isinstance(contents, bytes):
            return contents
        return contents.encode(self.settings.encoding)

    def exists(self, path: PathLike) -> bool:
        """Check if a path exists."""
        limit = self.settings.path_length_limit
        if len(os.fsencode(path)) > limit:
            raise PathTooLongError(
                f"Could not check if file exists because path exceeds {limit} bytes.",
                path,
            )
        return os.path.exists(path)

    def read_bytes(self, path: PathLike) -> bytes:
        """Read binary content from a file."""
        if not self.is_file(path):
            raise NotFoundError(f"File {os.fspath(path)} does not exist.", path)
        try:
            return Path(path).read_bytes()
        except OSError as e:
            raise ReadError(f"Failed to read file {os.fspath(path)}.", path) from e

    def read(self, path: PathLike) -> str:
        """Read text content from a file."""
        data = self.read_bytes(path)
        try:
            return data.decode(self.settings.encoding)
        except UnicodeDecodeError as e:
            raise ReadError(
                f"File {os.fspath(path)} is not valid {self.settings.encoding} text.", path
            ) from e

    def write(self, path: PathLike, contents: str | bytes, lock: bool = False) -> None:
        """Write content to a file, optionally under an exclusive lock."""
        try:
            data = self._encode(contents)
            if lock:
                # Truncate only once the lock is held
                with open(path, "ab") as f, _exclusive_lock(f):
                    f.truncate(0)
                    f.write(data)
            else:
                with open(path, "wb") as f:
                    f.write(data)
        except (OSError, UnicodeEncodeError) as e:
            raise WriteError(f"Failed to save file {os.fspath(path)}.", path) from e
        logger.debug("Wrote %d bytes to %s (lock=%s)", len(data), path, lock)

    def copy(self, source: PathLike, destination: PathLike) -> None:
        """Copy a file."""
        try:
            shutil.copyfile(source, destination)
        except OSError as e:
            raise CopyError(
                f"Failed to copy '{os.fspath(source)}' to '{os.fspath(destination)}'.",
                source,
                destination,
            ) from e
        logger.debug("Copied %s to %s", source, destination)

    def move(self, source: PathLike, destination: PathLike) -> None:
        """Move a file.

        A plain rename: moving across filesystems fails with MoveError
        rather than falling back to copy and delete.
        """
        try:
            os.replace(source, destination)
        except OSError as e:
            raise MoveError(
                f"Failed to rename '{os.fspath(source)}' to '{os.fspath(destination)}'.",
                source,
                destination,
            ) from e
        logger.debug("Moved %s to %s", source, destination)

    def append(self, path: PathLike, contents: str | bytes) -> bool:
        """Append content to a file. Returns False instead of raising."""
        try:
            data = self._encode(contents)
            with open(path, "ab") as f:
                f.write(data)
        except (OSError, UnicodeEncodeError) as e:
            logger.debug("Append to %s failed: %s", path, e)
            return False
        return True

    def touch(
        self, path: PathLike, mtime: float | None = None, atime: float | None = None
    ) -> None:
        """Create a file if needed and set its timestamps."""
        times = None
        if mtime is not None or atime is not None:
            mtime = time.time() if mtime is None else mtime
            times = (mtime if atime is None else atime, mtime)
        try:
            Path(path).touch(exist_ok=True)
            if times is not None:
                os.utime(path, times)
        except OSError as e:
            raise TouchError(f"Failed to touch '{os.fspath(path)}'.", path) from e

    def unlink(self, paths: PathLike | Sequence[PathLike]) -> None:
        """Remove one or more files, stopping at the first failure."""
        for target in iter_paths(paths):
            try:
                os.unlink(target)
            except OSError as e:
                raise UnlinkError(f"Failed to unlink '{os.fspath(target)}'.", target) from e
            logger.debug("Removed %s", target)

    def mkdir(self, path: PathLike, mode: int = 0o777, recursive: bool = False) -> None:
        """Create a directory.

        With ``recursive`` every missing ancestor is created with ``mode`` too.
        """
        try:
            if recursive:
                missing = []
                for ancestor in Path(path).parents:
                    if os.path.lexists(ancestor):
                        break
                    missing.append(ancestor)
                for ancestor in reversed(missing):
                    # "a/.." is created by the time it is reached
                    with contextlib.suppress(FileExistsError):
                        os.mkdir(ancestor, mode)
            os.mkdir(path, mode)
        except OSError as e:
            raise MkdirError(f"Failed to create a directory '{os.fspath(path)}'.", path) from e
        logger.debug("Created directory %s (mode=%o, recursive=%s)", path, mode, recursive)

    def rmdir(self, path: PathLike) -> None:
        """Remove a directory tree depth-first.

        Symlinks are removed as leaf entries and never followed. Failure to
        remove the emptied directory itself is logged and ignored unless
        settings.strict_rmdir is set.
        """
        if os.path.islink(path):
            raise NotFoundError(
                f"Directory {os.fspath(path)} is a symbolic link; remove it with unlink.", path
            )
        if not self.is_directory(path):
            raise NotFoundError(f"Directory {os.fspath(path)} does not exist.", path)

        try:
            with os.scandir(path) as it:
                entries = list(it)
        except OSError as e:
            raise RmdirError(f"Failed to list directory '{os.fspath(path)}'.", path) from e

        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                self.rmdir(entry.path)
            else:
                self.unlink(entry.path)

        try:
            os.rmdir(path)
        except OSError as e:
            if self.settings.strict_rmdir:
                raise RmdirError(
                    f"Failed to remove directory '{os.fspath(path)}'.", path
                ) from e
            logger.warning("Could not remove directory %s: %s", path, e)
            return
        logger.debug("Removed directory %s", path)

    def name(self, path: PathLike) -> str:
        return path_utils.name(path)

    def basename(self, path: PathLike) -> str:
        return path_utils.basename(path)

    def dirname(self, path: PathLike) -> str:
        return path_utils.dirname(path)

    def extension(self, path: PathLike) -> str:
        return path_utils.extension(path)

    def filesize(self, path: PathLike) -> int:
        """Get the size of a file in bytes."""
        if not self.exists(path):
            raise NotFoundError(f"File {os.fspath(path)} does not exist.", path)
        try:
            return os.path.getsize(path)
        except OSError as e:
            raise NotFoundError(f"File {os.fspath(path)} does not exist.", path) from e

    def is_directory(self, path: PathLike) -> bool:
        return os.path.isdir(path)

    def is_file(self, path: PathLike) -> bool:
        return os.path.isfile(path)

    def mime_type(self, path: PathLike) -> str:
        """Detect the MIME type of an existing path."""
        if not self.exists(path):
            raise NotFoundError(f"File not found {os.fspath(path)}", path)
        try:
            return self.mime_detector(os.fspath(path))
        except OSError as e:
            raise ReadError(f"Failed to read file {os.fspath(path)}.", path) from e
