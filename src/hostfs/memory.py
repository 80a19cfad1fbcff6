"""In-memory filesystem implementation.

MemoryFileSystem keeps a POSIX-style tree in a dict and honors the same
contract as LocalFileSystem: identical error kinds, fail-fast ``unlink`` and
a best-effort final step in ``rmdir``. Inject it wherever a FileSystem is
expected to test calling code without touching the disk.

Relative paths resolve against ``/``. Symbolic links, permissions and
locking are not modelled; ``mode`` and ``lock`` are accepted and recorded
or ignored. Instances are not thread-safe.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import PurePosixPath

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
from hostfs.filesystem import iter_paths
from hostfs.mime import DIRECTORY_MIME_TYPE, SAMPLE_SIZE, guess_mime_type
from hostfs.protocols import MimeDetector, PathLike

__all__ = ["MemoryFileSystem"]

logger = logging.getLogger(__name__)

ROOT = PurePosixPath("/")


@dataclass
class _Node:
    """A file or directory entry."""

    is_dir: bool
    mode: int = 0o666
    data: bytes = b""
    mtime: float = field(default_factory=time.time)
    atime: float = 0.0

    def __post_init__(self) -> None:
        if not self.atime:
            self.atime = self.mtime


class MemoryFileSystem:
    """Filesystem held entirely in memory.

    Satisfies the FileSystem protocol structurally.
    """

    def __init__(
        self,
        settings: FileSystemSettings | None = None,
        mime_detector: MimeDetector | None = None,
    ) -> None:
        """Initialize an empty filesystem containing only ``/``.

        Args:
            settings: Behavior settings. Defaults to FileSystemSettings().
            mime_detector: Optional callable used by mime_type. By default
                the stored content is sniffed.
        """
        self.settings = settings or FileSystemSettings()
        self.mime_detector = mime_detector
        self._nodes: dict[PurePosixPath, _Node] = {ROOT: _Node(is_dir=True, mode=0o777)}

    @classmethod
    def create(
        cls,
        settings: FileSystemSettings,
        mime_detector: MimeDetector | None = None,
    ) -> MemoryFileSystem:
        """Create an empty in-memory filesystem with explicit settings."""
        return cls(settings=settings, mime_detector=mime_detector)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _key(path: PathLike) -> PurePosixPath:
        """Resolve a path to its absolute, normalized key."""
        parts: list[str] = []
        for part in PurePosixPath(ROOT, os.fspath(path)).parts[1:]:
            if part == "..":
                if parts:
                    parts.pop()
            else:
                parts.append(part)
        return PurePosixPath(ROOT, *parts)

    def _file(self, path: PathLike) -> _Node | None:
        node = self._nodes.get(self._key(path))
        return node if node is not None and not node.is_dir else None

    def _parent_is_dir(self, key: PurePosixPath) -> bool:
        parent = self._nodes.get(key.parent)
        return parent is not None and parent.is_dir

    def _children(self, key: PurePosixPath) -> list[PurePosixPath]:
        return sorted(k for k in self._nodes if k != ROOT and k.parent == key)

    def _encode(self, contents: str | bytes) -> bytes:
        if isinstance(contents, bytes):
            return contents
        return contents.encode(self.settings.encoding)

    def _store(self, key: PurePosixPath, data: bytes) -> None:
        node = self._nodes.get(key)
        now = time.time()
        if node is None:
            self._nodes[key] = _Node(is_dir=False, data=data, mtime=now)
        else:
            node.data = data
            node.mtime = now

    # ------------------------------------------------------------------
    # FileSystem protocol
    # ------------------------------------------------------------------

    def exists(self, path: PathLike) -> bool:
        limit = self.settings.path_length_limit
        if len(os.fsencode(path)) > limit:
            raise PathTooLongError(
                f"Could not check if file exists because path exceeds {limit} bytes.",
                path,
            )
        return self._key(path) in self._nodes

    def read_bytes(self, path: PathLike) -> bytes:
        node = self._file(path)
        if node is None:
            raise NotFoundError(f"File {os.fspath(path)} does not exist.", path)
        node.atime = time.time()
        return node.data

    def read(self, path: PathLike) -> str:
        data = self.read_bytes(path)
        try:
            return data.decode(self.settings.encoding)
        except UnicodeDecodeError as e:
            raise ReadError(
                f"File {os.fspath(path)} is not valid {self.settings.encoding} text.", path
            ) from e

    def write(self, path: PathLike, contents: str | bytes, lock: bool = False) -> None:
        key = self._key(path)
        existing = self._nodes.get(key)
        if not self._parent_is_dir(key) or (existing is not None and existing.is_dir):
            raise WriteError(f"Failed to save file {os.fspath(path)}.", path)
        try:
            data = self._encode(contents)
        except UnicodeEncodeError as e:
            raise WriteError(f"Failed to save file {os.fspath(path)}.", path) from e
        self._store(key, data)
        logger.debug("Wrote %d bytes to %s (memory)", len(data), key)

    def copy(self, source: PathLike, destination: PathLike) -> None:
        src = self._file(source)
        dst_key = self._key(destination)
        dst = self._nodes.get(dst_key)
        if (
            src is None
            or dst_key == self._key(source)
            or not self._parent_is_dir(dst_key)
            or (dst is not None and dst.is_dir)
        ):
            raise CopyError(
                f"Failed to copy '{os.fspath(source)}' to '{os.fspath(destination)}'.",
                source,
                destination,
            )
        self._store(dst_key, src.data)

    def move(self, source: PathLike, destination: PathLike) -> None:
        """Rename a file or directory, replacing a compatible destination."""
        src_key = self._key(source)
        dst_key = self._key(destination)
        src = self._nodes.get(src_key)
        dst = self._nodes.get(dst_key)

        def fail() -> MoveError:
            return MoveError(
                f"Failed to rename '{os.fspath(source)}' to '{os.fspath(destination)}'.",
                source,
                destination,
            )

        if src is None or src_key == ROOT or not self._parent_is_dir(dst_key):
            raise fail()
        if src_key == dst_key:
            return
        if dst is not None:
            if src.is_dir != dst.is_dir or (dst.is_dir and self._children(dst_key)):
                raise fail()
        if src.is_dir and src_key in dst_key.parents:
            raise fail()

        moved = {
            dst_key / key.relative_to(src_key): node
            for key, node in self._nodes.items()
            if key == src_key or src_key in key.parents
        }
        for key in [k for k in self._nodes if k == src_key or src_key in k.parents]:
            del self._nodes[key]
        self._nodes.pop(dst_key, None)
        self._nodes.update(moved)

    def append(self, path: PathLike, contents: str | bytes) -> bool:
        key = self._key(path)
        existing = self._nodes.get(key)
        if not self._parent_is_dir(key) or (existing is not None and existing.is_dir):
            logger.debug("Append to %s failed: not a writable file", key)
            return False
        try:
            data = self._encode(contents)
        except UnicodeEncodeError as e:
            logger.debug("Append to %s failed: %s", key, e)
            return False
        self._store(key, (existing.data if existing else b"") + data)
        return True

    def touch(
        self, path: PathLike, mtime: float | None = None, atime: float | None = None
    ) -> None:
        key = self._key(path)
        node = self._nodes.get(key)
        if node is None:
            if not self._parent_is_dir(key):
                raise TouchError(f"Failed to touch '{os.fspath(path)}'.", path)
            node = self._nodes[key] = _Node(is_dir=False)
        mtime = time.time() if mtime is None else mtime
        node.mtime = mtime
        node.atime = mtime if atime is None else atime

    def unlink(self, paths: PathLike | Sequence[PathLike]) -> None:
        for target in iter_paths(paths):
            key = self._key(target)
            node = self._nodes.get(key)
            if node is None or node.is_dir:
                raise UnlinkError(f"Failed to unlink '{os.fspath(target)}'.", target)
            del self._nodes[key]

    def mkdir(self, path: PathLike, mode: int = 0o777, recursive: bool = False) -> None:
        key = self._key(path)

        def fail() -> MkdirError:
            return MkdirError(f"Failed to create a directory '{os.fspath(path)}'.", path)

        if key in self._nodes:
            raise fail()
        if recursive:
            for ancestor in reversed(key.parents):
                node = self._nodes.get(ancestor)
                if node is None:
                    self._nodes[ancestor] = _Node(is_dir=True, mode=mode)
                elif not node.is_dir:
                    raise fail()
        elif not self._parent_is_dir(key):
            raise fail()
        self._nodes[key] = _Node(is_dir=True, mode=mode)

    def rmdir(self, path: PathLike) -> None:
        key = self._key(path)
        node = self._nodes.get(key)
        if node is None or not node.is_dir:
            raise NotFoundError(f"Directory {os.fspath(path)} does not exist.", path)

        for child in self._children(key):
            if self._nodes[child].is_dir:
                self.rmdir(child)
            else:
                self.unlink(child)

        if key == ROOT:
            if self.settings.strict_rmdir:
                raise RmdirError(f"Failed to remove directory '{os.fspath(path)}'.", path)
            logger.warning("Could not remove directory %s: root directory", key)
            return
        del self._nodes[key]

    def name(self, path: PathLike) -> str:
        return path_utils.name(path)

    def basename(self, path: PathLike) -> str:
        return path_utils.basename(path)

    def dirname(self, path: PathLike) -> str:
        return path_utils.dirname(path)

    def extension(self, path: PathLike) -> str:
        return path_utils.extension(path)

    def filesize(self, path: PathLike) -> int:
        if not self.exists(path):
            raise NotFoundError(f"File {os.fspath(path)} does not exist.", path)
        return len(self._nodes[self._key(path)].data)

    def is_directory(self, path: PathLike) -> bool:
        node = self._nodes.get(self._key(path))
        return node is not None and node.is_dir

    def is_file(self, path: PathLike) -> bool:
        return self._file(path) is not None

    def mime_type(self, path: PathLike) -> str:
        if not self.exists(path):
            raise NotFoundError(f"File not found {os.fspath(path)}", path)
        if self.mime_detector is not None:
            return self.mime_detector(os.fspath(path))
        node = self._nodes[self._key(path)]
        if node.is_dir:
            return DIRECTORY_MIME_TYPE
        return guess_mime_type(os.fspath(path), node.data[:SAMPLE_SIZE])

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def timestamps(self, path: PathLike) -> tuple[float, float]:
        """Get ``(atime, mtime)`` of an entry.

        Raises:
            NotFoundError: If the path does not exist.
        """
        node = self._nodes.get(self._key(path))
        if node is None:
            raise NotFoundError(f"File {os.fspath(path)} does not exist.", path)
        return node.atime, node.mtime

    def mode(self, path: PathLike) -> int:
        """Get the permission bits recorded for an entry."""
        node = self._nodes.get(self._key(path))
        if node is None:
            raise NotFoundError(f"File {os.fspath(path)} does not exist.", path)
        return node.mode
