"""Substitutable filesystem access with a uniform error contract."""

__version__ = "0.1.0"

# Export protocol interfaces and implementations for dependency injection
from hostfs.errors import (
    CopyError,
    FileSystemError,
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
from hostfs.filesystem import LocalFileSystem
from hostfs.memory import MemoryFileSystem
from hostfs.protocols import FileSystem, MimeDetector

__all__ = [
    "__version__",
    "CopyError",
    "FileSystem",
    "FileSystemError",
    "LocalFileSystem",
    "MemoryFileSystem",
    "MimeDetector",
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
