"""Application context for dependency injection.

This module separates object creation from object use, enabling testability
and reducing coupling in CLI commands.

The filesystem is typed using the FileSystem Protocol rather than a
concrete implementation, so tests can inject MemoryFileSystem or a mock.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from hostfs.config import CONFIG_PATH, FileSystemSettings, load_settings
from hostfs.protocols import FileSystem


def _default_filesystem() -> FileSystem:
    """Create the default filesystem implementation."""
    from hostfs.filesystem import LocalFileSystem
    return LocalFileSystem.create_default()


@dataclass
class AppContext:
    """Container for application dependencies.

    Provides a single injection point for the services used by CLI commands.
    """

    filesystem: FileSystem = field(default_factory=_default_filesystem)
    settings: FileSystemSettings = field(default_factory=FileSystemSettings)
    settings_source: str = "defaults"


def create_context(config_path: Path | None = None) -> AppContext:
    """Factory for application dependencies.

    Use this in production code. For tests, construct AppContext directly
    with test doubles.

    Args:
        config_path: Explicit settings file (defaults to ~/.hostfs/config.yaml
            when present).

    Returns:
        Configured AppContext backed by LocalFileSystem.

    Raises:
        FileNotFoundError: If config_path does not exist.
        ValueError: If the settings file is invalid.
    """
    from hostfs.filesystem import LocalFileSystem

    settings = load_settings(config_path)
    if config_path is not None:
        source = str(config_path)
    elif CONFIG_PATH.exists():
        source = str(CONFIG_PATH)
    else:
        source = "defaults"

    return AppContext(
        filesystem=LocalFileSystem.create(settings),
        settings=settings,
        settings_source=source,
    )
