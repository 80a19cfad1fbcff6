"""Shared test fixtures."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from hostfs.config import FileSystemSettings
from hostfs.filesystem import LocalFileSystem
from hostfs.memory import MemoryFileSystem
from hostfs.protocols import FileSystem


@dataclass
class Workspace:
    """A filesystem plus a scratch directory inside it."""

    fs: FileSystem
    root: str

    def path(self, *parts: str) -> str:
        return os.path.join(self.root, *parts)


@pytest.fixture
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Override home directory for testing."""
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    return tmp_path


@pytest.fixture
def local_fs() -> LocalFileSystem:
    """Create a LocalFileSystem with default settings."""
    return LocalFileSystem.create_default()


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    """Create an empty MemoryFileSystem."""
    return MemoryFileSystem()


@pytest.fixture
def strict_settings() -> FileSystemSettings:
    """Settings that make rmdir fail loudly."""
    return FileSystemSettings(strict_rmdir=True)


# ============================================================================
# Contract Fixtures
# ============================================================================


@pytest.fixture(params=["local", "memory"])
def workspace(request: pytest.FixtureRequest, tmp_path: Path) -> Workspace:
    """A scratch directory on each FileSystem implementation.

    Tests using this fixture run once against the host filesystem and once
    against the in-memory one, so both honor the same contract.
    """
    if request.param == "local":
        return Workspace(fs=LocalFileSystem.create_default(), root=str(tmp_path))

    fs = MemoryFileSystem()
    fs.mkdir("/tmp/work", recursive=True)
    return Workspace(fs=fs, root="/tmp/work")


# ============================================================================
# Mock FileSystem Fixture
# ============================================================================


@pytest.fixture
def mock_filesystem() -> MagicMock:
    """Create a mock FileSystem for testing.

    The mock tracks all filesystem operations without touching real files.
    """
    fs = MagicMock()
    fs.exists.return_value = False
    fs.is_file.return_value = False
    fs.is_directory.return_value = False
    fs.read.return_value = ""
    fs.append.return_value = True
    return fs
