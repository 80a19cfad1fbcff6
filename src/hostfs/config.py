"""Settings for filesystem implementations and the CLI."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from hostfs.paths import platform_max_path_length

__all__ = ["CONFIG_PATH", "FileSystemSettings", "load_settings"]

# Default settings location
CONFIG_PATH = Path.home() / ".hostfs" / "config.yaml"


class FileSystemSettings(BaseModel):
    """Tunable behavior shared by all filesystem implementations."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    encoding: str = "utf-8"
    max_path_length: int = Field(
        default_factory=platform_max_path_length, alias="maxPathLength", gt=2
    )
    default_mode: int = Field(default=0o777, alias="defaultMode", ge=0, le=0o7777)
    lock_writes: bool = Field(default=False, alias="lockWrites")
    strict_rmdir: bool = Field(default=False, alias="strictRmdir")

    @property
    def path_length_limit(self) -> int:
        """Longest path accepted by ``exists``."""
        return self.max_path_length - 2

    @classmethod
    def from_file(cls, path: Path) -> FileSystemSettings:
        """Load settings from a JSON or YAML file.

        Args:
            path: Path to a .json, .yaml or .yml file.

        Returns:
            Parsed FileSystemSettings.

        Raises:
            FileNotFoundError: If file doesn't exist.
            ValueError: If the content is malformed or fails validation.
        """
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")

        text = path.read_text()
        try:
            if path.suffix == ".json":
                data: Any = json.loads(text)
            else:
                data = yaml.safe_load(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ValueError(f"Invalid settings file {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Invalid settings file {path}: expected a mapping")

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid settings file {path}: {e}") from e


def load_settings(path: Path | None = None) -> FileSystemSettings:
    """Load settings, falling back to defaults.

    Args:
        path: Explicit settings file. When None, ``~/.hostfs/config.yaml``
            is used if it exists.

    Returns:
        Loaded or default settings.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        ValueError: If the file content is invalid.
    """
    if path is not None:
        return FileSystemSettings.from_file(path)
    if CONFIG_PATH.exists():
        return FileSystemSettings.from_file(CONFIG_PATH)
    return FileSystemSettings()
