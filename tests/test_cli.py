"""Tests for CLI commands using context injection.

Commands accept a _context parameter for dependency injection, so most tests
call them directly with a MemoryFileSystem or a mock instead of the host
filesystem.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import typer
from typer.testing import CliRunner

from hostfs import __version__, cli
from hostfs.config import FileSystemSettings
from hostfs.context import AppContext
from hostfs.errors import UnlinkError
from hostfs.memory import MemoryFileSystem


@pytest.fixture
def memory_context() -> AppContext:
    """Create an AppContext backed by an in-memory filesystem."""
    fs = MemoryFileSystem()
    fs.mkdir("/work")
    return AppContext(filesystem=fs, settings=fs.settings, settings_source="test")


@pytest.fixture
def mock_context(mock_filesystem: MagicMock) -> AppContext:
    """Create an AppContext with a mock filesystem."""
    return AppContext(filesystem=mock_filesystem, settings=FileSystemSettings())


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestQueryCommands:
    """Tests for exists, read and info."""

    def test_exists_found(self, memory_context: AppContext) -> None:
        memory_context.filesystem.touch("/work/a.txt")

        cli.exists(path="/work/a.txt", _context=memory_context)

    def test_exists_missing(self, memory_context: AppContext) -> None:
        """Test a missing path exits with code 1."""
        with pytest.raises(typer.Exit) as exc_info:
            cli.exists(path="/work/missing.txt", _context=memory_context)
        assert exc_info.value.exit_code == 1

    def test_exists_path_too_long(self, memory_context: AppContext) -> None:
        too_long = "/" + "a" * memory_context.settings.max_path_length

        with pytest.raises(typer.Exit) as exc_info:
            cli.exists(path=too_long, _context=memory_context)
        assert exc_info.value.exit_code == 1

    def test_read(self, memory_context: AppContext, capsys: pytest.CaptureFixture) -> None:
        memory_context.filesystem.write("/work/a.txt", "[bold]raw[/bold] text")

        cli.read(path="/work/a.txt", _context=memory_context)

        assert capsys.readouterr().out == "[bold]raw[/bold] text"

    def test_read_missing(self, memory_context: AppContext) -> None:
        with pytest.raises(typer.Exit) as exc_info:
            cli.read(path="/work/missing.txt", _context=memory_context)
        assert exc_info.value.exit_code == 1

    def test_info(self, memory_context: AppContext, capsys: pytest.CaptureFixture) -> None:
        """Test info shows the detected MIME type and size."""
        memory_context.filesystem.write("/work/a.txt", "hello")

        cli.info(path="/work/a.txt", _context=memory_context)

        out = capsys.readouterr().out
        assert "text/plain" in out
        assert "5 bytes" in out

    def test_info_missing(self, memory_context: AppContext, capsys: pytest.CaptureFixture) -> None:
        cli.info(path="/work/missing.txt", _context=memory_context)

        assert "missing" in capsys.readouterr().out


class TestFileCommands:
    """Tests for write, append, copy, move, touch and rm."""

    def test_write(self, memory_context: AppContext) -> None:
        cli.write(path="/work/a.txt", content="hello", lock=None, _context=memory_context)

        assert memory_context.filesystem.read("/work/a.txt") == "hello"

    def test_write_lock_default_from_settings(self, mock_filesystem: MagicMock) -> None:
        """Test write falls back to settings.lock_writes."""
        ctx = AppContext(
            filesystem=mock_filesystem, settings=FileSystemSettings(lock_writes=True)
        )

        cli.write(path="/a.txt", content="hello", lock=None, _context=ctx)

        mock_filesystem.write.assert_called_once_with("/a.txt", "hello", lock=True)

    def test_write_lock_override(self, mock_context: AppContext) -> None:
        cli.write(path="/a.txt", content="hello", lock=True, _context=mock_context)

        mock_context.filesystem.write.assert_called_once_with("/a.txt", "hello", lock=True)

    def test_write_failure(self, memory_context: AppContext) -> None:
        with pytest.raises(typer.Exit) as exc_info:
            cli.write(path="/missing/a.txt", content="x", lock=None, _context=memory_context)
        assert exc_info.value.exit_code == 1

    def test_append(self, memory_context: AppContext) -> None:
        memory_context.filesystem.write("/work/a.txt", "a")

        cli.append(path="/work/a.txt", content="b", _context=memory_context)

        assert memory_context.filesystem.read("/work/a.txt") == "ab"

    def test_append_failure(self, mock_context: AppContext) -> None:
        """Test a False result from append exits with code 1."""
        mock_context.filesystem.append.return_value = False

        with pytest.raises(typer.Exit) as exc_info:
            cli.append(path="/a.txt", content="b", _context=mock_context)
        assert exc_info.value.exit_code == 1

    def test_copy(self, memory_context: AppContext) -> None:
        fs = memory_context.filesystem
        fs.write("/work/a.txt", "content")

        cli.copy(source="/work/a.txt", destination="/work/b.txt", _context=memory_context)

        assert fs.read("/work/b.txt") == "content"
        assert fs.exists("/work/a.txt")

    def test_copy_failure(self, memory_context: AppContext) -> None:
        with pytest.raises(typer.Exit) as exc_info:
            cli.copy(source="/work/none", destination="/work/b", _context=memory_context)
        assert exc_info.value.exit_code == 1

    def test_move(self, memory_context: AppContext) -> None:
        fs = memory_context.filesystem
        fs.write("/work/a.txt", "content")

        cli.move(source="/work/a.txt", destination="/work/b.txt", _context=memory_context)

        assert fs.read("/work/b.txt") == "content"
        assert not fs.exists("/work/a.txt")

    def test_touch_passes_times(self, mock_context: AppContext) -> None:
        cli.touch(path="/a.txt", mtime=100.0, atime=50.0, _context=mock_context)

        mock_context.filesystem.touch.assert_called_once_with("/a.txt", 100.0, 50.0)

    def test_rm_sequence(self, memory_context: AppContext) -> None:
        fs = memory_context.filesystem
        for name in ("a", "b"):
            fs.touch(f"/work/{name}")

        cli.remove(paths=["/work/a", "/work/b"], _context=memory_context)

        assert not fs.exists("/work/a")
        assert not fs.exists("/work/b")

    def test_rm_stops_at_failure(
        self, memory_context: AppContext, capsys: pytest.CaptureFixture
    ) -> None:
        """Test rm reports the failing path and leaves later paths alone."""
        fs = memory_context.filesystem
        fs.touch("/work/a")
        fs.touch("/work/c")

        with pytest.raises(typer.Exit) as exc_info:
            cli.remove(paths=["/work/a", "/work/b", "/work/c"], _context=memory_context)

        assert exc_info.value.exit_code == 1
        assert "/work/b" in capsys.readouterr().out
        assert not fs.exists("/work/a")
        assert fs.exists("/work/c")

    def test_rm_unlink_error_exits(self, mock_context: AppContext) -> None:
        mock_context.filesystem.unlink.side_effect = UnlinkError("Failed", "/a")

        with pytest.raises(typer.Exit):
            cli.remove(paths=["/a"], _context=mock_context)


class TestDirectoryCommands:
    """Tests for mkdir and rmdir."""

    def test_mkdir_parents(self, memory_context: AppContext) -> None:
        cli.mkdir(path="/work/a/b", mode=None, parents=True, _context=memory_context)

        assert memory_context.filesystem.is_directory("/work/a/b")

    def test_mkdir_mode(self, mock_context: AppContext) -> None:
        cli.mkdir(path="/d", mode="750", parents=False, _context=mock_context)

        mock_context.filesystem.mkdir.assert_called_once_with("/d", 0o750, recursive=False)

    def test_mkdir_default_mode_from_settings(self, mock_filesystem: MagicMock) -> None:
        ctx = AppContext(filesystem=mock_filesystem, settings=FileSystemSettings(default_mode=0o700))

        cli.mkdir(path="/d", mode=None, parents=True, _context=ctx)

        mock_filesystem.mkdir.assert_called_once_with("/d", 0o700, recursive=True)

    @pytest.mark.parametrize("mode", ["abc", "789", "17777"])
    def test_mkdir_bad_mode(self, mock_context: AppContext, mode: str) -> None:
        with pytest.raises(typer.BadParameter):
            cli.mkdir(path="/d", mode=mode, parents=False, _context=mock_context)

        mock_context.filesystem.mkdir.assert_not_called()

    def test_mkdir_failure(self, memory_context: AppContext) -> None:
        with pytest.raises(typer.Exit) as exc_info:
            cli.mkdir(path="/work/x/y", mode=None, parents=False, _context=memory_context)
        assert exc_info.value.exit_code == 1

    def test_rmdir(self, memory_context: AppContext) -> None:
        fs = memory_context.filesystem
        fs.mkdir("/work/tree/sub", recursive=True)
        fs.touch("/work/tree/sub/file")

        cli.rmdir(path="/work/tree", _context=memory_context)

        assert not fs.exists("/work/tree")

    def test_rmdir_missing(self, memory_context: AppContext) -> None:
        with pytest.raises(typer.Exit) as exc_info:
            cli.rmdir(path="/work/missing", _context=memory_context)
        assert exc_info.value.exit_code == 1


class TestConfigCommands:
    """Tests for config commands."""

    def test_config_show(self, memory_context: AppContext, capsys: pytest.CaptureFixture) -> None:
        cli.config_show(_context=memory_context)

        out = capsys.readouterr().out
        assert "Configuration" in out
        assert "utf-8" in out
        assert "Using defaults" not in out

    def test_config_show_defaults_hint(self, capsys: pytest.CaptureFixture) -> None:
        """Test a hint is shown when no settings file was loaded."""
        ctx = AppContext(filesystem=MemoryFileSystem())

        cli.config_show(_context=ctx)

        assert "Using defaults" in capsys.readouterr().out


class TestContextErrors:
    """Tests for settings problems surfaced by commands."""

    def test_invalid_settings_exit(self) -> None:
        with patch.object(cli, "create_context", side_effect=ValueError("Invalid settings file")):
            with pytest.raises(typer.Exit) as exc_info:
                cli.exists(path="/a", _context=None)
        assert exc_info.value.exit_code == 1


class TestApp:
    """Tests for the Typer application wiring."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli.app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_write_then_read(self, runner: CliRunner, memory_context: AppContext) -> None:
        """Test commands run end to end through the app."""
        with patch.object(cli, "create_context", return_value=memory_context), patch.object(
            cli, "configure_logging"
        ):
            write_result = runner.invoke(cli.app, ["write", "/work/a.txt", "hello"])
            read_result = runner.invoke(cli.app, ["read", "/work/a.txt"])

        assert write_result.exit_code == 0
        assert read_result.exit_code == 0
        assert "hello" in read_result.output

    def test_config_option_is_forwarded(
        self, runner: CliRunner, memory_context: AppContext, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(cli, "_config_path", None)
        with patch.object(cli, "create_context", return_value=memory_context) as factory, patch.object(
            cli, "configure_logging"
        ) as configure:
            result = runner.invoke(cli.app, ["--verbose", "--config", "custom.yaml", "config", "show"])

        assert result.exit_code == 0
        configure.assert_called_once_with(True)
        assert str(factory.call_args.args[0]) == "custom.yaml"

    def test_missing_path_exit_code(self, runner: CliRunner, memory_context: AppContext) -> None:
        with patch.object(cli, "create_context", return_value=memory_context), patch.object(
            cli, "configure_logging"
        ):
            result = runner.invoke(cli.app, ["exists", "/work/nope"])

        assert result.exit_code == 1
