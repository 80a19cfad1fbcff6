"""CLI commands using Typer."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from hostfs.context import AppContext

import typer
from rich.logging import RichHandler

from hostfs import __version__
from hostfs.config import CONFIG_PATH
from hostfs.console import Output
from hostfs.context import create_context
from hostfs.errors import FileSystemError
from hostfs.types import PathInfo

app = typer.Typer(
    name="hostfs",
    help="Inspect and manipulate files through the hostfs interface",
    no_args_is_help=True,
)

config_app = typer.Typer(help="Configuration commands")

app.add_typer(config_app, name="config")

output = Output()

# Set by the --config option, read when commands build their context
_config_path: Path | None = None


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        output.console.print(f"hostfs v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=output.console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", help="Log every filesystem operation")
    ] = False,
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="Settings file (JSON or YAML)")
    ] = None,
) -> None:
    """Inspect and manipulate files through the hostfs interface."""
    global _config_path
    _config_path = config
    configure_logging(verbose)


def _get_context() -> AppContext:
    """Build the application context, reporting bad settings files."""
    try:
        return create_context(_config_path)
    except (FileNotFoundError, ValueError) as e:
        output.show_error(str(e))
        raise typer.Exit(1) from e


@contextmanager
def _fail_on_error() -> Iterator[None]:
    """Turn a FileSystemError into an error message and exit code 1."""
    try:
        yield
    except FileSystemError as e:
        output.show_error(str(e))
        raise typer.Exit(1) from e


def _parse_mode(value: str | None) -> int | None:
    """Parse an octal permission string such as "755"."""
    if value is None:
        return None
    try:
        mode = int(value, 8)
    except ValueError as e:
        raise typer.BadParameter(f"'{value}' is not an octal mode") from e
    if not 0 <= mode <= 0o7777:
        raise typer.BadParameter(f"'{value}' is out of range")
    return mode


# ============================================================================
# Query Commands
# ============================================================================


@app.command()
def exists(
    path: Annotated[str, typer.Argument(help="Path to check")],
    _context=None,
) -> None:
    """Check whether a path exists (exit code 1 if it does not)."""
    ctx = _context or _get_context()
    with _fail_on_error():
        found = ctx.filesystem.exists(path)
    if not found:
        output.show_warning(f"{path} does not exist")
        raise typer.Exit(1)
    output.show_success(f"{path} exists")


@app.command()
def read(
    path: Annotated[str, typer.Argument(help="File to print")],
    _context=None,
) -> None:
    """Print the content of a file."""
    ctx = _context or _get_context()
    with _fail_on_error():
        content = ctx.filesystem.read(path)
    output.show_content(content)


@app.command()
def info(
    path: Annotated[str, typer.Argument(help="Path to describe")],
    _context=None,
) -> None:
    """Show name parts, size and MIME type of a path."""
    ctx = _context or _get_context()
    with _fail_on_error():
        path_info = PathInfo.from_filesystem(ctx.filesystem, path)
    output.show_path_info(path_info)


# ============================================================================
# File Commands
# ============================================================================


@app.command()
def write(
    path: Annotated[str, typer.Argument(help="File to write")],
    content: Annotated[str, typer.Argument(help="Text to write")],
    lock: Annotated[
        bool | None,
        typer.Option("--lock/--no-lock", help="Hold an exclusive lock while writing"),
    ] = None,
    _context=None,
) -> None:
    """Write text to a file, replacing its content."""
    ctx = _context or _get_context()
    use_lock = ctx.settings.lock_writes if lock is None else lock
    with _fail_on_error():
        ctx.filesystem.write(path, content, lock=use_lock)
    output.show_success(f"Wrote {path}")


@app.command()
def append(
    path: Annotated[str, typer.Argument(help="File to append to")],
    content: Annotated[str, typer.Argument(help="Text to append")],
    _context=None,
) -> None:
    """Append text to a file."""
    ctx = _context or _get_context()
    if not ctx.filesystem.append(path, content):
        output.show_error(f"Failed to append to {path}")
        raise typer.Exit(1)
    output.show_success(f"Appended to {path}")


@app.command()
def copy(
    source: Annotated[str, typer.Argument(help="File to copy")],
    destination: Annotated[str, typer.Argument(help="Target path")],
    _context=None,
) -> None:
    """Copy a file."""
    ctx = _context or _get_context()
    with _fail_on_error():
        ctx.filesystem.copy(source, destination)
    output.show_success(f"Copied {source} to {destination}")


@app.command()
def move(
    source: Annotated[str, typer.Argument(help="File to move")],
    destination: Annotated[str, typer.Argument(help="Target path")],
    _context=None,
) -> None:
    """Move a file."""
    ctx = _context or _get_context()
    with _fail_on_error():
        ctx.filesystem.move(source, destination)
    output.show_success(f"Moved {source} to {destination}")


@app.command()
def touch(
    path: Annotated[str, typer.Argument(help="File to touch")],
    mtime: Annotated[
        float | None, typer.Option("--mtime", help="Modification time (epoch seconds)")
    ] = None,
    atime: Annotated[
        float | None, typer.Option("--atime", help="Access time (epoch seconds)")
    ] = None,
    _context=None,
) -> None:
    """Create a file or update its timestamps."""
    ctx = _context or _get_context()
    with _fail_on_error():
        ctx.filesystem.touch(path, mtime, atime)
    output.show_success(f"Touched {path}")


@app.command("rm")
def remove(
    paths: Annotated[list[str], typer.Argument(help="Files to delete, in order")],
    _context=None,
) -> None:
    """Delete files, stopping at the first failure."""
    ctx = _context or _get_context()
    with _fail_on_error():
        ctx.filesystem.unlink(paths)
    output.show_success(f"Removed {len(paths)} file(s)")


# ============================================================================
# Directory Commands
# ============================================================================


@app.command()
def mkdir(
    path: Annotated[str, typer.Argument(help="Directory to create")],
    mode: Annotated[
        str | None, typer.Option("--mode", "-m", help="Octal permission bits, e.g. 755")
    ] = None,
    parents: Annotated[
        bool, typer.Option("--parents", "-p", help="Create missing parent directories")
    ] = False,
    _context=None,
) -> None:
    """Create a directory."""
    ctx = _context or _get_context()
    parsed = _parse_mode(mode)
    dir_mode = ctx.settings.default_mode if parsed is None else parsed
    with _fail_on_error():
        ctx.filesystem.mkdir(path, dir_mode, recursive=parents)
    output.show_success(f"Created {path}")


@app.command()
def rmdir(
    path: Annotated[str, typer.Argument(help="Directory to delete")],
    _context=None,
) -> None:
    """Delete a directory and everything inside it."""
    ctx = _context or _get_context()
    with _fail_on_error():
        ctx.filesystem.rmdir(path)
    output.show_success(f"Removed {path}")


# ============================================================================
# Config Commands
# ============================================================================


@config_app.command("show")
def config_show(
    _context=None,
) -> None:
    """Show current configuration."""
    ctx = _context or _get_context()
    output.show_settings(ctx.settings, ctx.settings_source)
    if ctx.settings_source == "defaults":
        output.show_info(f"Using defaults; create {CONFIG_PATH} to change them")


if __name__ == "__main__":
    app()
