"""CLI commands using Typer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

if TYPE_CHECKING:
    from localstore.context import AppContext

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from localstore import __version__
from localstore.context import create_context
from localstore.display import Display
from localstore.exceptions import FileNotFound, StorageError
from localstore.protocols import ChecksumCalculator, MimeTypeProvider, SizeCalculator
from localstore.types import KeyInfo

app = typer.Typer(
    name="localstore",
    help="Key-value storage on a local directory",
    no_args_is_help=True,
)

console = Console(soft_wrap=True)
display = Display(console)

# Global options, set by the callback for the commands of one invocation
state: dict[str, Any] = {"root": None, "config": None, "mode": None}


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"localstore v{__version__}")
        raise typer.Exit()


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    root: Annotated[
        Path | None,
        typer.Option("--root", "-r", help="Storage root directory"),
    ] = None,
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="JSON config file")
    ] = None,
    mode: Annotated[
        str | None, typer.Option("--mode", help="Octal mode of created directories")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable debug logging")] = False,
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
) -> None:
    """Key-value storage on a local directory."""
    state["root"] = root
    state["config"] = config
    state["mode"] = mode
    if verbose:
        _configure_logging()


def _get_context(context: AppContext | None) -> AppContext:
    """Return the injected context or build one from the global options.

    Raises:
        typer.Exit: If the storage root cannot be opened.
    """
    if context is not None:
        return context
    try:
        return create_context(state["root"], state["config"], state["mode"])
    except (ValueError, ValidationError, FileNotFoundError, StorageError) as e:
        display.show_error(str(e))
        raise typer.Exit(1) from e


def _fail(e: Exception) -> typer.Exit:
    display.show_error(str(e))
    return typer.Exit(1)


# ============================================================================
# Commands
# ============================================================================


@app.command("keys")
def keys_command(
    tree: Annotated[bool, typer.Option("--tree", "-t", help="Show keys as a tree")] = False,
    _context=None,
) -> None:
    """List all keys in sorted order."""
    ctx = _get_context(_context)
    try:
        keys = ctx.adapter.keys()
    except StorageError as e:
        raise _fail(e) from e
    if tree:
        display.show_tree(keys, str(ctx.config.root))
    else:
        display.show_keys(keys, str(ctx.config.root))


@app.command("cat")
def cat(
    key: Annotated[str, typer.Argument(help="Key to read")],
    _context=None,
) -> None:
    """Print the content of a key."""
    ctx = _get_context(_context)
    try:
        content = ctx.adapter.read(key)
    except StorageError as e:
        raise _fail(e) from e
    typer.echo(content, nl=False)


@app.command("put")
def put(
    key: Annotated[str, typer.Argument(help="Key to write")],
    content: Annotated[
        str | None, typer.Option("--content", help="Text to write")
    ] = None,
    file: Annotated[
        Path | None, typer.Option("--file", "-f", help="Read content from a file")
    ] = None,
    _context=None,
) -> None:
    """Write content to a key (from --content, --file or stdin)."""
    ctx = _get_context(_context)

    if content is not None and file is not None:
        display.show_error("Use either --content or --file, not both")
        raise typer.Exit(1)

    if content is not None:
        data = content.encode("utf-8")
    elif file is not None:
        try:
            data = file.read_bytes()
        except OSError as e:
            raise _fail(e) from e
    else:
        data = typer.get_binary_stream("stdin").read()

    try:
        written = ctx.adapter.write(key, data)
    except StorageError as e:
        raise _fail(e) from e
    display.show_success(f"Wrote {written} bytes to '{key}'")


@app.command("mv")
def mv(
    source: Annotated[str, typer.Argument(help="Existing key")],
    target: Annotated[str, typer.Argument(help="New key")],
    _context=None,
) -> None:
    """Rename a key."""
    ctx = _get_context(_context)
    try:
        ctx.adapter.rename(source, target)
    except StorageError as e:
        raise _fail(e) from e
    display.show_success(f"Renamed '{source}' to '{target}'")


@app.command("rm")
def rm(
    key: Annotated[str, typer.Argument(help="Key to delete")],
    _context=None,
) -> None:
    """Delete a key. Directories are deleted recursively."""
    ctx = _get_context(_context)
    try:
        ctx.adapter.delete(key)
    except FileNotFound as e:
        display.show_error(f"Key '{key}' not found")
        raise typer.Exit(1) from e
    except StorageError as e:
        raise _fail(e) from e
    display.show_success(f"Deleted '{key}'")


@app.command("exists")
def exists(
    key: Annotated[str, typer.Argument(help="Key to check")],
    _context=None,
) -> None:
    """Exit with status 0 if a file is stored under the key, 1 otherwise."""
    ctx = _get_context(_context)
    try:
        found = ctx.adapter.exists(key)
    except StorageError as e:
        raise _fail(e) from e
    if not found:
        raise typer.Exit(1)


@app.command("info")
def info(
    key: Annotated[str, typer.Argument(help="Key to describe")],
    _context=None,
) -> None:
    """Show size, checksum, mime type and modification time of a key."""
    ctx = _get_context(_context)
    adapter = ctx.adapter
    capabilities = (SizeCalculator, ChecksumCalculator, MimeTypeProvider)
    if not all(isinstance(adapter, capability) for capability in capabilities):
        display.show_error("The storage adapter does not provide file metadata")
        raise typer.Exit(1)

    try:
        key_info = KeyInfo(
            key=key,
            size=adapter.size(key),
            checksum=adapter.checksum(key),
            mime_type=adapter.mime_type(key),
            mtime=adapter.mtime(key),
        )
    except FileNotFound as e:
        display.show_error(f"Key '{key}' not found")
        raise typer.Exit(1) from e
    except StorageError as e:
        raise _fail(e) from e
    display.show_info(key_info)


if __name__ == "__main__":
    app()
