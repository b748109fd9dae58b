"""Command-line interface for rbfile."""

import os
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rbfile import __version__
from rbfile.common.config import Settings, configure_logging, load_settings
from rbfile.common.errors import RbFileError
from rbfile.core.output import Process, print_bytes
from rbfile.core.read import binread_result, textread_result
from rbfile.core.write import write as write_primitive

app = typer.Typer(
    name="rbfile",
    help="rbfile - Ruby-compatible whole-file read and write primitives",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()


def print_error(message: str) -> None:
    """Print error message."""
    console.print(f"[bold red]✗[/bold red] {escape(message)}")


def _settings(ctx: typer.Context) -> Settings:
    settings: Settings = ctx.obj["settings"]
    return settings


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file path (auto-discovered if not set)",
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override the configured log level"),
) -> None:
    """Read and write whole files with Ruby IO semantics."""
    try:
        settings = load_settings(config)
        if log_level:
            settings = Settings(**{**settings.model_dump(), "log_level": log_level})
    except ValueError as e:
        print_error(f"Invalid configuration: {e}")
        raise typer.Exit(2)
    configure_logging(settings)
    ctx.obj = {"settings": settings}


@app.command()
def binread(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="File to read"),
    length: Optional[int] = typer.Option(None, "--length", "-l", help="Read at most this many bytes"),
    offset: Optional[int] = typer.Option(None, "--offset", "-o", help="Start reading at this byte (needs --length)"),
) -> None:
    """Write the bytes of PATH to stdout, like IO.binread."""
    try:
        result = binread_result(path, length, offset, settings=_settings(ctx))
    except RbFileError as e:
        print_error(f"{e.ruby_name}: {e}")
        raise typer.Exit(1)
    print_bytes(Process(), result.data)


@app.command("read")
def read_text(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="File to read"),
    length: Optional[int] = typer.Option(None, "--length", "-l", help="Read at most this many bytes"),
    offset: Optional[int] = typer.Option(None, "--offset", "-o", help="Start reading at this byte (needs --length)"),
) -> None:
    """Write the bytes of PATH to stdout, like IO.read."""
    try:
        result = textread_result(path, length, offset, settings=_settings(ctx))
    except RbFileError as e:
        print_error(f"{e.ruby_name}: {e}")
        raise typer.Exit(1)
    print_bytes(Process(), result.data)


@app.command()
def write(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="File to write"),
    data: Optional[str] = typer.Argument(None, help="Data to write (omit with --stdin)"),
    offset: Optional[int] = typer.Option(
        None,
        "--offset",
        "-o",
        help="Write at this byte and keep the rest of the file (default: replace the file)",
    ),
    stdin: bool = typer.Option(False, "--stdin", help="Read the data from stdin"),
) -> None:
    """Write DATA to PATH, like IO.write, and print the byte count."""
    if stdin == (data is not None):
        print_error("Give either DATA or --stdin")
        raise typer.Exit(2)

    payload = sys.stdin.buffer.read() if stdin else os.fsencode(data)  # type: ignore[arg-type]
    try:
        written = write_primitive(path, payload, offset, settings=_settings(ctx))
    except RbFileError as e:
        cause = e.__cause__
        detail = f" ({cause.ruby_name})" if isinstance(cause, RbFileError) else ""
        print_error(f"{e.ruby_name}: {e}{detail}")
        raise typer.Exit(1)
    console.print(str(written))


@app.command("config")
def show_config(ctx: typer.Context) -> None:
    """Show the effective settings."""
    settings = _settings(ctx)
    table = Table(title=f"rbfile {__version__}")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for name, value in settings.model_dump().items():
        if name == "file_permissions":
            value = oct(value)
        table.add_row(name, str(value))
    console.print(table)


if __name__ == "__main__":
    app()
