"""CLI entry point for pinmap.

Invoked as::

    pinmap [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m pinmap.cli.main

Commands
--------
parse       Dump parsed pins and errors as JSON or YAML
check       Report lines that fail to parse
fit         Compute the viewport that frames a file's pins
fmt         Rewrite a file in canonical annotation syntax
decode      Decode a single grid code
version     Show version information

Every FILE argument accepts ``-`` for standard input.
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from pinmap.config import MapSettings
    from pinmap.model.nodes import ParseResult

console = Console()
err_console = Console(stderr=True)


def _read_source(path: str) -> str:
    """Read an annotation file (or stdin for ``-``), exiting on error."""
    if path == "-":
        return click.get_text_stream("stdin").read()
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File not found: {escape(path)}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {escape(path)}: {escape(str(exc))}")
        sys.exit(1)


def _settings_or_exit(path: str | None) -> "MapSettings":
    """Load settings from ``path`` (or defaults), exiting on error."""
    from pinmap.config import MapSettings, SettingsError, load_settings

    if path is None:
        return MapSettings()
    try:
        return load_settings(path)
    except SettingsError as exc:
        err_console.print(f"[red]Settings error:[/red] {escape(str(exc))}")
        sys.exit(1)


def _parse(source: str, settings: "MapSettings") -> "ParseResult":
    from pinmap.parser import Parser

    return Parser(settings.decoder()).parse(source)


def _print_errors(result: "ParseResult", path: str) -> None:
    for error in result.errors:
        err_console.print(f"[yellow]Warning:[/yellow] {escape(path)}: {escape(str(error))}")


def _emit(text: str, lang: str, output: str | None, what: str) -> None:
    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]{what} written to[/green] {escape(output)}")
    else:
        console.print(Syntax(text, lang, line_numbers=True))


_settings_option = click.option(
    "--settings",
    "settings_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="YAML settings file (reference location, surface size, ...).",
)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="pinmap")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Map annotation toolkit: parser, grid-code decoder, viewport fitter."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from pinmap import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]pinmap[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# parse command
# ---------------------------------------------------------------------------


@cli.command(name="parse")
@click.argument("file", type=click.Path(exists=False, allow_dash=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="Output format",
)
@click.option("--output", "-o", default=None, help="Output file path (defaults to stdout)")
@_settings_option
def parse_command(
    file: str, output_format: str, output: str | None, settings_path: str | None
) -> None:
    """Parse an annotation file and dump its pins, errors and initial view.

    FILE is the path to the annotation text, or - for stdin.
    """
    from pinmap.model.serializer import PinSerializer
    from pinmap.viewport import initial_view

    settings = _settings_or_exit(settings_path)
    result = _parse(_read_source(file), settings)
    view = initial_view(result.pins, settings)

    serializer = PinSerializer()
    if output_format.lower() == "json":
        _emit(serializer.to_json(result, view), "json", output, "Pins")
    else:
        _emit(serializer.to_yaml(result, view), "yaml", output, "Pins")


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.argument("file", type=click.Path(exists=False, allow_dash=True))
@_settings_option
def check_command(file: str, settings_path: str | None) -> None:
    """Report every line that fails to parse.

    FILE is the path to the annotation text, or - for stdin.  Exits with
    status 1 when any line fails.
    """
    settings = _settings_or_exit(settings_path)
    result = _parse(_read_source(file), settings)

    if result.ok:
        console.print(f"[green]OK[/green] {escape(file)}: {len(result.pins)} pin(s), no errors")
        sys.exit(0)

    table = Table(title=f"Check: {escape(file)}", show_lines=True)
    table.add_column("Line", style="bold", min_width=4)
    table.add_column("Kind", min_width=10)
    table.add_column("Message")
    table.add_column("Source", style="dim")

    for diagnostic in result.diagnostics:
        table.add_row(
            str(diagnostic.line),
            diagnostic.kind.value,
            f"[red]{escape(diagnostic.message)}[/red]",
            escape(diagnostic.source),
        )

    console.print(table)
    console.print(
        f"\n[bold]Summary:[/bold] {len(result.pins)} pin(s), "
        f"{len(result.diagnostics)} error(s)"
    )
    sys.exit(1)


# ---------------------------------------------------------------------------
# fit command
# ---------------------------------------------------------------------------


@cli.command(name="fit")
@click.argument("file", type=click.Path(exists=False, allow_dash=True))
@click.option("--width", type=click.IntRange(min=1), default=None, help="Surface width in pixels")
@click.option("--height", type=click.IntRange(min=1), default=None, help="Surface height in pixels")
@_settings_option
def fit_command(
    file: str, width: int | None, height: int | None, settings_path: str | None
) -> None:
    """Compute the center and zoom that frame a file's pins.

    FILE is the path to the annotation text, or - for stdin.  Lines that
    fail to parse are reported on stderr and left out of the fit.
    """
    from pinmap.viewport import fit

    settings = _settings_or_exit(settings_path).with_overrides(width=width, height=height)
    result = _parse(_read_source(file), settings)
    _print_errors(result, file)

    view = fit(result.pins, settings.width, settings.height)
    click.echo(json.dumps(view.to_dict()))


# ---------------------------------------------------------------------------
# fmt command
# ---------------------------------------------------------------------------


@cli.command(name="fmt")
@click.argument("file", type=click.Path(exists=False, allow_dash=True))
@click.option("--in-place", is_flag=True, default=False, help="Rewrite the file in place")
@_settings_option
def fmt_command(file: str, in_place: bool, settings_path: str | None) -> None:
    """Format an annotation file to canonical syntax.

    FILE is the path to the annotation text.  Lines that fail to parse
    are reported and the file is left unchanged.
    """
    from pinmap.formatter import format_pins

    settings = _settings_or_exit(settings_path)
    result = _parse(_read_source(file), settings)
    if not result.ok:
        _print_errors(result, file)
        err_console.print("[red]Not formatted:[/red] fix the errors above first")
        sys.exit(1)

    formatted = format_pins(result.pins)
    if in_place and file != "-":
        Path(file).write_text(formatted, encoding="utf-8")
        console.print(f"[green]Formatted[/green] {escape(file)}")
    else:
        click.echo(formatted, nl=False)


# ---------------------------------------------------------------------------
# decode command
# ---------------------------------------------------------------------------


@cli.command(name="decode")
@click.argument("code")
@click.option("--ref-lat", type=click.FloatRange(-90, 90), default=None, help="Reference latitude for short codes")
@click.option("--ref-lng", type=click.FloatRange(-180, 180), default=None, help="Reference longitude for short codes")
@_settings_option
def decode_command(
    code: str, ref_lat: float | None, ref_lng: float | None, settings_path: str | None
) -> None:
    """Decode a grid code to the center of its cell.

    CODE is a full code such as 849VCWC8+R9 or a short code such as
    CWC8+R9, which is recovered near the reference location.
    """
    from pinmap.errors import GridCodeError

    settings = _settings_or_exit(settings_path).with_overrides(
        reference_latitude=ref_lat, reference_longitude=ref_lng
    )
    try:
        lat, lng = settings.decoder().decode(code)
    except GridCodeError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)
    click.echo(json.dumps({"code": code.upper(), "lat": lat, "lng": lng}))


if __name__ == "__main__":
    cli()
