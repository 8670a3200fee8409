#!/usr/bin/env python3
"""
CLI for multiwriter.

Renders sample records through the writer so formats and column
formatters can be tried from the shell. Rendered output goes to stdout
(or --output); status messages and logs go to stderr.
"""

import sys
from pathlib import Path

import typer

from multiwriter import ALL_FORMATS, __version__
from multiwriter.cli import run_demo
from multiwriter.config import get_settings, reload_settings
from multiwriter.logging import configure_logging
from multiwriter.utils.ui import ui

app = typer.Typer(
    name="multiwriter",
    help="Render records as CSV, an ASCII table or text blocks",
    rich_markup_mode="rich",
)


@app.callback()
def main(
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Multi-format record writer."""
    settings = reload_settings(config) if config else get_settings()
    level = "debug" if verbose or settings.debug else settings.logging.level
    configure_logging(
        level=level,
        file_path=settings.logging.file_path,
        use_rich=settings.logging.use_rich,
        rich_tracebacks=False,
    )


@app.command()
def demo(
    format: str | None = typer.Option(None, "--format", "-f", help=f"Output format ({', '.join(ALL_FORMATS)})"),
    size: int | None = typer.Option(None, "--size", min=1, help="Text output buffer size"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to file instead of stdout"),
):
    """Write the sample employee records with column formatters applied."""
    settings = get_settings()
    format = format or settings.writer.format
    if format not in ALL_FORMATS:
        ui.warning(f"Unknown format '{format}', nothing will be written", details=f"Use one of: {', '.join(ALL_FORMATS)}")

    if output is None:
        writer = run_demo(sys.stdout, format, size=size or settings.writer.buffer_size)
    else:
        with open(output, "w", newline="", encoding="utf-8") as f:
            writer = run_demo(f, format, size=size or settings.writer.buffer_size)

    err = writer.error()
    if err:
        ui.error("Write failed", details=str(err))
        raise typer.Exit(1)
    if output is not None:
        ui.success(f"Wrote [accent]{format}[/accent] output to {output}")


@app.command()
def formats():
    """List supported output formats."""
    for name in ALL_FORMATS:
        typer.echo(name)


@app.command()
def version():
    """Show version."""
    typer.echo(f"multiwriter {__version__}")


if __name__ == "__main__":
    app()
