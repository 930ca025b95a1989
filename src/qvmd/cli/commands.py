"""CLI command implementations"""

import logging
import os
from pathlib import Path
from typing import Annotated, Optional

import typer

from qvmd.config import Settings, load_config
from qvmd.core.pipeline import run_export


SOURCE_ENV = "WATCHMAN_ROOT"
USAGE = "USAGE: qvmd ~/path/to/Quiver.qvlibrary ~/output/folder"
LOG_FORMAT = "%(asctime)s  %(message)s"


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _configure_logging(level: str) -> None:
    try:
        logging.basicConfig(level=level.upper(), format=LOG_FORMAT, datefmt="%H:%M:%S")
    except ValueError as e:
        _fail("Invalid log level", e)


def export_cmd(
    source: Annotated[Optional[str], typer.Argument(
        show_default=False, help="Quiver library to export (WATCHMAN_ROOT overrides it)")] = None,
    output: Annotated[Optional[str], typer.Argument(
        show_default=False, help="Base folder for the export [default: ~/Documents]")] = None,
    ):
    """Export a Quiver library to Markdown notes plus a Jekyll categories.yml."""
    # WATCHMAN_ROOT wins over the positional argument
    source = os.getenv(SOURCE_ENV) or source
    settings = _settings(overrides={"source_root": source, "output_base": output})
    if not settings.source_root:
        typer.echo(USAGE)
        return

    _configure_logging(settings.log_level)
    try:
        result = run_export(Path(settings.source_root).expanduser(), settings)
    except Exception as e:
        if settings.log_level.upper() == "DEBUG":
            raise
        _fail("Export failed", e)

    typer.echo(f"Exported {len(result.notes)} note(s) to {result.output_dir}/")
