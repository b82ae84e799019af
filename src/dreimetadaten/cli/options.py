# ABOUTME: Shared Click options and helpers for dreimetadaten CLI commands.
# ABOUTME: Provides the --db option and a reader for catalog JSON files.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from dreimetadaten.db.connection import DEFAULT_DB_PATH
from dreimetadaten.metadata.codec import DecodeError, decode
from dreimetadaten.metadata.types import Catalog

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    help=f"Path to metadata database (default: {DEFAULT_DB_PATH})",
)


def read_catalog_file(path: Path, console: Console) -> Catalog:
    """Decode a catalog JSON file, exiting with status 1 on any error."""
    try:
        return decode(path.read_bytes())
    except DecodeError as exc:
        console.print(f"[red]Error:[/red] {path.name}: {escape(str(exc))}")
        raise SystemExit(1) from exc
