# ABOUTME: The `dreimetadaten import` command for loading a catalog JSON file into the database.
# ABOUTME: Validates the decoded catalog first and replaces the stored content on success.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from dreimetadaten.cli.options import db_option, read_catalog_file
from dreimetadaten.core.validator import validate_catalog
from dreimetadaten.db.connection import DEFAULT_DB_PATH, open_store
from dreimetadaten.db.store import MetadataStore

console = Console()


@click.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@db_option
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Store the catalog even if validation reports issues.",
)
def import_catalog(path: Path, db_path: Path | None, force: bool) -> None:
    """Import a catalog JSON file, replacing the stored catalog."""
    catalog = read_catalog_file(path, console)

    result = validate_catalog(catalog)
    if not result.is_valid:
        for issue in result.issues:
            console.print(f"  [yellow]{escape(issue.path)}:[/yellow] {escape(issue.message)}")
        if not force:
            console.print(
                f"[red]{result.total_issues} issue(s) found; nothing imported.[/red] "
                "Use --force to import anyway."
            )
            raise SystemExit(1)

    conn = open_store(db_path or DEFAULT_DB_PATH)
    try:
        written = MetadataStore(conn).save_catalog(catalog)
    finally:
        conn.close()

    console.print(f"[green]Imported {written} episode(s).[/green]")
