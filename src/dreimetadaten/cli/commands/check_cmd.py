# ABOUTME: The `dreimetadaten check` command for validating a catalog JSON file.
# ABOUTME: Decodes the file and reports duplicate numbers and inverted chapter ranges.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dreimetadaten.cli.options import read_catalog_file
from dreimetadaten.core.validator import validate_catalog

console = Console()


@click.command("check")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def check(path: Path) -> None:
    """Decode and validate a catalog JSON file."""
    catalog = read_catalog_file(path, console)
    result = validate_catalog(catalog)

    if not result.is_valid:
        table = Table()
        table.add_column("Location", style="dim")
        table.add_column("Issue", style="red")
        for issue in result.issues:
            table.add_row(escape(issue.path), escape(issue.message))

        console.print(table)
        console.print(
            f"\n[red]{result.total_issues} issue(s) found in {result.checked} episode(s).[/red]"
        )
        raise SystemExit(1)

    console.print(f"[green]All {result.checked} episode(s) valid.[/green]")
