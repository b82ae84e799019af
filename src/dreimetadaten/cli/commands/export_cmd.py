# ABOUTME: The `dreimetadaten export` command for writing the stored catalog as JSON.
# ABOUTME: Loads the catalog from the database and encodes it in canonical key order.

from pathlib import Path

import click
from rich.console import Console

from dreimetadaten.cli.options import db_option
from dreimetadaten.db.connection import DEFAULT_DB_PATH, open_store
from dreimetadaten.db.store import EmptyStoreError, MetadataStore
from dreimetadaten.metadata.codec import EncodeError, encode

console = Console(stderr=True)


@click.command("export")
@db_option
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write JSON to this file instead of stdout.",
)
@click.option(
    "--prefixed-keys",
    is_flag=True,
    default=False,
    help='Write keys with their rank prefix (e.g. "04_nummer") for older tooling.',
)
def export(db_path: Path | None, output_path: Path | None, prefixed_keys: bool) -> None:
    """Export the stored catalog as JSON."""
    conn = open_store(db_path or DEFAULT_DB_PATH)
    try:
        catalog = MetadataStore(conn).load_catalog()
        text = encode(catalog, prefixed_keys=prefixed_keys)
    except (EmptyStoreError, EncodeError) as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc
    finally:
        conn.close()

    if output_path is None:
        click.echo(text, nl=False)
        return

    output_path.write_text(text, encoding="utf-8")
    console.print(f"[green]Exported {catalog.episode_count} episode(s) to {output_path}[/green]")
