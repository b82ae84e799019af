# ABOUTME: The `dreimetadaten ls` command for listing stored episodes.
# ABOUTME: Displays a Rich table of one collection from the metadata database.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dreimetadaten.cli.options import db_option
from dreimetadaten.db.connection import DEFAULT_DB_PATH, open_store
from dreimetadaten.db.store import MetadataStore
from dreimetadaten.metadata.types import CollectionType

console = Console()


@click.command("ls")
@db_option
@click.option(
    "--collection",
    "collection",
    type=click.Choice([ct.value for ct in CollectionType]),
    default=CollectionType.SERIE.value,
    show_default=True,
    help="Collection to list.",
)
def ls(db_path: Path | None, collection: str) -> None:
    """List the episodes of one collection."""
    collection_type = CollectionType(collection)
    conn = open_store(db_path or DEFAULT_DB_PATH)
    try:
        episodes = MetadataStore(conn).list_episodes(collection_type)
    finally:
        conn.close()

    if not episodes:
        console.print(f"[yellow]No episodes in {collection_type.display_name}.[/yellow]")
        return

    table = Table(title=collection_type.display_name)
    table.add_column("Nr.", style="dim", justify="right")
    table.add_column("Titel", style="bold")
    table.add_column("Autor")
    table.add_column("Teile", justify="right")
    table.add_column("Kapitel", justify="right")

    for episode in episodes:
        table.add_row(
            str(episode.nummer),
            escape(episode.unit.titel) if episode.unit.titel else "[dim]unbekannt[/dim]",
            escape(episode.unit.autor or ""),
            str(len(episode.teile or ())),
            str(len(episode.unit.kapitel or ())),
        )

    console.print(table)
    console.print(f"\n[dim]{len(episodes)} episode(s)[/dim]")
