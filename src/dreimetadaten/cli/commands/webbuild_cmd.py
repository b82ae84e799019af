# ABOUTME: The `dreimetadaten webbuild` command for generating HTML pages from templates.
# ABOUTME: Fills %%placeholder%% markers per collection using the stored catalog.

from pathlib import Path

import click
from rich.console import Console

from dreimetadaten.cli.options import db_option
from dreimetadaten.core.renderer import TemplateError, render_collection
from dreimetadaten.db.connection import DEFAULT_DB_PATH, open_store
from dreimetadaten.db.store import EmptyStoreError, MetadataStore
from dreimetadaten.metadata.types import CollectionType

console = Console()

DEFAULT_TEMPLATES_DIR = Path("web") / "templates"
DEFAULT_OUTPUT_DIR = Path("web")

_ALL = "all"


def _selected_collections(selector: str) -> list[CollectionType]:
    if selector == _ALL:
        return list(CollectionType)
    return [CollectionType(selector)]


@click.command("webbuild")
@click.argument(
    "selector",
    type=click.Choice([ct.value for ct in CollectionType] + [_ALL]),
)
@db_option
@click.option(
    "--template",
    "template_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Template HTML file (default: <templates-dir>/<collection>.html).",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output HTML file (default: <output-dir>/<collection>.html).",
)
@click.option(
    "--templates-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_TEMPLATES_DIR,
    show_default=True,
    help="Directory holding one template per collection.",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_OUTPUT_DIR,
    show_default=True,
    help="Directory the generated pages are written to.",
)
@click.option(
    "--base-url",
    default=None,
    help="Base URL that relative metadata links are resolved against. Treated as a directory; a trailing slash is added when missing.",
)
def webbuild(
    selector: str,
    db_path: Path | None,
    template_path: Path | None,
    output_path: Path | None,
    templates_dir: Path,
    output_dir: Path,
    base_url: str | None,
) -> None:
    """Generate HTML pages for a collection (or all) from template files."""
    if selector == _ALL and (template_path or output_path):
        raise click.UsageError("--template and --output cannot be combined with 'all'.")

    conn = open_store(db_path or DEFAULT_DB_PATH)
    try:
        catalog = MetadataStore(conn).load_catalog()
    except EmptyStoreError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc
    finally:
        conn.close()

    for collection_type in _selected_collections(selector):
        file_name = f"{collection_type.value}.html"
        template_file = template_path or templates_dir / file_name
        output_file = output_path or output_dir / file_name

        if not template_file.is_file():
            console.print(f'[red]Error:[/red] No such file "{template_file}"')
            raise SystemExit(1)

        try:
            content = render_collection(
                catalog,
                collection_type,
                template_file.read_text(encoding="utf-8"),
                base_url=base_url,
            )
        except TemplateError as exc:
            console.print(f"[red]Error:[/red] {template_file}: {exc}")
            raise SystemExit(1) from exc

        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(content, encoding="utf-8")
        console.print(f"[green]Wrote[/green] {output_file}")
