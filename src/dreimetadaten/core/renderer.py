# ABOUTME: Fills %%placeholder%% markers in an HTML template from the Catalog.
# ABOUTME: Walks the entity graph read-only; one table row per episode and per part.

import html
import re
from urllib.parse import urljoin

from dreimetadaten.metadata.types import Catalog, CollectionType, Episode, LinkSet, RecordingUnit

_PLACEHOLDER_RE = re.compile(r"%%([a-z_]+)%%")

# Link labels shown in the rendered page, in display order.
_LINK_LABELS: tuple[tuple[str, str], ...] = (
    ("json", "JSON"),
    ("ffmetadata", "ffmetadata"),
    ("xld_log", "Log"),
    ("cover", "Cover"),
    ("cover_itunes", "Cover (iTunes)"),
    ("cover_kosmos", "Cover (Kosmos)"),
)


class TemplateError(Exception):
    """Raised when a template contains a placeholder the renderer does not know."""


def _cell(value: str | None) -> str:
    return f"<td>{html.escape(value)}</td>" if value else "<td></td>"


def _as_directory(base_url: str) -> str:
    # urljoin replaces the last path segment unless the base ends in "/".
    return base_url if base_url.endswith("/") else base_url + "/"


def _render_links(links: LinkSet | None, base_url: str | None) -> str:
    if links is None:
        return "<td></td>"
    targets = dict(links.items())
    anchors = []
    for name, label in _LINK_LABELS:
        target = targets.get(name)
        if target is None:
            continue
        href = urljoin(_as_directory(base_url), target) if base_url else target
        anchors.append(f'<a href="{html.escape(href)}">{html.escape(label)}</a>')
    return f"<td>{' '.join(anchors)}</td>"


def _render_row(number: str, unit: RecordingUnit, base_url: str | None, css_class: str) -> str:
    return (
        f'<tr class="{css_class}">'
        f"<td>{html.escape(number)}</td>"
        f"{_cell(unit.titel)}"
        f"{_cell(unit.autor)}"
        f"{_cell(unit.veroeffentlichungsdatum)}"
        f"{_render_links(unit.links, base_url)}"
        "</tr>"
    )


def render_entries(episodes: tuple[Episode, ...], base_url: str | None = None) -> str:
    """Render HTML table rows for a sequence of episodes, parts nested below each."""
    rows = []
    for episode in episodes:
        rows.append(_render_row(f"{episode.nummer:03d}", episode.unit, base_url, "folge"))
        for part in episode.teile or ():
            label = f"{episode.nummer:03d}.{part.teil_nummer}"
            if part.buchstabe:
                label += f" {part.buchstabe}"
            rows.append(_render_row(label, part.unit, base_url, "teil"))
    return "\n".join(rows)


def render_collection(
    catalog: Catalog,
    collection_type: CollectionType,
    template: str,
    *,
    base_url: str | None = None,
) -> str:
    """Substitute every placeholder in template for one collection.

    Supported placeholders: %%collection%% (display name), %%selector%%,
    %%count%% and %%entries%%.

    Raises:
        TemplateError: If the template uses an unknown placeholder.
    """
    collection_type = CollectionType(collection_type)
    episodes = catalog.collection(collection_type)
    values = {
        "collection": html.escape(collection_type.display_name),
        "selector": collection_type.value,
        "count": str(len(episodes)),
        "entries": render_entries(episodes, base_url),
    }

    def substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in values:
            raise TemplateError(f"Unknown placeholder '%%{name}%%'")
        return values[name]

    return _PLACEHOLDER_RE.sub(substitute, template)
