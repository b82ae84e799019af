# ABOUTME: Converts between the metadata entity graph and SQLite row dictionaries.
# ABOUTME: Flattens LinkSet into link_* columns and stores speaker groups as JSON arrays.

import json
from typing import Any

from dreimetadaten.metadata.types import Chapter, LinkSet, RecordingUnit

_TEXT_COLUMNS: tuple[str, ...] = (
    "titel",
    "autor",
    "hoerspielskriptautor",
    "beschreibung",
    "veroeffentlichungsdatum",
)

_LINK_NAMES: tuple[str, ...] = (
    "json",
    "ffmetadata",
    "xld_log",
    "cover",
    "cover_itunes",
    "cover_kosmos",
)


def unit_to_row(unit: RecordingUnit) -> dict[str, Any]:
    """Convert the scalar fields of a RecordingUnit to a dict suitable for INSERT.

    Chapters and speakers live in their own tables and are excluded here.
    """
    row: dict[str, Any] = {column: getattr(unit, column) for column in _TEXT_COLUMNS}
    links = unit.links or LinkSet()
    for name in _LINK_NAMES:
        row[f"link_{name}"] = getattr(links, name)
    return row


def row_to_unit(
    row: Any,
    kapitel: list[Chapter] | None = None,
    sprecher: list[tuple[str, ...]] | None = None,
) -> RecordingUnit:
    """Convert an einheit row (dict-like) plus its child rows back to a RecordingUnit.

    An all-NULL set of link columns becomes links=None.
    """
    links = LinkSet(**{name: row[f"link_{name}"] for name in _LINK_NAMES})
    return RecordingUnit(
        **{column: row[column] for column in _TEXT_COLUMNS},
        kapitel=kapitel,
        sprecher=sprecher,
        links=links,
    )


def chapter_to_row(chapter: Chapter, unit_id: int, position: int) -> dict[str, Any]:
    """Convert a Chapter to a kapitel row dict."""
    return {
        "einheit_id": unit_id,
        "position": position,
        "titel": chapter.titel,
        "start": chapter.start,
        "end": chapter.end,
    }


def row_to_chapter(row: Any) -> Chapter:
    """Convert a kapitel row back to a Chapter."""
    return Chapter(titel=row["titel"], start=row["start"], end=row["end"])


def speaker_group_to_row(group: tuple[str, ...], unit_id: int, position: int) -> dict[str, Any]:
    """Convert one speaker group to a sprecher row dict, names as a JSON array."""
    return {
        "einheit_id": unit_id,
        "position": position,
        "namen": json.dumps(list(group), ensure_ascii=False),
    }


def row_to_speaker_group(row: Any) -> tuple[str, ...]:
    """Convert a sprecher row back to a speaker group."""
    return tuple(json.loads(row["namen"]))
