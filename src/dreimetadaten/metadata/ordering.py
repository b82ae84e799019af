# ABOUTME: Canonical key ordering for serialized metadata documents.
# ABOUTME: Maps field names to a fixed rank so output order never depends on declaration order.

import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

# Human-curated output order. "titel" appears twice on purpose (recording unit and
# chapter); lookups use the first occurrence. Link "json" is deliberately absent.
ORDERING: tuple[str, ...] = (
    "serie",
    "spezial",
    "kurzgeschichten",
    "die_dr3i",
    "nummer",
    "teile",
    "teilNummer",
    "buchstabe",
    "titel",
    "autor",
    "hörspielskriptautor",
    "beschreibung",
    "veröffentlichungsdatum",
    "kapitel",
    "sprecher",
    "links",
    "titel",
    "start",
    "end",
    "ffmetadata",
    "xld_log",
    "cover",
    "cover_itunes",
    "cover_kosmos",
)

UNKNOWN_RANK = 99


def _first_positions(names: tuple[str, ...]) -> Mapping[str, int]:
    positions: dict[str, int] = {}
    for index, name in enumerate(names):
        positions.setdefault(name, index)
    return MappingProxyType(positions)


_RANKS = _first_positions(ORDERING)

_PREFIX_RE = re.compile(r"^\d{2}_(.+)$")


def rank(field_name: str) -> int:
    """Position of the first occurrence of field_name in ORDERING, or UNKNOWN_RANK."""
    return _RANKS.get(field_name, UNKNOWN_RANK)


def sort_key(field_name: str) -> str:
    """Rank-prefixed key, e.g. "04_nummer".

    Lexically sorting these keys reproduces the canonical order, which is what
    documents written by the earlier tool relied on.
    """
    return f"{rank(field_name):02d}_{field_name}"


def strip_prefix(key: str) -> str:
    """Remove a leading two-digit rank prefix if present."""
    match = _PREFIX_RE.match(key)
    return match.group(1) if match else key


def order_mapping(mapping: Mapping[str, Any], *, prefixed: bool = False) -> dict[str, Any]:
    """Return a new dict with keys in canonical order.

    The sort is stable, so keys with equal rank (including all unknown keys)
    keep their original relative order.
    """
    items = sorted(mapping.items(), key=lambda item: rank(item[0]))
    if prefixed:
        return {sort_key(key): value for key, value in items}
    return dict(items)
