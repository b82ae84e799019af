# ABOUTME: Read-only entity graph for the audio-play metadata catalog.
# ABOUTME: Episodes and parts compose a shared RecordingUnit instead of inheriting from it.

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any


class CollectionType(str, Enum):
    """The four top-level sequences of a Catalog, in declaration order."""

    SERIE = "serie"
    SPEZIAL = "spezial"
    KURZGESCHICHTEN = "kurzgeschichten"
    DIE_DR3I = "die_dr3i"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    CollectionType.SERIE: "Serie",
    CollectionType.SPEZIAL: "Spezial",
    CollectionType.KURZGESCHICHTEN: "Kurzgeschichten",
    CollectionType.DIE_DR3I: "DiE DR3i",
}


def _freeze_sequence(values: Iterable[Any] | None) -> tuple[Any, ...] | None:
    """Convert a sequence to a tuple, mapping empty or missing to None."""
    if values is None:
        return None
    frozen = tuple(values)
    return frozen or None


def _set(obj: object, name: str, value: Any) -> None:
    # Frozen dataclasses need object.__setattr__ during __post_init__.
    object.__setattr__(obj, name, value)


@dataclass(frozen=True)
class Chapter:
    """A named time-range marker inside a recording.

    start and end are integer time offsets into the audio. Two chapters are
    equal when title, start and end all match.
    """

    titel: str
    start: int | None = None
    end: int | None = None


@dataclass(frozen=True)
class LinkSet:
    """External resources that belong to one recording."""

    json: str | None = None
    ffmetadata: str | None = None
    xld_log: str | None = None
    cover: str | None = None
    cover_itunes: str | None = None
    cover_kosmos: str | None = None

    @property
    def is_empty(self) -> bool:
        return all(value is None for _, value in self._pairs())

    def items(self) -> list[tuple[str, str]]:
        """Present links as (name, target) pairs in declaration order."""
        return [(name, value) for name, value in self._pairs() if value is not None]

    def _pairs(self) -> Iterator[tuple[str, str | None]]:
        for f in fields(self):
            yield f.name, getattr(self, f.name)


@dataclass(frozen=True)
class RecordingUnit:
    """Attributes shared by episodes and parts.

    Never appears on its own in a catalog. Empty sequences and an empty
    LinkSet are normalized to None so that "no data" has exactly one form.
    """

    titel: str | None = None
    autor: str | None = None
    hoerspielskriptautor: str | None = None
    beschreibung: str | None = None
    veroeffentlichungsdatum: str | None = None
    kapitel: tuple[Chapter, ...] | None = None
    sprecher: tuple[tuple[str, ...], ...] | None = None
    links: LinkSet | None = None

    def __post_init__(self) -> None:
        _set(self, "kapitel", _freeze_sequence(self.kapitel))
        if self.sprecher is not None:
            groups = (tuple(group) for group in self.sprecher)
            _set(self, "sprecher", _freeze_sequence(groups))
        if self.links is not None and self.links.is_empty:
            _set(self, "links", None)


@dataclass(frozen=True)
class Part:
    """A numbered sub-recording of an episode."""

    teil_nummer: int
    unit: RecordingUnit = field(default_factory=RecordingUnit)
    buchstabe: str | None = None


@dataclass(frozen=True)
class Episode:
    """A numbered recording, optionally split into parts."""

    nummer: int
    unit: RecordingUnit = field(default_factory=RecordingUnit)
    teile: tuple[Part, ...] | None = None

    def __post_init__(self) -> None:
        _set(self, "teile", _freeze_sequence(self.teile))

    @property
    def titel(self) -> str | None:
        return self.unit.titel


@dataclass(frozen=True)
class Catalog:
    """The complete metadata document.

    Owns every entity beneath it. Iteration order of each sequence is the
    order the entities were given in, independent of serialized key order.
    """

    serie: tuple[Episode, ...]
    spezial: tuple[Episode, ...] | None = None
    kurzgeschichten: tuple[Episode, ...] | None = None
    die_dr3i: tuple[Episode, ...] | None = None

    def __post_init__(self) -> None:
        _set(self, "serie", tuple(self.serie))
        for name in ("spezial", "kurzgeschichten", "die_dr3i"):
            _set(self, name, _freeze_sequence(getattr(self, name)))

    def collection(self, collection_type: CollectionType) -> tuple[Episode, ...]:
        """Episodes of one collection; empty when the collection is absent."""
        return getattr(self, CollectionType(collection_type).value) or ()

    def collections(self) -> Iterator[tuple[CollectionType, tuple[Episode, ...]]]:
        """Yield (collection type, episodes) for every present collection."""
        for collection_type in CollectionType:
            episodes = self.collection(collection_type)
            if episodes:
                yield collection_type, episodes

    @property
    def episode_count(self) -> int:
        return sum(len(episodes) for _, episodes in self.collections())
