# ABOUTME: Ordered JSON encoding and decoding of the metadata Catalog.
# ABOUTME: Flattens episodes/parts with their shared RecordingUnit into one canonically ordered object.

import json
import logging
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from dreimetadaten.metadata.ordering import order_mapping, strip_prefix
from dreimetadaten.metadata.types import (
    Catalog,
    Chapter,
    CollectionType,
    Episode,
    LinkSet,
    Part,
    RecordingUnit,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# (attribute, wire key) pairs for the scalar fields of a RecordingUnit.
_UNIT_TEXT_FIELDS: tuple[tuple[str, str], ...] = (
    ("titel", "titel"),
    ("autor", "autor"),
    ("hoerspielskriptautor", "hörspielskriptautor"),
    ("beschreibung", "beschreibung"),
    ("veroeffentlichungsdatum", "veröffentlichungsdatum"),
)

_LINK_FIELDS: tuple[str, ...] = (
    "json",
    "ffmetadata",
    "xld_log",
    "cover",
    "cover_itunes",
    "cover_kosmos",
)

# Largest value an SQLite INTEGER column holds.
MAX_INTEGER = 2**63 - 1


class DecodeError(Exception):
    """Raised when a document cannot be turned into a Catalog.

    Attributes:
        path: Location of the offending entity, e.g. "serie[2].teile[0]".
    """

    def __init__(self, message: str, path: str = "") -> None:
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class MissingRequiredField(DecodeError):
    """A required field (nummer, teilNummer, serie) is absent."""

    def __init__(self, field_name: str, path: str = "") -> None:
        self.field_name = field_name
        super().__init__(f"missing required field '{field_name}'", path)


class TypeMismatch(DecodeError):
    """A field value does not have the expected type."""


class EncodeError(Exception):
    """Raised when an in-memory Catalog violates the data model."""


# --- Encoding ---


def _encode_chapter(chapter: Chapter, prefixed: bool) -> dict[str, Any]:
    out: dict[str, Any] = {"titel": chapter.titel}
    if chapter.start is not None:
        out["start"] = chapter.start
    if chapter.end is not None:
        out["end"] = chapter.end
    return order_mapping(out, prefixed=prefixed)


def _encode_links(links: LinkSet, prefixed: bool) -> dict[str, Any]:
    return order_mapping(dict(links.items()), prefixed=prefixed)


def _encode_unit(unit: RecordingUnit, prefixed: bool) -> dict[str, Any]:
    """Shared fields only; the caller merges and orders them."""
    out: dict[str, Any] = {}
    for attr, key in _UNIT_TEXT_FIELDS:
        value = getattr(unit, attr)
        if value is not None:
            out[key] = value
    if unit.kapitel:
        out["kapitel"] = [_encode_chapter(chapter, prefixed) for chapter in unit.kapitel]
    if unit.sprecher:
        out["sprecher"] = [list(group) for group in unit.sprecher]
    if unit.links is not None and not unit.links.is_empty:
        out["links"] = _encode_links(unit.links, prefixed)
    return out


def _check_identifier(value: Any, name: str, where: str) -> None:
    if type(value) is not int or not 0 <= value <= MAX_INTEGER:
        raise EncodeError(
            f"{where}: {name} must be an integer between 0 and {MAX_INTEGER}, got {value!r}"
        )


def _encode_part(part: Part, prefixed: bool, where: str) -> dict[str, Any]:
    _check_identifier(part.teil_nummer, "teilNummer", where)
    own: dict[str, Any] = {"teilNummer": part.teil_nummer}
    if part.buchstabe is not None:
        own["buchstabe"] = part.buchstabe
    return order_mapping({**own, **_encode_unit(part.unit, prefixed)}, prefixed=prefixed)


def _encode_episode(episode: Episode, prefixed: bool, where: str) -> dict[str, Any]:
    _check_identifier(episode.nummer, "nummer", where)
    own: dict[str, Any] = {"nummer": episode.nummer}
    if episode.teile:
        own["teile"] = [
            _encode_part(part, prefixed, f"{where}.teile[{index}]")
            for index, part in enumerate(episode.teile)
        ]
    return order_mapping({**own, **_encode_unit(episode.unit, prefixed)}, prefixed=prefixed)


def catalog_to_dict(catalog: Catalog, *, prefixed_keys: bool = False) -> dict[str, Any]:
    """Convert a Catalog to a JSON-compatible dict with canonical key order.

    Absent optional fields and collections are omitted entirely.

    Args:
        catalog: The catalog to encode.
        prefixed_keys: Write keys as "NN_name" (rank prefix) for compatibility
            with documents produced by the earlier tool.

    Raises:
        EncodeError: If serie is empty or an identifier is not an integer
            between 0 and MAX_INTEGER.
    """
    if not catalog.serie:
        raise EncodeError("serie must contain at least one episode")

    out: dict[str, Any] = {}
    for collection_type, episodes in catalog.collections():
        name = collection_type.value
        out[name] = [
            _encode_episode(episode, prefixed_keys, f"{name}[{index}]")
            for index, episode in enumerate(episodes)
        ]
    return order_mapping(out, prefixed=prefixed_keys)


def encode(catalog: Catalog, *, prefixed_keys: bool = False, indent: int | None = 2) -> str:
    """Serialize a Catalog to JSON text (UTF-8 characters left unescaped)."""
    data = catalog_to_dict(catalog, prefixed_keys=prefixed_keys)
    return json.dumps(data, ensure_ascii=False, indent=indent) + "\n"


# --- Decoding ---


def _child(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


class _FieldReader:
    """Consumes the fields of one flat JSON object.

    Keys are matched after removing any rank prefix, so both prefixed and
    plain documents decode the same way, in any key order.
    """

    def __init__(self, raw: Any, path: str) -> None:
        if not isinstance(raw, Mapping):
            raise TypeMismatch(f"expected an object, got {type(raw).__name__}", path)
        self.path = path
        self._fields: dict[str, Any] = {}
        for key, value in raw.items():
            name = strip_prefix(key)
            if name in self._fields:
                raise TypeMismatch(f"duplicate field '{name}'", path)
            self._fields[name] = value

    def _take(self, name: str) -> Any:
        return self._fields.pop(name, None)

    def required_identifier(self, name: str) -> int:
        value = self._take(name)
        if value is None:
            raise MissingRequiredField(name, self.path)
        return self._as_identifier(name, value)

    def _as_identifier(self, name: str, value: Any) -> int:
        if type(value) is not int:
            raise TypeMismatch(f"'{name}' must be an integer, got {value!r}", self.path)
        if value < 0:
            raise TypeMismatch(f"'{name}' must not be negative, got {value}", self.path)
        if value > MAX_INTEGER:
            raise TypeMismatch(f"'{name}' must not exceed {MAX_INTEGER}, got {value}", self.path)
        return value

    def optional_str(self, name: str) -> str | None:
        value = self._take(name)
        if value is not None and not isinstance(value, str):
            raise TypeMismatch(f"'{name}' must be a string, got {value!r}", self.path)
        return value

    def optional_int(self, name: str) -> int | None:
        value = self._take(name)
        if value is not None and type(value) is not int:
            raise TypeMismatch(f"'{name}' must be an integer, got {value!r}", self.path)
        if value is not None and not -MAX_INTEGER - 1 <= value <= MAX_INTEGER:
            raise TypeMismatch(f"'{name}' is out of range, got {value}", self.path)
        return value

    def optional_list(self, name: str, decode_item: Callable[[Any, str], T]) -> list[T] | None:
        value = self._take(name)
        if value is None:
            return None
        if not isinstance(value, list):
            raise TypeMismatch(f"'{name}' must be an array, got {type(value).__name__}", self.path)
        prefix = _child(self.path, name)
        return [decode_item(item, f"{prefix}[{index}]") for index, item in enumerate(value)]

    def optional_object(self, name: str, decode_value: Callable[[Any, str], T]) -> T | None:
        value = self._take(name)
        if value is None:
            return None
        return decode_value(value, _child(self.path, name))

    def finish(self) -> None:
        """Drop and log any fields nobody consumed."""
        for name in self._fields:
            logger.warning("Ignoring unknown field '%s' at %s", name, self.path or "<root>")
        self._fields.clear()


def _decode_chapter(raw: Any, path: str) -> Chapter:
    reader = _FieldReader(raw, path)
    titel = reader.optional_str("titel")
    if titel is None:
        raise MissingRequiredField("titel", path)
    chapter = Chapter(
        titel=titel,
        start=reader.optional_int("start"),
        end=reader.optional_int("end"),
    )
    reader.finish()
    return chapter


def _decode_links(raw: Any, path: str) -> LinkSet:
    reader = _FieldReader(raw, path)
    links = LinkSet(**{name: reader.optional_str(name) for name in _LINK_FIELDS})
    reader.finish()
    return links


def _decode_speaker_group(raw: Any, path: str) -> tuple[str, ...]:
    if not isinstance(raw, list) or not all(isinstance(name, str) for name in raw):
        raise TypeMismatch(f"speaker group must be an array of strings, got {raw!r}", path)
    return tuple(raw)


def _decode_unit(reader: _FieldReader) -> RecordingUnit:
    """Populate the shared fields from whatever the specialized decoder left over."""
    text = {attr: reader.optional_str(key) for attr, key in _UNIT_TEXT_FIELDS}
    unit = RecordingUnit(
        **text,
        kapitel=reader.optional_list("kapitel", _decode_chapter),
        sprecher=reader.optional_list("sprecher", _decode_speaker_group),
        links=reader.optional_object("links", _decode_links),
    )
    reader.finish()
    return unit


def _decode_part(raw: Any, path: str) -> Part:
    reader = _FieldReader(raw, path)
    teil_nummer = reader.required_identifier("teilNummer")
    buchstabe = reader.optional_str("buchstabe")
    return Part(teil_nummer=teil_nummer, buchstabe=buchstabe, unit=_decode_unit(reader))


def _decode_episode(raw: Any, path: str) -> Episode:
    reader = _FieldReader(raw, path)
    nummer = reader.required_identifier("nummer")
    teile = reader.optional_list("teile", _decode_part)
    return Episode(nummer=nummer, teile=teile, unit=_decode_unit(reader))


def catalog_from_dict(data: Any) -> Catalog:
    """Build a Catalog from a parsed JSON document.

    Raises:
        MissingRequiredField: If serie, nummer or teilNummer is absent,
            or serie is empty.
        TypeMismatch: If any value has the wrong type.
    """
    reader = _FieldReader(data, "")
    collections: dict[str, list[Episode] | None] = {}
    for collection_type in CollectionType:
        name = collection_type.value
        collections[name] = reader.optional_list(name, _decode_episode)
    reader.finish()

    if not collections["serie"]:
        raise MissingRequiredField("serie")
    return Catalog(**collections)  # type: ignore[arg-type]


def decode(text: str | bytes) -> Catalog:
    """Parse JSON text into a Catalog.

    Decoding is all-or-nothing: any error aborts the whole document.

    Raises:
        DecodeError: If the text is not valid JSON or does not describe a
            valid Catalog.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"invalid JSON: {exc}") from exc
    return catalog_from_dict(data)


def episode_to_dict(episode: Episode, *, prefixed_keys: bool = False) -> dict[str, Any]:
    """Encode a single episode as one flat, canonically ordered object."""
    return _encode_episode(episode, prefixed_keys, "episode")


def part_to_dict(part: Part, *, prefixed_keys: bool = False) -> dict[str, Any]:
    """Encode a single part as one flat, canonically ordered object."""
    return _encode_part(part, prefixed_keys, "part")


def episode_from_dict(data: Any) -> Episode:
    """Decode a single flat episode object."""
    return _decode_episode(data, "")


def part_from_dict(data: Any) -> Part:
    """Decode a single flat part object."""
    return _decode_part(data, "")
