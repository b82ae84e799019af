# ABOUTME: Metadata package: entity graph, canonical key ordering, and JSON codec.
# ABOUTME: Exports the Catalog types and the encode/decode entry points.

from dreimetadaten.metadata.codec import (
    DecodeError,
    EncodeError,
    MissingRequiredField,
    TypeMismatch,
    catalog_from_dict,
    catalog_to_dict,
    decode,
    encode,
)
from dreimetadaten.metadata.ordering import ORDERING, rank, sort_key
from dreimetadaten.metadata.types import (
    Catalog,
    Chapter,
    CollectionType,
    Episode,
    LinkSet,
    Part,
    RecordingUnit,
)

__all__ = [
    "ORDERING",
    "Catalog",
    "Chapter",
    "CollectionType",
    "DecodeError",
    "EncodeError",
    "Episode",
    "LinkSet",
    "MissingRequiredField",
    "Part",
    "RecordingUnit",
    "TypeMismatch",
    "catalog_from_dict",
    "catalog_to_dict",
    "decode",
    "encode",
    "rank",
    "sort_key",
]
