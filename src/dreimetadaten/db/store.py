# ABOUTME: Persistence of the metadata Catalog in the SQLite store.
# ABOUTME: Saves a whole catalog in one transaction and rebuilds it in stored order.

import logging
import sqlite3
from collections import defaultdict
from typing import Any

from dreimetadaten.db.mapping import (
    chapter_to_row,
    row_to_chapter,
    row_to_speaker_group,
    row_to_unit,
    speaker_group_to_row,
    unit_to_row,
)
from dreimetadaten.metadata.types import (
    Catalog,
    Chapter,
    CollectionType,
    Episode,
    Part,
    RecordingUnit,
)

logger = logging.getLogger(__name__)


class EmptyStoreError(Exception):
    """Raised when loading a catalog from a store that holds no serie episodes."""


class MetadataStore:
    """Wraps a sqlite3 connection and maps the stored rows to the entity graph."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    # --- Writing ---

    def _insert(self, table: str, row: dict[str, Any]) -> int:
        columns = ", ".join(f'"{name}"' for name in row)
        placeholders = ", ".join("?" for _ in row)
        cursor = self._conn.execute(
            f"INSERT INTO {table} ({columns}) VALUES ({placeholders})",
            list(row.values()),
        )
        return cursor.lastrowid  # type: ignore[return-value]

    def _insert_unit(self, unit: RecordingUnit) -> int:
        unit_id = self._insert("einheit", unit_to_row(unit))
        for position, chapter in enumerate(unit.kapitel or ()):
            self._insert("kapitel", chapter_to_row(chapter, unit_id, position))
        for position, group in enumerate(unit.sprecher or ()):
            self._insert("sprecher", speaker_group_to_row(group, unit_id, position))
        return unit_id

    def save_catalog(self, catalog: Catalog) -> int:
        """Replace the stored catalog with the given one.

        Runs in a single transaction: on any error the previous content is kept.

        Returns:
            The number of episodes written.
        """
        written = 0
        with self._conn:
            self._conn.execute("DELETE FROM einheit")
            for collection_type, episodes in catalog.collections():
                for position, episode in enumerate(episodes):
                    unit_id = self._insert_unit(episode.unit)
                    self._insert(
                        "folge",
                        {
                            "einheit_id": unit_id,
                            "sammlung": collection_type.value,
                            "position": position,
                            "nummer": episode.nummer,
                        },
                    )
                    for part_position, part in enumerate(episode.teile or ()):
                        part_id = self._insert_unit(part.unit)
                        self._insert(
                            "teil",
                            {
                                "einheit_id": part_id,
                                "folge_id": unit_id,
                                "position": part_position,
                                "teilnummer": part.teil_nummer,
                                "buchstabe": part.buchstabe,
                            },
                        )
                    written += 1
        logger.debug("Stored %d episode(s)", written)
        return written

    # --- Reading ---

    def _chapters_by_unit(self) -> dict[int, list[Chapter]]:
        cursor = self._conn.execute("SELECT * FROM kapitel ORDER BY einheit_id, position")
        chapters: dict[int, list[Chapter]] = defaultdict(list)
        for row in cursor.fetchall():
            chapters[row["einheit_id"]].append(row_to_chapter(row))
        return chapters

    def _speakers_by_unit(self) -> dict[int, list[tuple[str, ...]]]:
        cursor = self._conn.execute("SELECT * FROM sprecher ORDER BY einheit_id, position")
        speakers: dict[int, list[tuple[str, ...]]] = defaultdict(list)
        for row in cursor.fetchall():
            speakers[row["einheit_id"]].append(row_to_speaker_group(row))
        return speakers

    def _parts_by_episode(
        self,
        chapters: dict[int, list[Chapter]],
        speakers: dict[int, list[tuple[str, ...]]],
    ) -> dict[int, list[Part]]:
        cursor = self._conn.execute(
            "SELECT teil.*, einheit.* FROM teil "
            "JOIN einheit ON einheit.id = teil.einheit_id "
            "ORDER BY teil.folge_id, teil.position"
        )
        parts: dict[int, list[Part]] = defaultdict(list)
        for row in cursor.fetchall():
            unit_id = row["einheit_id"]
            parts[row["folge_id"]].append(
                Part(
                    teil_nummer=row["teilnummer"],
                    buchstabe=row["buchstabe"],
                    unit=row_to_unit(row, chapters.get(unit_id), speakers.get(unit_id)),
                )
            )
        return parts

    def list_episodes(self, collection_type: CollectionType) -> list[Episode]:
        """Return the episodes of one collection in stored order."""
        return self._load_episodes()[CollectionType(collection_type)]

    def _load_episodes(self) -> dict[CollectionType, list[Episode]]:
        chapters = self._chapters_by_unit()
        speakers = self._speakers_by_unit()
        parts = self._parts_by_episode(chapters, speakers)

        cursor = self._conn.execute(
            "SELECT folge.*, einheit.* FROM folge "
            "JOIN einheit ON einheit.id = folge.einheit_id "
            "ORDER BY folge.sammlung, folge.position"
        )
        episodes: dict[CollectionType, list[Episode]] = {ct: [] for ct in CollectionType}
        for row in cursor.fetchall():
            unit_id = row["einheit_id"]
            episodes[CollectionType(row["sammlung"])].append(
                Episode(
                    nummer=row["nummer"],
                    teile=parts.get(unit_id),
                    unit=row_to_unit(row, chapters.get(unit_id), speakers.get(unit_id)),
                )
            )
        return episodes

    def load_catalog(self) -> Catalog:
        """Rebuild the stored Catalog.

        Raises:
            EmptyStoreError: If no serie episodes are stored.
        """
        episodes = self._load_episodes()
        if not episodes[CollectionType.SERIE]:
            raise EmptyStoreError("No serie episodes stored")
        return Catalog(**{ct.value: episodes[ct] for ct in CollectionType})

    def count(self, collection_type: CollectionType | None = None) -> int:
        """Number of stored episodes, optionally restricted to one collection."""
        if collection_type is None:
            cursor = self._conn.execute("SELECT COUNT(*) FROM folge")
        else:
            cursor = self._conn.execute(
                "SELECT COUNT(*) FROM folge WHERE sammlung = ?",
                (CollectionType(collection_type).value,),
            )
        return cursor.fetchone()[0]
