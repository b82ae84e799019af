# ABOUTME: Shared pytest fixtures for dreimetadaten tests.
# ABOUTME: Provides a populated Catalog, its JSON file on disk, and a temporary store.

from pathlib import Path

import pytest

from dreimetadaten.db.connection import open_store
from dreimetadaten.db.store import MetadataStore
from dreimetadaten.metadata.codec import encode
from dreimetadaten.metadata.types import (
    Catalog,
    Chapter,
    Episode,
    LinkSet,
    Part,
    RecordingUnit,
)


@pytest.fixture
def papagei() -> Episode:
    """Episode 1 with chapters, speakers, and links."""
    return Episode(
        nummer=1,
        unit=RecordingUnit(
            titel="und der Super-Papagei",
            autor="Robert Arthur",
            hoerspielskriptautor="Heikedine Körting",
            beschreibung="Ein Papagei verschwindet.",
            veroeffentlichungsdatum="1979-10-12",
            kapitel=[
                Chapter("Start", start=0, end=300),
                Chapter("Der Papagei", start=300, end=1200),
            ],
            sprecher=[["Justus Jonas", "Oliver Rohrbeck"], ["Peter Shaw", "Jens Wawrczeck"]],
            links=LinkSet(json="serie/001/metadata.json", cover="serie/001/cover.png"),
        ),
    )


@pytest.fixture
def two_part_episode() -> Episode:
    """Episode 125 split into two lettered parts."""
    return Episode(
        nummer=125,
        unit=RecordingUnit(titel="Feuermond"),
        teile=[
            Part(1, unit=RecordingUnit(titel="Das Rätsel der Sonnenuhr"), buchstabe="a"),
            Part(2, unit=RecordingUnit(titel="Die Stadt der Vampire"), buchstabe="b"),
        ],
    )


@pytest.fixture
def sample_catalog(papagei: Episode, two_part_episode: Episode) -> Catalog:
    """A catalog with serie and spezial collections populated."""
    return Catalog(
        serie=[papagei, two_part_episode],
        spezial=[Episode(nummer=0, unit=RecordingUnit(titel="Master of Chess"))],
    )


@pytest.fixture
def catalog_file(tmp_path: Path, sample_catalog: Catalog) -> Path:
    """The sample catalog written to a JSON file."""
    path = tmp_path / "metadata.json"
    path.write_text(encode(sample_catalog), encoding="utf-8")
    return path


@pytest.fixture
def store(tmp_path: Path) -> MetadataStore:
    """A MetadataStore backed by a temporary database."""
    return MetadataStore(open_store(tmp_path / "test.db"))
