# ABOUTME: Unit tests for MetadataStore save/load operations.
# ABOUTME: Validates catalog persistence, ordering, replacement, and empty-store handling.

import pytest

from dreimetadaten.db.store import EmptyStoreError, MetadataStore
from dreimetadaten.metadata.types import Catalog, CollectionType, Episode, Part, RecordingUnit


class TestSaveCatalog:
    """Tests for MetadataStore.save_catalog."""

    def test_returns_episode_count(self, store: MetadataStore, sample_catalog: Catalog) -> None:
        """save_catalog returns the number of episodes written."""
        assert store.save_catalog(sample_catalog) == 3

    def test_count_per_collection(self, store: MetadataStore, sample_catalog: Catalog) -> None:
        """count() reports totals and per-collection counts."""
        store.save_catalog(sample_catalog)
        assert store.count() == 3
        assert store.count(CollectionType.SERIE) == 2
        assert store.count(CollectionType.SPEZIAL) == 1
        assert store.count(CollectionType.DIE_DR3I) == 0

    def test_save_replaces_previous_content(
        self, store: MetadataStore, sample_catalog: Catalog
    ) -> None:
        """Saving again replaces rather than appends."""
        store.save_catalog(sample_catalog)
        store.save_catalog(Catalog(serie=[Episode(9)]))
        assert store.count() == 1
        assert store.load_catalog() == Catalog(serie=[Episode(9)])


class TestLoadCatalog:
    """Tests for MetadataStore.load_catalog."""

    def test_roundtrip(self, store: MetadataStore, sample_catalog: Catalog) -> None:
        """A saved catalog loads back equal, including parts, chapters, and speakers."""
        store.save_catalog(sample_catalog)
        assert store.load_catalog() == sample_catalog

    def test_keeps_stored_order(self, store: MetadataStore) -> None:
        """Episodes and parts come back in the order they were saved, not by number."""
        catalog = Catalog(
            serie=[Episode(3), Episode(1, teile=[Part(2), Part(1)]), Episode(2)],
        )
        store.save_catalog(catalog)
        loaded = store.load_catalog()
        assert [e.nummer for e in loaded.serie] == [3, 1, 2]
        assert [p.teil_nummer for p in loaded.serie[1].teile or ()] == [2, 1]

    def test_absent_collections_stay_absent(self, store: MetadataStore) -> None:
        """Collections with no rows load as None."""
        store.save_catalog(Catalog(serie=[Episode(1)]))
        loaded = store.load_catalog()
        assert loaded.spezial is None
        assert loaded.kurzgeschichten is None

    def test_empty_store_raises(self, store: MetadataStore) -> None:
        """Loading from an empty store raises EmptyStoreError."""
        with pytest.raises(EmptyStoreError):
            store.load_catalog()


class TestListEpisodes:
    """Tests for MetadataStore.list_episodes."""

    def test_lists_one_collection(self, store: MetadataStore, sample_catalog: Catalog) -> None:
        """Only episodes of the requested collection are returned."""
        store.save_catalog(sample_catalog)
        episodes = store.list_episodes(CollectionType.SPEZIAL)
        assert episodes == [Episode(0, unit=RecordingUnit(titel="Master of Chess"))]

    def test_empty_collection(self, store: MetadataStore) -> None:
        """An empty store lists nothing."""
        assert store.list_episodes(CollectionType.SERIE) == []
