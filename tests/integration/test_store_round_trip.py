# ABOUTME: Integration tests for JSON -> store -> JSON round-trips.
# ABOUTME: Validates that exported documents are byte-identical after passing through SQLite.

from pathlib import Path

from dreimetadaten.db.connection import open_store
from dreimetadaten.db.store import MetadataStore
from dreimetadaten.metadata.codec import decode, encode
from dreimetadaten.metadata.types import Catalog


class TestStoreRoundTrip:
    """Integration tests across codec and store."""

    def test_export_matches_import(self, tmp_path: Path, catalog_file: Path) -> None:
        """A canonical document survives decode, save, reopen, load, encode unchanged."""
        text = catalog_file.read_text(encoding="utf-8")
        db_path = tmp_path / "roundtrip.db"

        conn = open_store(db_path)
        MetadataStore(conn).save_catalog(decode(text))
        conn.close()

        conn2 = open_store(db_path)
        exported = encode(MetadataStore(conn2).load_catalog())
        conn2.close()

        assert exported == text

    def test_prefixed_document_normalizes(self, tmp_path: Path, sample_catalog: Catalog) -> None:
        """A prefixed document is stored and re-exported in plain canonical form."""
        conn = open_store(tmp_path / "prefixed.db")
        store = MetadataStore(conn)
        store.save_catalog(decode(encode(sample_catalog, prefixed_keys=True)))
        exported = encode(store.load_catalog())
        conn.close()

        assert exported == encode(sample_catalog)

    def test_reordered_input_exports_canonically(self, tmp_path: Path) -> None:
        """Key order in the input never leaks into the exported document."""
        scrambled = '{"serie": [{"links": {"cover": "c.png"}, "titel": "T", "nummer": 1}]}'
        conn = open_store(tmp_path / "scrambled.db")
        store = MetadataStore(conn)
        store.save_catalog(decode(scrambled))
        exported = encode(store.load_catalog(), indent=None)
        conn.close()

        assert exported == '{"serie": [{"nummer": 1, "titel": "T", "links": {"cover": "c.png"}}]}\n'
