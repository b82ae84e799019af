# ABOUTME: Unit tests for database schema creation and connection management.
# ABOUTME: Validates table structure, foreign keys, and default paths.

import sqlite3
from pathlib import Path

import pytest

from dreimetadaten.db.connection import DEFAULT_DB_PATH, open_store


@pytest.fixture()
def db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path."""
    return tmp_path / "test_metadata.db"


class TestOpenStore:
    """Tests for open_store() connection factory."""

    def test_creates_database_file(self, db_path: Path) -> None:
        """Calling open_store creates a .db file at the given path."""
        conn = open_store(db_path)
        conn.close()
        assert db_path.exists()

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        """Creates parent directories if they don't exist."""
        nested = tmp_path / "deep" / "nested" / "metadata.db"
        conn = open_store(nested)
        conn.close()
        assert nested.exists()

    def test_creates_tables(self, db_path: Path) -> None:
        """All entity tables exist."""
        conn = open_store(db_path)
        cursor = conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        tables = {row[0] for row in cursor.fetchall()}
        conn.close()
        assert {"einheit", "folge", "teil", "kapitel", "sprecher", "schema_version"} <= tables

    def test_foreign_keys_enabled(self, db_path: Path) -> None:
        """Foreign key enforcement is on."""
        conn = open_store(db_path)
        enabled = conn.execute("PRAGMA foreign_keys").fetchone()[0]
        conn.close()
        assert enabled == 1

    def test_row_factory(self, db_path: Path) -> None:
        """Rows support access by column name."""
        conn = open_store(db_path)
        assert conn.row_factory is sqlite3.Row
        conn.close()

    def test_reopen_does_not_reapply_schema(self, db_path: Path) -> None:
        """Opening an existing database keeps a single schema_version row."""
        open_store(db_path).close()
        conn = open_store(db_path)
        count = conn.execute("SELECT COUNT(*) FROM schema_version").fetchone()[0]
        conn.close()
        assert count == 1

    def test_negative_number_rejected_by_schema(self, db_path: Path) -> None:
        """The folge table refuses negative numbers."""
        conn = open_store(db_path)
        conn.execute("INSERT INTO einheit (titel) VALUES ('x')")
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute(
                "INSERT INTO folge (einheit_id, sammlung, position, nummer) VALUES (1, 'serie', 0, -1)"
            )
        conn.close()

    def test_default_path(self) -> None:
        """The default database lives under the home directory."""
        assert DEFAULT_DB_PATH == Path.home() / ".dreimetadaten" / "metadata.db"
