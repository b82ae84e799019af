# ABOUTME: SQLite connection management for the dreimetadaten metadata store.
# ABOUTME: Opens or creates the database, applies the schema, and configures the connection.

import logging
import sqlite3
from pathlib import Path

from dreimetadaten.db.schema import SCHEMA_V1

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".dreimetadaten" / "metadata.db"


def _schema_exists(conn: sqlite3.Connection) -> bool:
    """Check if the schema has already been applied."""
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='schema_version'"
    )
    return cursor.fetchone() is not None


def open_store(path: Path | None = None) -> sqlite3.Connection:
    """Open or create the metadata database.

    Creates the database file and parent directories if they don't exist and
    applies the schema on first creation. Enables foreign keys and uses the
    sqlite3.Row factory for dict-like column access.

    Args:
        path: Path to the database file. Defaults to ~/.dreimetadaten/metadata.db.

    Returns:
        A configured sqlite3.Connection.
    """
    db_path = path or DEFAULT_DB_PATH
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys=ON")

    if not _schema_exists(conn):
        logger.debug("Applying schema to new database %s", db_path)
        conn.executescript(SCHEMA_V1)

    return conn
