# ABOUTME: Public API for the dreimetadaten storage layer.
# ABOUTME: Exports connection management and the catalog store.

from dreimetadaten.db.connection import DEFAULT_DB_PATH, open_store
from dreimetadaten.db.store import EmptyStoreError, MetadataStore

__all__ = [
    "DEFAULT_DB_PATH",
    "EmptyStoreError",
    "MetadataStore",
    "open_store",
]
