"""
Persistence utilities for SneakerSecure.

Provides the key-value store abstraction, its SQLite and in-memory backends,
the reserved key layout, and JSON encoding of stored records.
"""

from .factory import build_key_value_store
from .json_codec import JSONCodec
from .keys import (
    CATALOG_PREFIX,
    COLLECTION_PREFIX,
    MIGRATION_COMPLETED_KEY,
    catalog_key,
    collection_key,
)
from .kv_store import InMemoryKeyValueStore, KeyValueStore
from .sqlite_store import SQLiteKeyValueStore

__all__ = [
    "CATALOG_PREFIX",
    "COLLECTION_PREFIX",
    "MIGRATION_COMPLETED_KEY",
    "InMemoryKeyValueStore",
    "JSONCodec",
    "KeyValueStore",
    "SQLiteKeyValueStore",
    "build_key_value_store",
    "catalog_key",
    "collection_key",
]
