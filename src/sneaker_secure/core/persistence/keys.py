"""
Reserved key layout inside the shared key-value store.

The catalog and collection namespaces are disjoint prefixes; the migration
flag lives under its own reserved key.
"""

CATALOG_PREFIX = "catalog:"
COLLECTION_PREFIX = "collection:"
MIGRATION_COMPLETED_KEY = "migration:completed"


def catalog_key(item_id: str) -> str:
    return f"{CATALOG_PREFIX}{item_id}"


def collection_key(item_id: str) -> str:
    return f"{COLLECTION_PREFIX}{item_id}"


def id_from_key(key: str, prefix: str) -> str:
    """Strip a namespace prefix from a stored key."""
    if not key.startswith(prefix):
        raise ValueError(f"Key '{key}' is not in namespace '{prefix}'")
    return key[len(prefix) :]
