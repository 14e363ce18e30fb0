"""
Catalog of known sneakers.

Provides the Item type and the repository owning the ``catalog:`` namespace.
"""

from .repository import CatalogRepository, UpdateResult
from .seed import load_seed_items
from .types import Item, OwnershipRecord

__all__ = [
    "CatalogRepository",
    "Item",
    "OwnershipRecord",
    "UpdateResult",
    "load_seed_items",
]
