"""
Catalog repository.

Owns the ``catalog:`` namespace of the key-value store: the authoritative
list of known items. Updates are written through to a matching collection
entry when one exists.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List, Optional

from ..core.exceptions import NotFoundError, StorageError, ValidationError
from ..core.persistence import (
    CATALOG_PREFIX,
    JSONCodec,
    KeyValueStore,
    catalog_key,
)
from .types import Item, OwnershipRecord

if TYPE_CHECKING:
    from ..collection.repository import CollectionRepository

logger = logging.getLogger(__name__)


@dataclass
class UpdateResult:
    """Outcome of a catalog update.

    The catalog write is authoritative. Propagation into the collection is a
    second, separate write: ``collection_updated`` tells whether it happened
    and ``propagation_error`` carries the failure if it did not.
    """

    item: Item
    collection_updated: bool = False
    propagation_error: Optional[str] = None

    @property
    def item_id(self) -> str:
        return self.item.id


def _require_id(item: Item) -> str:
    if not isinstance(item.id, str) or not item.id.strip():
        raise ValidationError("id", item.id, "id must be a non-empty string")
    return item.id


class CatalogRepository:
    """Lookup and update of catalog items by identifier."""

    def __init__(
        self,
        store: KeyValueStore,
        collection: Optional["CollectionRepository"] = None,
    ) -> None:
        self.store = store
        self.collection = collection
        self._lock = asyncio.Lock()

    async def list_all(self) -> List[Item]:
        """Return every catalog item. Order is unspecified."""
        keys = await self.store.list_keys(CATALOG_PREFIX)
        values = await self.store.multi_get(keys)
        return JSONCodec.decode_objects(
            list(zip(keys, values)), Item.from_dict, prefix=CATALOG_PREFIX
        )

    async def get(self, item_id: str) -> Optional[Item]:
        """Return the item stored under item_id, None if unknown."""
        if not item_id:
            return None
        key = catalog_key(item_id)
        data = JSONCodec.decode(key, await self.store.get(key))
        if data is None:
            return None
        data["id"] = item_id
        return Item.from_dict(data)

    async def update(self, item: Item) -> UpdateResult:
        """Replace an existing item wholesale and write it through to the collection.

        Raises:
            ValidationError: If the id is empty
            NotFoundError: If no item with this id exists
            StorageIOError: If the catalog write itself fails
        """
        item_id = _require_id(item)

        async with self._lock:
            key = catalog_key(item_id)
            if await self.store.get(key) is None:
                raise NotFoundError(item_id, component="CatalogRepository")
            await self.store.set(key, JSONCodec.encode(item.to_dict()))

        logger.info(f"Updated catalog item {item_id}")
        result = UpdateResult(item=item)

        if self.collection is None:
            return result

        # Second write, not atomic with the first: report failure, keep the catalog write.
        try:
            result.collection_updated = await self.collection.refresh_from_item(item)
        except StorageError as e:
            result.propagation_error = str(e)
            logger.error(
                f"Catalog item {item_id} updated but collection copy is stale: {e}"
            )
        return result

    async def ingest(self, item: Item) -> Item:
        """Create an item on first sight; return the stored item if it already exists."""
        item_id = _require_id(item)

        async with self._lock:
            existing = await self.get(item_id)
            if existing is not None:
                return existing
            await self.store.set(catalog_key(item_id), JSONCodec.encode(item.to_dict()))

        logger.info(f"Added catalog item {item_id}")
        return item

    async def seed(self, items: Iterable[Item]) -> int:
        """Ingest a batch of items; return how many were newly created."""
        created = 0
        for item in items:
            if await self.ingest(item) is item:
                created += 1
        logger.info(f"Seeded catalog with {created} new items")
        return created

    async def record_ownership(
        self, item_id: str, owner_name: str, date: Optional[str] = None
    ) -> Item:
        """Append an ownership record to an item's history through ``update``."""
        if not owner_name or not owner_name.strip():
            raise ValidationError("name", owner_name, "owner name is required")

        item = await self.get(item_id)
        if item is None:
            raise NotFoundError(item_id, component="CatalogRepository")

        record = OwnershipRecord(name=owner_name.strip())
        if date:
            record.date = date
        updated = item.with_ownership(record)
        await self.update(updated)
        return updated
