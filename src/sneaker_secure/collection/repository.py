"""
Collection repository.

Owns the ``collection:`` namespace of the key-value store. Each claimed item
lives under its own ``collection:{id}`` key so entries can be read and
removed individually; the full listing is a prefix scan.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, List, Optional

from ..catalog.types import Item, OwnershipRecord
from ..core.clock import utc_now_iso
from ..core.exceptions import NotFoundError, ValidationError
from ..core.persistence import (
    COLLECTION_PREFIX,
    JSONCodec,
    KeyValueStore,
    collection_key,
)
from .types import CollectionEntry, PartialItem, partial_to_mapping

if TYPE_CHECKING:
    from ..catalog.repository import CatalogRepository

logger = logging.getLogger(__name__)


class CollectionRepository:
    """The local user's claimed items."""

    def __init__(
        self,
        store: KeyValueStore,
        history_source: Optional["CatalogRepository"] = None,
    ) -> None:
        self.store = store
        self.history_source = history_source
        # Check-then-write sequences must not interleave across handlers
        self._lock = asyncio.Lock()

    async def add(self, item: PartialItem) -> str:
        """Claim an item. Adding an id that is already present returns it unchanged.

        Raises:
            ValidationError: If the item has no non-empty string id
        """
        data = partial_to_mapping(item)
        item_id = data.get("id")
        if not isinstance(item_id, str) or not item_id.strip():
            raise ValidationError("id", item_id, "id must be a non-empty string")

        async with self._lock:
            key = collection_key(item_id)
            if await self.store.get(key) is not None:
                logger.debug(f"Item {item_id} already in collection")
                return item_id

            entry = CollectionEntry.from_partial(item_id, data, added_at=utc_now_iso())
            await self.store.set(key, JSONCodec.encode(entry.to_dict()))

        logger.info(f"Added item to collection: {entry.name} ({item_id})")
        return item_id

    async def add_from_catalog(self, catalog: "CatalogRepository", item_id: str) -> bool:
        """Claim the current catalog version of item_id; return whether it was added.

        The catalog item is read under the collection lock, which catalog
        write-through also takes, so an edit racing the claim is never lost.

        Raises:
            NotFoundError: If the id is not in the catalog
        """
        async with self._lock:
            item = await catalog.get(item_id)
            if item is None:
                raise NotFoundError(item_id, component="CollectionRepository")

            key = collection_key(item_id)
            if await self.store.get(key) is not None:
                logger.debug(f"Item {item_id} already in collection")
                return False

            entry = CollectionEntry.from_partial(
                item_id, partial_to_mapping(item), added_at=utc_now_iso()
            )
            await self.store.set(key, JSONCodec.encode(entry.to_dict()))

        logger.info(f"Added item to collection: {entry.name} ({item_id})")
        return True

    async def remove(self, item_id: str) -> bool:
        """Remove an entry; return whether it existed."""
        if not item_id:
            return False

        async with self._lock:
            key = collection_key(item_id)
            if await self.store.get(key) is None:
                return False
            await self.store.delete(key)

        logger.info(f"Removed item from collection: {item_id}")
        return True

    async def get(self, item_id: str) -> Optional[CollectionEntry]:
        """Return the entry for item_id, None if not claimed."""
        if not item_id:
            return None
        key = collection_key(item_id)
        data = JSONCodec.decode(key, await self.store.get(key))
        if data is None:
            return None
        data["id"] = item_id
        return CollectionEntry.from_dict(data)

    async def contains(self, item_id: str) -> bool:
        return await self.get(item_id) is not None

    async def list_all(self) -> List[CollectionEntry]:
        """Return every entry currently held. Order is unspecified."""
        keys = await self.store.list_keys(COLLECTION_PREFIX)
        values = await self.store.multi_get(keys)
        return JSONCodec.decode_objects(
            list(zip(keys, values)), CollectionEntry.from_dict, prefix=COLLECTION_PREFIX
        )

    async def clear(self) -> int:
        """Remove every entry; return how many were removed."""
        async with self._lock:
            keys = await self.store.list_keys(COLLECTION_PREFIX)
            for key in keys:
                await self.store.delete(key)

        logger.info(f"Cleared {len(keys)} entries from collection")
        return len(keys)

    async def put_entry(self, entry: CollectionEntry) -> None:
        """Overwrite the stored entry for entry.id without the idempotency check."""
        if not entry.id:
            raise ValidationError("id", entry.id, "id must be a non-empty string")
        await self.store.set(collection_key(entry.id), JSONCodec.encode(entry.to_dict()))

    async def refresh_from_item(self, item: Item) -> bool:
        """Copy display fields from a catalog item into its entry, if claimed.

        Returns whether an entry existed and was rewritten. ``added_at`` is kept.
        """
        async with self._lock:
            current = await self.get(item.id)
            if current is None:
                return False
            refreshed = current.refreshed_from(item)
            await self.store.set(
                collection_key(item.id), JSONCodec.encode(refreshed.to_dict())
            )

        logger.debug(f"Refreshed collection entry {item.id} from catalog")
        return True

    async def ownership_history(self, item_id: str) -> List[OwnershipRecord]:
        """Ownership history of a claimed item, empty if not claimed or unknown."""
        if self.history_source is None or not await self.contains(item_id):
            return []
        item = await self.history_source.get(item_id)
        return list(item.history) if item else []
