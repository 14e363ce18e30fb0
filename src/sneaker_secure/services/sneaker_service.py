"""
Sneaker service facade.

The operations a host UI or the CLI calls: scanning, claiming and releasing
items, administrative catalog edits and collection listing. Each operation
runs under its own operation id for log correlation.
"""

from dataclasses import dataclass
from typing import List, Optional

from ..catalog.repository import CatalogRepository, UpdateResult
from ..catalog.types import Item, OwnershipRecord
from ..collection.repository import CollectionRepository
from ..collection.types import CollectionEntry
from ..core.exceptions import ValidationError
from ..core.logging import (
    clear_operation_context,
    generate_operation_id,
    get_logger,
    set_operation_context,
)
from ..scanning.payload import RawPayload, parse_scan_payload
from ..verification.registry import VerificationRegistry
from .session import Session

logger = get_logger(__name__)


@dataclass
class ScanResult:
    """Classification of a scanned item."""

    item: Item
    verified: bool
    in_collection: bool


@dataclass
class ClaimResult:
    item_id: str
    added: bool


class SneakerService:
    """Facade over the catalog, collection and verification registry."""

    def __init__(
        self,
        catalog: CatalogRepository,
        collection: CollectionRepository,
        registry: VerificationRegistry,
    ) -> None:
        self.catalog = catalog
        self.collection = collection
        self.registry = registry

    async def scan(self, raw: RawPayload) -> ScanResult:
        """Parse a scanner payload, ingest it into the catalog and classify it.

        A known id keeps its stored catalog data; the payload only creates
        items seen for the first time.

        Raises:
            ValidationError: If the payload is malformed
        """
        payload = parse_scan_payload(raw)
        set_operation_context(operation_id=generate_operation_id(), item_id=payload.id)
        try:
            item = await self.catalog.ingest(payload.to_item())
            result = ScanResult(
                item=item,
                verified=self.registry.is_verified(item.id),
                in_collection=await self.collection.contains(item.id),
            )
            logger.info(
                "Scanned item",
                verified=result.verified,
                in_collection=result.in_collection,
            )
            return result
        finally:
            clear_operation_context()

    async def claim(self, item_id: str) -> ClaimResult:
        """Add a catalog item to the collection.

        Raises:
            NotFoundError: If the id is not in the catalog
        """
        set_operation_context(operation_id=generate_operation_id(), item_id=item_id)
        try:
            added = await self.collection.add_from_catalog(self.catalog, item_id)
            logger.info("Claimed item", added=added)
            return ClaimResult(item_id=item_id, added=added)
        finally:
            clear_operation_context()

    async def release(self, item_id: str) -> bool:
        removed = await self.collection.remove(item_id)
        logger.info("Released item", item_id=item_id, removed=removed)
        return removed

    async def edit_item(self, session: Session, item: Item) -> UpdateResult:
        """Administrative catalog edit, written through to the collection.

        Raises:
            PermissionDeniedError: If the session is not an admin session
            ValidationError: If name or description is blank
            NotFoundError: If the item does not exist
        """
        session.require_admin("edit catalog items")
        for field_name in ("name", "description"):
            value = getattr(item, field_name)
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(field_name, value, f"{field_name} is required")

        set_operation_context(operation_id=generate_operation_id(), item_id=item.id)
        try:
            result = await self.catalog.update(item)
            if result.propagation_error:
                logger.warning(
                    "Collection copy not refreshed", error=result.propagation_error
                )
            return result
        finally:
            clear_operation_context()

    async def record_ownership(
        self,
        session: Session,
        item_id: str,
        owner_name: str,
        date: Optional[str] = None,
    ) -> Item:
        session.require_admin("record ownership")
        return await self.catalog.record_ownership(item_id, owner_name, date)

    async def my_collection(self) -> List[CollectionEntry]:
        """The collection, most recently added first."""
        entries = await self.collection.list_all()
        return sorted(entries, key=lambda entry: entry.added_at, reverse=True)

    async def ownership_history(self, item_id: str) -> List[OwnershipRecord]:
        return await self.collection.ownership_history(item_id)

    def is_verified(self, item_id: str) -> bool:
        return self.registry.is_verified(item_id)
