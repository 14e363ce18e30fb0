"""
Collection types and data structures.

A CollectionEntry is the reduced projection of a catalog Item that the local
user has claimed.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Union

from ..catalog.types import Item
from ..core.clock import utc_now_iso
from ..core.exceptions import ValidationError

PLACEHOLDER_NAME = "Unknown Sneaker"
PLACEHOLDER_DESCRIPTION = ""
PLACEHOLDER_IMAGE_URL = ""

PartialItem = Union[Item, Mapping[str, Any]]


@dataclass
class CollectionEntry:
    """A claimed item in the user's collection."""

    id: str
    name: str = PLACEHOLDER_NAME
    description: str = PLACEHOLDER_DESCRIPTION
    image_url: str = PLACEHOLDER_IMAGE_URL
    added_at: str = field(default_factory=utc_now_iso)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "imageUrl": self.image_url,
            "addedAt": self.added_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CollectionEntry":
        """Create from dictionary. Raises KeyError when ``id`` is missing."""
        added_at = data.get("addedAt") or data.get("added_at")
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or ""),
            description=str(data.get("description") or ""),
            image_url=str(data.get("imageUrl") or ""),
            added_at=str(added_at) if added_at else utc_now_iso(),
        )

    @classmethod
    def from_partial(
        cls, item_id: str, data: Mapping[str, Any], added_at: Optional[str] = None
    ) -> "CollectionEntry":
        """Build a normalized entry, substituting placeholders for missing fields.

        ``added_at`` wins over any timestamp carried in data; when neither is
        present the current time is used.
        """
        carried = data.get("addedAt") or data.get("added_at")
        return cls(
            id=item_id,
            name=str(data.get("name") or PLACEHOLDER_NAME),
            description=str(data.get("description") or PLACEHOLDER_DESCRIPTION),
            image_url=str(data.get("imageUrl") or PLACEHOLDER_IMAGE_URL),
            added_at=added_at or (str(carried) if carried else utc_now_iso()),
        )

    def refreshed_from(self, item: Item) -> "CollectionEntry":
        """Copy display fields from a catalog item, keeping ``added_at``."""
        return replace(
            self,
            name=item.name,
            description=item.description,
            image_url=item.image_url,
        )


def partial_to_mapping(item: PartialItem) -> Mapping[str, Any]:
    """Accept either an Item or a raw mapping as a partial item."""
    if isinstance(item, Item):
        return item.to_dict()
    if not isinstance(item, Mapping):
        raise ValidationError("payload", item, "expected an object with an id")
    return item
