"""
Catalog types and data structures.

Contains the Item catalog entry and its ownership history records.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from ..core.clock import utc_now_iso


@dataclass
class OwnershipRecord:
    """One entry of an item's ownership history."""

    name: str
    date: str = field(default_factory=utc_now_iso)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"name": self.name, "date": self.date}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OwnershipRecord":
        """Create from dictionary."""
        return cls(name=str(data.get("name") or ""), date=str(data.get("date") or ""))


@dataclass
class Item:
    """Authoritative catalog entry for a known sneaker."""

    id: str
    name: str = ""
    description: str = ""
    image_url: str = ""
    manufacture_number: Optional[str] = None
    gallery: List[str] = field(default_factory=list)
    history: List[OwnershipRecord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "imageUrl": self.image_url,
            "manufactureNumber": self.manufacture_number,
            "gallery": list(self.gallery),
            "history": [record.to_dict() for record in self.history],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Item":
        """Create from dictionary. Raises KeyError when ``id`` is missing."""
        manufacture_number = data.get("manufactureNumber")
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or ""),
            description=str(data.get("description") or ""),
            image_url=str(data.get("imageUrl") or ""),
            manufacture_number=(
                str(manufacture_number) if manufacture_number is not None else None
            ),
            gallery=[str(url) for url in data.get("gallery") or []],
            history=[
                OwnershipRecord.from_dict(record)
                for record in data.get("history") or []
                if isinstance(record, dict)
            ],
        )

    def with_ownership(self, record: OwnershipRecord) -> "Item":
        """Return a copy with record appended to the history."""
        return replace(self, history=[*self.history, record])
