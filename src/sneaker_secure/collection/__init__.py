"""
The local user's collection of claimed sneakers.
"""

from .repository import CollectionRepository
from .types import (
    PLACEHOLDER_DESCRIPTION,
    PLACEHOLDER_IMAGE_URL,
    PLACEHOLDER_NAME,
    CollectionEntry,
    PartialItem,
)

__all__ = [
    "CollectionEntry",
    "CollectionRepository",
    "PartialItem",
    "PLACEHOLDER_DESCRIPTION",
    "PLACEHOLDER_IMAGE_URL",
    "PLACEHOLDER_NAME",
]
