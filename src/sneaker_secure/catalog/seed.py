"""
Initial catalog loading.

A seed file is YAML holding either a list of items or a mapping with an
``items`` list, using the stored field names (``imageUrl``,
``manufactureNumber``, ``gallery``, ``history``).
"""

import logging
from pathlib import Path
from typing import List

from ..core.config.yaml_loader import YAMLConfigLoader
from ..core.exceptions import ConfigurationError
from .types import Item

logger = logging.getLogger(__name__)


def load_seed_items(path: Path) -> List[Item]:
    """Read catalog items from a seed file.

    Raises:
        ConfigurationError: If the file is unreadable or an entry has no id
    """
    document = YAMLConfigLoader.load_document(Path(path))
    if document is None:
        return []
    if isinstance(document, dict):
        document = document.get("items") or []
    if not isinstance(document, list):
        raise ConfigurationError(f"Seed file {path} must hold a list of items")

    items: List[Item] = []
    for index, entry in enumerate(document):
        if not isinstance(entry, dict) or not entry.get("id"):
            raise ConfigurationError(f"Seed entry #{index} in {path} has no id")
        items.append(Item.from_dict(entry))

    logger.debug(f"Loaded {len(items)} seed items from {path}")
    return items
