"""
Reading of the legacy flat-array collection blobs.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..core.exceptions import ValidationError
from ..core.persistence import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_LEGACY_KEYS = ("myCollection", "userCollection")


@dataclass
class LegacyData:
    """Records read from the legacy keys, and the keys that could not be read."""

    records: Optional[List[Any]] = None
    unreadable: Dict[str, str] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.records is not None or bool(self.unreadable)


def _parse_legacy_value(key: str, raw: str) -> List[Any]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationError(key, raw[:80], f"legacy value is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise ValidationError(key, type(data).__name__, "legacy value is not an array")
    return data


async def load_legacy_data(
    store: KeyValueStore, keys: Sequence[str] = DEFAULT_LEGACY_KEYS
) -> LegacyData:
    """Read every legacy key, skipping the ones whose value is not a JSON array.

    ``records`` concatenates the readable arrays in key order and is None when
    no key could be read. The legacy values are left in place.
    """
    keys = list(keys)
    legacy = LegacyData()
    if not keys:
        return legacy

    values = await store.multi_get(keys)
    for key, raw in zip(keys, values):
        if raw is None:
            continue
        try:
            data = _parse_legacy_value(key, raw)
        except ValidationError as e:
            logger.warning(f"Skipping unreadable legacy key '{key}': {e}")
            legacy.unreadable[key] = str(e)
            continue
        logger.debug(f"Read {len(data)} legacy records from '{key}'")
        if legacy.records is None:
            legacy.records = []
        legacy.records.extend(data)

    return legacy


async def read_legacy_blob(
    store: KeyValueStore, keys: Sequence[str] = DEFAULT_LEGACY_KEYS
) -> Optional[List[Any]]:
    """Concatenate the legacy arrays stored under keys, in key order.

    Returns None when none of the keys hold a value.

    Raises:
        ValidationError: If a legacy value is not a JSON array
    """
    keys = list(keys)
    if not keys:
        return None

    values = await store.multi_get(keys)
    records: List[Any] = []
    found = False

    for key, raw in zip(keys, values):
        if raw is None:
            continue
        found = True
        records.extend(_parse_legacy_value(key, raw))

    return records if found else None
