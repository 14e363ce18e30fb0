"""
Centralized JSON encoding for values held in the key-value store.

Eliminates duplicate dumps/loads patterns across repositories and provides
consistent error handling and logging for undecodable values.
"""

import json
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

from .keys import id_from_key

logger = logging.getLogger(__name__)

T = TypeVar("T")


class JSONCodec:
    """Encode records to JSON strings and decode them back with consistent error handling."""

    @staticmethod
    def encode(record: Dict[str, Any]) -> str:
        """
        Serialize a record for storage.

        Args:
            record: JSON-compatible dictionary

        Returns:
            Compact JSON string
        """
        return json.dumps(record, ensure_ascii=False, separators=(",", ":"))

    @staticmethod
    def decode(key: str, raw: Optional[str]) -> Optional[Dict[str, Any]]:
        """
        Deserialize a stored record.

        Args:
            key: Key the value was read from, for logging
            raw: Stored string or None

        Returns:
            Dictionary, or None if the value is absent, malformed or not an object
        """
        if raw is None:
            return None

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Skipping undecodable value under '{key}': {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Skipping non-object value under '{key}'")
            return None
        return data

    @staticmethod
    def decode_objects(
        pairs: Sequence[Tuple[str, Optional[str]]],
        from_dict_fn: Callable[[Dict[str, Any]], T],
        prefix: Optional[str] = None,
    ) -> List[T]:
        """
        Decode (key, raw) pairs and convert them with the provided function.

        Args:
            pairs: Keys with their stored values
            from_dict_fn: Function to convert dict to object (e.g., Item.from_dict)
            prefix: Namespace prefix; when given, the id embedded in the key
                overrides any id stored in the value

        Returns:
            Converted objects; undecodable or unconvertible values are skipped
        """
        objects: List[T] = []
        for key, raw in pairs:
            data = JSONCodec.decode(key, raw)
            if data is None:
                continue
            if prefix is not None:
                data["id"] = id_from_key(key, prefix)
            try:
                objects.append(from_dict_fn(data))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping unconvertible record under '{key}': {e}")
        return objects
