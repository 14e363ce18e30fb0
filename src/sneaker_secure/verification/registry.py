"""
Verification registry.

A read-only membership oracle over the set of trusted identifiers. The set is
fixed at construction; lookups do no I/O and never raise.
"""

import logging
from pathlib import Path
from typing import Any, FrozenSet, Iterable, List

from ..core.config.runtime import VerificationConfig
from ..core.config.yaml_loader import YAMLConfigLoader
from ..core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class VerificationRegistry:
    """Trusted identifier set."""

    def __init__(self, trusted_ids: Iterable[str] = ()) -> None:
        self._trusted: FrozenSet[str] = frozenset(
            str(item_id).strip() for item_id in trusted_ids if str(item_id).strip()
        )

    def __len__(self) -> int:
        return len(self._trusted)

    def __contains__(self, item_id: object) -> bool:
        return self.is_verified(item_id)

    @property
    def trusted_ids(self) -> FrozenSet[str]:
        return self._trusted

    def is_verified(self, item_id: Any) -> bool:
        """Whether item_id belongs to the trusted set. Non-string input is never verified."""
        if not isinstance(item_id, str) or not item_id:
            return False
        return item_id in self._trusted

    @classmethod
    def from_config(cls, config: VerificationConfig) -> "VerificationRegistry":
        """Build the registry from configured ids plus the optional trusted-ids file.

        Raises:
            ConfigurationError: If the trusted-ids file cannot be read
        """
        ids: List[str] = list(config.trusted_ids)
        if config.trusted_ids_file is not None:
            ids.extend(_read_trusted_ids_file(Path(config.trusted_ids_file)))

        registry = cls(ids)
        logger.info(f"Verification registry loaded with {len(registry)} trusted ids")
        return registry


def _read_trusted_ids_file(path: Path) -> List[str]:
    # YAML list, {ids: [...]} mapping, or plain text with one id per line
    if path.suffix.lower() in (".yaml", ".yml"):
        document = YAMLConfigLoader.load_document(path)
        if document is None:
            return []
        if isinstance(document, dict):
            document = document.get("ids") or []
        if not isinstance(document, list):
            raise ConfigurationError(f"Trusted ids file {path} must hold a list of ids")
        return [str(item_id) for item_id in document]

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read trusted ids file {path}: {e}") from e
    return [
        line.strip()
        for line in text.splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    ]
