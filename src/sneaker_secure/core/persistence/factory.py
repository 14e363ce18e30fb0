"""
Key-value store factory.

Builds the backend named by the store configuration.
"""

import logging
from pathlib import Path

from ..config.runtime import StoreConfig
from ..exceptions import ConfigurationError
from .kv_store import InMemoryKeyValueStore, KeyValueStore
from .sqlite_store import SQLiteKeyValueStore

logger = logging.getLogger(__name__)


def build_key_value_store(config: StoreConfig, data_dir: Path) -> KeyValueStore:
    """Create an unopened store for the configured backend."""
    if config.backend == "sqlite":
        db_path = Path(data_dir) / config.db_filename
        logger.debug(f"Using SQLite key-value store at {db_path}")
        return SQLiteKeyValueStore(db_path, config)
    if config.backend == "memory":
        logger.debug("Using in-memory key-value store")
        return InMemoryKeyValueStore()
    raise ConfigurationError(f"Unknown store backend: {config.backend}")
