"""
Application bootstrap.

Wires the key-value store, repositories, verification registry and service
facade, and runs the startup sequence: open the store, seed the catalog,
run the legacy migration once.
"""

import logging
from typing import Any, Optional

from .catalog import CatalogRepository, load_seed_items
from .collection import CollectionRepository
from .core.config import Config
from .core.logging import configure_logging
from .core.persistence import KeyValueStore, build_key_value_store
from .migration import MigrationEngine, MigrationReport
from .services import SneakerService
from .verification import VerificationRegistry

logger = logging.getLogger(__name__)


class SneakerSecureApp:
    """Owns the store and the components built on it."""

    def __init__(self, config: Config, store: Optional[KeyValueStore] = None) -> None:
        self.config = config
        self.store = store or build_key_value_store(config.store, config.data_dir)

        self.collection = CollectionRepository(self.store)
        self.catalog = CatalogRepository(self.store, collection=self.collection)
        self.collection.history_source = self.catalog

        self.registry = VerificationRegistry.from_config(config.verification)
        self.migration = MigrationEngine(self.store, self.collection)
        self.service = SneakerService(self.catalog, self.collection, self.registry)

        self.migration_report: Optional[MigrationReport] = None

    async def startup(self) -> Optional[MigrationReport]:
        """Open the store and bring its contents up to date.

        Returns the migration report, or None when migration is disabled. A
        completed migration is not re-read; unreadable legacy keys are left in
        place and listed in the report.
        """
        configure_logging(self.config.logging.level, self.config.logging.json_format)
        await self.store.open()
        logger.info(f"Opened {self.store.name} store")

        if self.config.catalog.seed_file is not None:
            items = load_seed_items(self.config.catalog.seed_file)
            await self.catalog.seed(items)

        if not self.config.migration.enabled:
            logger.info("Legacy migration disabled")
            return None

        self.migration_report = await self.migration.migrate_store(
            self.config.migration.legacy_keys
        )
        return self.migration_report

    async def shutdown(self) -> None:
        await self.store.close()
        logger.info("Store closed")

    async def __aenter__(self) -> "SneakerSecureApp":
        await self.startup()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.shutdown()
