"""
One-time migration of the legacy flat-array collection.

The engine is the only writer of ``migration:completed``. A run moves the
store from PENDING to DONE exactly once; records are written by overwrite,
so a run interrupted before the flag is set can simply be repeated.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from ..collection.repository import CollectionRepository
from ..collection.types import CollectionEntry
from ..core.exceptions import (
    MigrationIncompleteError,
    SneakerSecureError,
    StorageError,
    ValidationError,
)
from ..core.logging import (
    StorageTimer,
    clear_operation_context,
    generate_operation_id,
    get_logger,
    set_operation_context,
)
from ..core.persistence import MIGRATION_COMPLETED_KEY, KeyValueStore
from .legacy import DEFAULT_LEGACY_KEYS, load_legacy_data

logger = get_logger(__name__)


class MigrationState(Enum):
    """Persisted migration state."""

    PENDING = "pending"
    DONE = "done"


@dataclass
class SkippedRecord:
    """A legacy record the migration could not carry over."""

    index: int
    reason: str
    item_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"index": self.index, "reason": self.reason, "item_id": self.item_id}


@dataclass
class MigrationReport:
    """Outcome of a migration run."""

    migrated: int = 0
    skipped: List[SkippedRecord] = field(default_factory=list)
    already_completed: bool = False
    unreadable_keys: Dict[str, str] = field(default_factory=dict)
    postponed: bool = False

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "migrated": self.migrated,
            "skipped": [record.to_dict() for record in self.skipped],
            "already_completed": self.already_completed,
            "unreadable_keys": dict(self.unreadable_keys),
            "postponed": self.postponed,
        }


class MigrationEngine:
    """Guarded, idempotent import of legacy collection records."""

    def __init__(self, store: KeyValueStore, collection: CollectionRepository) -> None:
        self.store = store
        self.collection = collection

    async def state(self) -> MigrationState:
        """Read the persisted state; an absent flag means PENDING."""
        raw = await self.store.get(MIGRATION_COMPLETED_KEY)
        return MigrationState.DONE if raw == "true" else MigrationState.PENDING

    async def is_completed(self) -> bool:
        return await self.state() == MigrationState.DONE

    async def run(self, legacy_blob: Optional[Sequence[Any]] = None) -> MigrationReport:
        """Migrate legacy records into the collection keyspace, once per store.

        Per-record failures are recorded in the report and never abort the run.

        Raises:
            ValidationError: If legacy_blob is not a list of records
            MigrationIncompleteError: If the completion flag cannot be written
        """
        if await self.is_completed():
            logger.debug("Migration already completed")
            return MigrationReport(already_completed=True)

        if legacy_blob is not None and not isinstance(legacy_blob, (list, tuple)):
            raise ValidationError(
                "legacy_blob", type(legacy_blob).__name__, "expected a list of records"
            )

        set_operation_context(operation_id=generate_operation_id())
        try:
            report = MigrationReport()
            records = list(legacy_blob or [])

            if not records:
                logger.info("No legacy data to migrate")
                await self._mark_completed(report)
                return report

            with StorageTimer(logger, "migration", "MigrationEngine", records=len(records)):
                for index, record in enumerate(records):
                    await self._migrate_record(index, record, report)
                await self._mark_completed(report)

            logger.info(
                "Migration completed",
                migrated=report.migrated,
                skipped=report.skipped_count,
            )
            return report
        finally:
            clear_operation_context()

    async def migrate_store(
        self, legacy_keys: Sequence[str] = DEFAULT_LEGACY_KEYS
    ) -> MigrationReport:
        """Run the migration from the legacy keys of this engine's store.

        The completion flag is checked before any legacy key is read. Keys
        whose value is not a JSON array are skipped and listed in
        ``unreadable_keys``; the readable ones are migrated. When every legacy
        key present is unreadable the migration stays pending and the report is
        marked ``postponed``.

        Raises:
            MigrationIncompleteError: If the completion flag cannot be written
        """
        if await self.is_completed():
            logger.debug("Migration already completed")
            return MigrationReport(already_completed=True)

        legacy = await load_legacy_data(self.store, legacy_keys)
        if legacy.unreadable and legacy.records is None:
            logger.error(
                "Legacy collection unreadable, migration postponed",
                keys=sorted(legacy.unreadable),
            )
            return MigrationReport(unreadable_keys=legacy.unreadable, postponed=True)

        report = await self.run(legacy.records)
        report.unreadable_keys = legacy.unreadable
        return report

    async def _migrate_record(
        self, index: int, record: Any, report: MigrationReport
    ) -> None:
        item_id: Optional[str] = None
        try:
            entry = self._normalize(index, record)
            item_id = entry.id
            await self.collection.put_entry(entry)
        except SneakerSecureError as e:
            report.skipped.append(SkippedRecord(index=index, reason=str(e), item_id=item_id))
            logger.warning(
                "Skipping legacy record", index=index, item_id=item_id, reason=str(e)
            )
            return

        report.migrated += 1
        logger.debug("Migrated legacy record", index=index, item_id=item_id)

    @staticmethod
    def _normalize(index: int, record: Any) -> CollectionEntry:
        if not isinstance(record, dict):
            raise ValidationError(
                f"records[{index}]", type(record).__name__, "record is not an object"
            )
        item_id = record.get("id")
        if item_id is None or str(item_id).strip() == "":
            raise ValidationError(f"records[{index}].id", item_id, "record has no id")
        return CollectionEntry.from_partial(str(item_id), record)

    async def _mark_completed(self, report: MigrationReport) -> None:
        try:
            await self.store.set(MIGRATION_COMPLETED_KEY, "true")
        except StorageError as e:
            raise MigrationIncompleteError(
                report.migrated,
                report.skipped_count,
                str(e),
                component="MigrationEngine",
            ) from e
