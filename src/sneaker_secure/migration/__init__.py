"""
One-time migration of legacy collection data.
"""

from .engine import MigrationEngine, MigrationReport, MigrationState, SkippedRecord
from .legacy import DEFAULT_LEGACY_KEYS, LegacyData, load_legacy_data, read_legacy_blob

__all__ = [
    "DEFAULT_LEGACY_KEYS",
    "LegacyData",
    "MigrationEngine",
    "MigrationReport",
    "MigrationState",
    "SkippedRecord",
    "load_legacy_data",
    "read_legacy_blob",
]
