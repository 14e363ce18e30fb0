"""
Runtime configuration for SneakerSecure.

Contains storage, migration, verification and logging configuration classes.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .base import DEFAULT_TRUSTED_IDS

VALID_BACKENDS = ("sqlite", "memory")
VALID_JOURNAL_MODES = ("WAL", "DELETE", "TRUNCATE", "PERSIST", "MEMORY")
VALID_SYNCHRONOUS = ("OFF", "NORMAL", "FULL", "EXTRA")


@dataclass
class StoreConfig:
    """Key-value store configuration."""

    backend: str = "sqlite"  # sqlite | memory
    db_filename: str = "sneaker_secure.db"
    journal_mode: str = "WAL"
    synchronous: str = "NORMAL"
    timeout_s: float = 30.0

    def __post_init__(self) -> None:
        """Validate store configuration."""
        self.journal_mode = self.journal_mode.upper()
        self.synchronous = self.synchronous.upper()
        if self.backend not in VALID_BACKENDS:
            raise ValueError(f"Invalid store backend: {self.backend}")
        if self.journal_mode not in VALID_JOURNAL_MODES:
            raise ValueError(f"Invalid journal mode: {self.journal_mode}")
        if self.synchronous not in VALID_SYNCHRONOUS:
            raise ValueError(f"Invalid synchronous mode: {self.synchronous}")


@dataclass
class MigrationConfig:
    """Legacy collection migration configuration."""

    enabled: bool = True
    legacy_keys: List[str] = field(
        default_factory=lambda: ["myCollection", "userCollection"]
    )


@dataclass
class VerificationConfig:
    """Trusted identifier registry configuration."""

    trusted_ids: List[str] = field(default_factory=lambda: list(DEFAULT_TRUSTED_IDS))
    trusted_ids_file: Optional[Path] = None


@dataclass
class CatalogConfig:
    """Catalog configuration."""

    seed_file: Optional[Path] = None


@dataclass
class SessionConfig:
    """Session capability configuration."""

    admin_username: str = "admin"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    json_format: bool = False
