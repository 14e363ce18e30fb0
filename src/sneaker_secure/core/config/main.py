"""
Main configuration class for SneakerSecure.

Contains the main Config class that orchestrates all configuration components.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..exceptions import ConfigurationError
from .base import DEFAULT_CONFIG_FILE, ENV_PREFIX, Environment
from .runtime import (
    CatalogConfig,
    LoggingConfig,
    MigrationConfig,
    SessionConfig,
    StoreConfig,
    VerificationConfig,
)
from .yaml_loader import YAMLConfigLoader

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Main configuration class for SneakerSecure."""

    # Environment
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False

    # Storage and data
    store: StoreConfig = field(default_factory=StoreConfig)
    migration: MigrationConfig = field(default_factory=MigrationConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)

    # Trust and capabilities
    verification: VerificationConfig = field(default_factory=VerificationConfig)
    session: SessionConfig = field(default_factory=SessionConfig)

    logging: LoggingConfig = field(default_factory=LoggingConfig)

    data_dir: Path = field(default_factory=lambda: Path.cwd() / "data")

    def __post_init__(self) -> None:
        """Apply environment-specific defaults."""
        self.data_dir = Path(self.data_dir)

        if self.environment == Environment.PRODUCTION:
            self.debug = False
            self.logging.json_format = True
        elif self.environment == Environment.TESTING:
            self.debug = True

        if self.debug:
            self.logging.level = "DEBUG"

    @property
    def db_path(self) -> Path:
        """Location of the SQLite key-value file."""
        return self.data_dir / self.store.db_filename

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "Config":
        """Load configuration from YAML file.

        Relative ``seed_file`` and ``trusted_ids_file`` paths are resolved
        against the directory holding the config file.
        """
        config_path = Path(config_path)
        data = YAMLConfigLoader.load_yaml(config_path)
        base_dir = config_path.parent

        try:
            environment = Environment(data.get("environment", "development"))

            verification_data = dict(data.get("verification", {}) or {})
            if verification_data.get("trusted_ids_file"):
                verification_data["trusted_ids_file"] = _resolve(
                    base_dir, verification_data["trusted_ids_file"]
                )

            catalog_data = dict(data.get("catalog", {}) or {})
            if catalog_data.get("seed_file"):
                catalog_data["seed_file"] = _resolve(base_dir, catalog_data["seed_file"])

            return cls(
                environment=environment,
                debug=bool(data.get("debug", False)),
                store=StoreConfig(**(data.get("store", {}) or {})),
                migration=MigrationConfig(**(data.get("migration", {}) or {})),
                catalog=CatalogConfig(**catalog_data),
                verification=VerificationConfig(**verification_data),
                session=SessionConfig(**(data.get("session", {}) or {})),
                logging=LoggingConfig(**(data.get("logging", {}) or {})),
                data_dir=_resolve(base_dir, data.get("data_dir", "data")),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration in {config_path}: {e}") from e

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""

        def getenv_bool(name: str, default: bool) -> bool:
            v = os.getenv(ENV_PREFIX + name)
            return default if v is None else v.lower() in {"1", "true", "yes", "on"}

        def getenv_float(name: str, default: float) -> float:
            v = os.getenv(ENV_PREFIX + name)
            return default if v is None else float(v)

        def getenv_str(name: str, default: str) -> str:
            return os.getenv(ENV_PREFIX + name, default)

        def getenv_path(name: str) -> Optional[Path]:
            v = os.getenv(ENV_PREFIX + name)
            return Path(v) if v else None

        # SNKR_* env overrides only
        try:
            env = Environment(getenv_str("ENV", "development"))

            store = StoreConfig(
                backend=getenv_str("STORE__BACKEND", "sqlite"),
                db_filename=getenv_str("STORE__DB_FILENAME", "sneaker_secure.db"),
                journal_mode=getenv_str("STORE__JOURNAL_MODE", "WAL"),
                synchronous=getenv_str("STORE__SYNCHRONOUS", "NORMAL"),
                timeout_s=getenv_float("STORE__TIMEOUT_S", 30.0),
            )

            migration = MigrationConfig(enabled=getenv_bool("MIGRATION__ENABLED", True))
            legacy_keys = os.getenv(ENV_PREFIX + "MIGRATION__LEGACY_KEYS")
            if legacy_keys:
                migration.legacy_keys = [
                    k.strip() for k in legacy_keys.split(",") if k.strip()
                ]

            verification = VerificationConfig(
                trusted_ids_file=getenv_path("VERIFICATION__TRUSTED_IDS_FILE")
            )
            trusted_ids = os.getenv(ENV_PREFIX + "VERIFICATION__TRUSTED_IDS")
            if trusted_ids:
                verification.trusted_ids = [
                    i.strip() for i in trusted_ids.split(",") if i.strip()
                ]

            return cls(
                environment=env,
                debug=getenv_bool("DEBUG", False),
                store=store,
                migration=migration,
                catalog=CatalogConfig(seed_file=getenv_path("CATALOG__SEED_FILE")),
                verification=verification,
                session=SessionConfig(
                    admin_username=getenv_str("SESSION__ADMIN_USERNAME", "admin")
                ),
                logging=LoggingConfig(
                    level=getenv_str("LOGGING__LEVEL", "INFO"),
                    json_format=getenv_bool("LOGGING__JSON_FORMAT", False),
                ),
                data_dir=Path(getenv_str("DATA_DIR", str(Path.cwd() / "data"))),
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid {ENV_PREFIX}* environment setting: {e}") from e

    @classmethod
    def load(cls, config_path: Optional[Union[str, Path]] = None) -> "Config":
        """Load from an explicit file, the default file if present, else the environment."""
        if config_path is not None:
            return cls.from_file(config_path)

        default_path = Path(DEFAULT_CONFIG_FILE)
        if default_path.exists():
            logger.debug(f"Loading configuration from {default_path}")
            return cls.from_file(default_path)

        return cls.from_env()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for display."""
        return {
            "environment": self.environment.value,
            "debug": self.debug,
            "data_dir": str(self.data_dir),
            "store": {
                "backend": self.store.backend,
                "db_filename": self.store.db_filename,
                "journal_mode": self.store.journal_mode,
                "synchronous": self.store.synchronous,
                "timeout_s": self.store.timeout_s,
            },
            "migration": {
                "enabled": self.migration.enabled,
                "legacy_keys": list(self.migration.legacy_keys),
            },
            "catalog": {
                "seed_file": str(self.catalog.seed_file) if self.catalog.seed_file else None
            },
            "verification": {
                "trusted_ids": list(self.verification.trusted_ids),
                "trusted_ids_file": (
                    str(self.verification.trusted_ids_file)
                    if self.verification.trusted_ids_file
                    else None
                ),
            },
            "session": {"admin_username": self.session.admin_username},
            "logging": {
                "level": self.logging.level,
                "json_format": self.logging.json_format,
            },
        }


def _resolve(base_dir: Path, value: Union[str, Path]) -> Path:
    path = Path(value)
    return path if path.is_absolute() else base_dir / path
