"""
Tests for configuration management.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from sneaker_secure.core.config import (
    DEFAULT_TRUSTED_IDS,
    Config,
    Environment,
    StoreConfig,
    load_yaml,
)
from sneaker_secure.core.exceptions import ConfigurationError


class TestConfig:
    """Test configuration management."""

    def test_config_default_initialization(self) -> None:
        """Test default config initialization."""
        config = Config()
        assert config.environment == Environment.DEVELOPMENT
        assert config.store.backend == "sqlite"
        assert config.migration.enabled is True
        assert config.migration.legacy_keys == ["myCollection", "userCollection"]
        assert config.session.admin_username == "admin"
        assert list(DEFAULT_TRUSTED_IDS) == config.verification.trusted_ids

    def test_production_defaults(self) -> None:
        """Production forces debug off and JSON logs."""
        config = Config(environment=Environment.PRODUCTION, debug=True)
        assert config.debug is False
        assert config.logging.json_format is True

    def test_testing_enables_debug_logging(self) -> None:
        """Testing environment turns on debug logging."""
        config = Config(environment=Environment.TESTING)
        assert config.debug is True
        assert config.logging.level == "DEBUG"

    def test_db_path(self, temp_dir: Path) -> None:
        """db_path joins data_dir and the database filename."""
        config = Config(data_dir=temp_dir)
        assert config.db_path == temp_dir / "sneaker_secure.db"

    def test_store_config_validation(self) -> None:
        """Invalid store settings are rejected."""
        assert StoreConfig(journal_mode="wal").journal_mode == "WAL"
        with pytest.raises(ValueError):
            StoreConfig(backend="redis")
        with pytest.raises(ValueError):
            StoreConfig(synchronous="sometimes")

    def test_to_dict(self) -> None:
        """to_dict exposes every section."""
        data = Config().to_dict()
        for section in ("store", "migration", "catalog", "verification", "session", "logging"):
            assert section in data


class TestConfigFromFile:
    """Test loading configuration from YAML."""

    def test_from_file_resolves_relative_paths(self, temp_dir: Path) -> None:
        """Relative paths are resolved against the config file's directory."""
        config_path = temp_dir / "config.yaml"
        config_path.write_text(
            "environment: testing\n"
            "data_dir: store\n"
            "store:\n  backend: memory\n"
            "catalog:\n  seed_file: seed.yaml\n"
            "verification:\n  trusted_ids: [abc]\n  trusted_ids_file: ids.txt\n"
            "session:\n  admin_username: root\n"
        )

        config = Config.from_file(config_path)

        assert config.environment == Environment.TESTING
        assert config.data_dir == temp_dir / "store"
        assert config.store.backend == "memory"
        assert config.catalog.seed_file == temp_dir / "seed.yaml"
        assert config.verification.trusted_ids == ["abc"]
        assert config.verification.trusted_ids_file == temp_dir / "ids.txt"
        assert config.session.admin_username == "root"

    def test_from_file_invalid_value(self, temp_dir: Path) -> None:
        """Invalid values surface as ConfigurationError."""
        config_path = temp_dir / "config.yaml"
        config_path.write_text("store:\n  backend: redis\n")
        with pytest.raises(ConfigurationError):
            Config.from_file(config_path)

    def test_from_file_unknown_key(self, temp_dir: Path) -> None:
        """Unknown section keys surface as ConfigurationError."""
        config_path = temp_dir / "config.yaml"
        config_path.write_text("store:\n  flavour: vanilla\n")
        with pytest.raises(ConfigurationError):
            Config.from_file(config_path)

    def test_from_file_missing(self, temp_dir: Path) -> None:
        """A missing file is a ConfigurationError."""
        with pytest.raises(ConfigurationError):
            Config.from_file(temp_dir / "missing.yaml")

    def test_load_yaml_rejects_non_mapping(self, temp_dir: Path) -> None:
        path = temp_dir / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError):
            load_yaml(path)

    def test_load_yaml_empty(self, temp_dir: Path) -> None:
        path = temp_dir / "empty.yaml"
        path.write_text("# nothing here\n")
        assert load_yaml(path) == {}

    def test_load_explicit_path(self, temp_dir: Path) -> None:
        config_path = temp_dir / "config.yaml"
        config_path.write_text("debug: true\n")
        assert Config.load(config_path).debug is True


class TestConfigFromEnv:
    """Test SNKR_* environment overrides."""

    def test_from_env(self, temp_dir: Path) -> None:
        env = {
            "SNKR_ENV": "production",
            "SNKR_STORE__BACKEND": "memory",
            "SNKR_MIGRATION__ENABLED": "false",
            "SNKR_MIGRATION__LEGACY_KEYS": "oldKey, otherKey",
            "SNKR_VERIFICATION__TRUSTED_IDS": "id-1,id-2",
            "SNKR_SESSION__ADMIN_USERNAME": "boss",
            "SNKR_DATA_DIR": str(temp_dir),
        }
        with patch.dict(os.environ, env):
            config = Config.from_env()

        assert config.environment == Environment.PRODUCTION
        assert config.store.backend == "memory"
        assert config.migration.enabled is False
        assert config.migration.legacy_keys == ["oldKey", "otherKey"]
        assert config.verification.trusted_ids == ["id-1", "id-2"]
        assert config.session.admin_username == "boss"
        assert config.data_dir == temp_dir

    def test_from_env_invalid(self) -> None:
        with patch.dict(os.environ, {"SNKR_STORE__TIMEOUT_S": "soon"}):
            with pytest.raises(ConfigurationError):
                Config.from_env()
