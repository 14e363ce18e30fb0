"""
Tests for application bootstrap.
"""

import json
from pathlib import Path

import pytest

from sneaker_secure.app import SneakerSecureApp
from sneaker_secure.core.config import Config, StoreConfig
from sneaker_secure.core.persistence import MIGRATION_COMPLETED_KEY, InMemoryKeyValueStore


def _memory_config(test_config: Config) -> Config:
    test_config.store = StoreConfig(backend="memory")
    return test_config


class TestSneakerSecureApp:
    """Startup sequence and shutdown."""

    @pytest.mark.asyncio
    async def test_startup_migrates_legacy_collection(self, test_config: Config) -> None:
        store = InMemoryKeyValueStore(
            {"userCollection": json.dumps([{"id": "a", "name": "Legacy"}, {"name": "bad"}])}
        )
        app = SneakerSecureApp(_memory_config(test_config), store=store)

        report = await app.startup()
        try:
            assert report.migrated == 1
            assert report.skipped_count == 1
            assert [e.name for e in await app.collection.list_all()] == ["Legacy"]
            assert await store.get(MIGRATION_COMPLETED_KEY) == "true"
        finally:
            await app.shutdown()
        assert store.is_open is False

    @pytest.mark.asyncio
    async def test_startup_seeds_catalog(self, test_config: Config, temp_dir: Path) -> None:
        seed_file = temp_dir / "seed.yaml"
        seed_file.write_text("- id: s1\n  name: Seeded\n")
        config = _memory_config(test_config)
        config.catalog.seed_file = seed_file

        async with SneakerSecureApp(config) as app:
            assert (await app.catalog.get("s1")).name == "Seeded"
            # Write-through and history lookups are wired both ways
            assert app.catalog.collection is app.collection
            assert app.collection.history_source is app.catalog

    @pytest.mark.asyncio
    async def test_unreadable_legacy_data_postpones_migration(self, test_config: Config) -> None:
        store = InMemoryKeyValueStore({"myCollection": '{"not": "an array"}'})
        app = SneakerSecureApp(_memory_config(test_config), store=store)

        report = await app.startup()
        try:
            assert report.postponed is True
            assert list(report.unreadable_keys) == ["myCollection"]
            assert await app.migration.is_completed() is False
            assert await store.get("myCollection") == '{"not": "an array"}'
        finally:
            await app.shutdown()

    @pytest.mark.asyncio
    async def test_completed_migration_ignores_corrupt_legacy_data(
        self, test_config: Config
    ) -> None:
        store = InMemoryKeyValueStore(
            {MIGRATION_COMPLETED_KEY: "true", "myCollection": '{"broken": 1}'}
        )
        app = SneakerSecureApp(_memory_config(test_config), store=store)

        report = await app.startup()
        try:
            assert report.already_completed is True
            assert report.unreadable_keys == {}
            assert await app.collection.list_all() == []
        finally:
            await app.shutdown()

    @pytest.mark.asyncio
    async def test_migration_disabled(self, test_config: Config) -> None:
        config = _memory_config(test_config)
        config.migration.enabled = False

        async with SneakerSecureApp(config) as app:
            assert app.migration_report is None
            assert await app.migration.is_completed() is False

    @pytest.mark.asyncio
    async def test_sqlite_state_survives_restart(self, test_config: Config) -> None:
        async with SneakerSecureApp(test_config) as app:
            await app.collection.add({"id": "kept"})

        async with SneakerSecureApp(test_config) as app:
            assert await app.collection.contains("kept") is True
            assert app.migration_report.already_completed is True
