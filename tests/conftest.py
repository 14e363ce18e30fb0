"""
Pytest configuration and fixtures for SneakerSecure.
"""

import shutil
import tempfile
from pathlib import Path
from typing import AsyncGenerator, Generator, Optional, Tuple

import pytest
import pytest_asyncio

from sneaker_secure.catalog import CatalogRepository, Item
from sneaker_secure.collection import CollectionRepository
from sneaker_secure.core.config import Config, Environment
from sneaker_secure.core.exceptions import StorageIOError
from sneaker_secure.core.persistence import InMemoryKeyValueStore, SQLiteKeyValueStore

TRUSTED_ID = "d3b59a87-86f4-473a-8a96-78f5ccee853b"


class FailingStore(InMemoryKeyValueStore):
    """In-memory store whose writes fail for keys starting with a given prefix."""

    def __init__(self, fail_prefix: Optional[str] = None) -> None:
        super().__init__()
        self.fail_prefix = fail_prefix

    async def _set(self, key: str, value: str) -> None:
        if self.fail_prefix is not None and key.startswith(self.fail_prefix):
            raise StorageIOError("set", "disk unavailable")
        await super()._set(key, value)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    path = Path(tempfile.mkdtemp())
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> Config:
    cfg = Config(environment=Environment.TESTING)
    cfg.data_dir = temp_dir / "data"
    return cfg


@pytest_asyncio.fixture
async def memory_store() -> AsyncGenerator[InMemoryKeyValueStore, None]:
    store = InMemoryKeyValueStore()
    await store.open()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def sqlite_store(temp_dir: Path) -> AsyncGenerator[SQLiteKeyValueStore, None]:
    store = SQLiteKeyValueStore(temp_dir / "kv.db")
    await store.open()
    yield store
    await store.close()


@pytest.fixture
def repos(
    memory_store: InMemoryKeyValueStore,
) -> Tuple[CatalogRepository, CollectionRepository]:
    """Catalog and collection wired together over one store."""
    collection = CollectionRepository(memory_store)
    catalog = CatalogRepository(memory_store, collection=collection)
    collection.history_source = catalog
    return catalog, collection


@pytest.fixture
def sample_item() -> Item:
    return Item(
        id=TRUSTED_ID,
        name="Nike Dunk Low",
        description="Panda colourway",
        image_url="https://example.com/dunk.jpg",
        manufacture_number="DD1391-100",
        gallery=["https://example.com/dunk-side.jpg"],
    )


@pytest_asyncio.fixture
async def failing_store() -> AsyncGenerator[FailingStore, None]:
    """Open in-memory store; set ``fail_prefix`` to make matching writes fail."""
    store = FailingStore()
    await store.open()
    yield store
    await store.close()
