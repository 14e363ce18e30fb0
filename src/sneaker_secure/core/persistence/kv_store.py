"""
Key-value store abstraction.

String keys to string values, durable across process restarts for real
backends. Every call is atomic for a single key; there is no cross-key
transaction, so callers that touch several keys must tolerate partial
completion.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from ..exceptions import StorageIOError

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Async string-to-string store with prefix listing."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._opened = False
        # Serializes open and close
        self._state_lock = asyncio.Lock()

    @property
    def is_open(self) -> bool:
        return self._opened

    def _ensure_open(self, operation: str) -> None:
        if not self._opened:
            raise StorageIOError(operation, f"{self.name} store is not open")

    async def open(self) -> None:
        """Open the store. Calling open on an open store is a no-op."""
        async with self._state_lock:
            if self._opened:
                return
            await self._open()
            self._opened = True
        logger.info(f"{self.name} key-value store opened")

    async def close(self) -> None:
        """Close the store. Calling close on a closed store is a no-op."""
        async with self._state_lock:
            if not self._opened:
                return
            await self._close()
            self._opened = False
        logger.info(f"{self.name} key-value store closed")

    async def __aenter__(self) -> "KeyValueStore":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # type: ignore[no-untyped-def]
        await self.close()

    async def get(self, key: str) -> Optional[str]:
        """Return the value stored under key, None if absent."""
        self._ensure_open("get")
        return await self._get(key)

    async def set(self, key: str, value: str) -> bool:
        """Store value under key, replacing any previous value."""
        self._ensure_open("set")
        await self._set(key, value)
        return True

    async def delete(self, key: str) -> bool:
        """Remove key. Removing an absent key succeeds."""
        self._ensure_open("delete")
        await self._delete(key)
        return True

    async def list_keys(self, prefix: str = "") -> List[str]:
        """Return every key starting with prefix, sorted."""
        self._ensure_open("list_keys")
        return sorted(await self._list_keys(prefix))

    async def multi_get(self, keys: Sequence[str]) -> List[Optional[str]]:
        """Return values for keys in the same order, None for absent keys."""
        self._ensure_open("multi_get")
        if not keys:
            return []
        found = await self._multi_get(list(keys))
        return [found.get(key) for key in keys]

    @abstractmethod
    async def _open(self) -> None:
        pass

    @abstractmethod
    async def _close(self) -> None:
        pass

    @abstractmethod
    async def _get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    async def _set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    async def _delete(self, key: str) -> None:
        pass

    @abstractmethod
    async def _list_keys(self, prefix: str) -> List[str]:
        pass

    @abstractmethod
    async def _multi_get(self, keys: List[str]) -> Dict[str, str]:
        pass


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store for tests and ephemeral hosts."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        super().__init__("memory")
        self._data: Dict[str, str] = dict(initial or {})

    async def _open(self) -> None:
        # Yield once so callers observe the same suspension points as real I/O
        await asyncio.sleep(0)

    async def _close(self) -> None:
        await asyncio.sleep(0)

    async def _get(self, key: str) -> Optional[str]:
        await asyncio.sleep(0)
        return self._data.get(key)

    async def _set(self, key: str, value: str) -> None:
        await asyncio.sleep(0)
        self._data[key] = value

    async def _delete(self, key: str) -> None:
        await asyncio.sleep(0)
        self._data.pop(key, None)

    async def _list_keys(self, prefix: str) -> List[str]:
        await asyncio.sleep(0)
        return [key for key in self._data if key.startswith(prefix)]

    async def _multi_get(self, keys: List[str]) -> Dict[str, str]:
        await asyncio.sleep(0)
        return {key: self._data[key] for key in keys if key in self._data}
