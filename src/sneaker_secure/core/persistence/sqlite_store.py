"""
SQLite-backed key-value store.

A single ``kv_store`` table keyed by TEXT primary key. Blocking sqlite3 calls
run in the default executor; one connection is shared behind a thread lock so
each statement commits on its own and is atomic per key.
"""

import asyncio
import logging
import sqlite3
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypeVar

from ..config.runtime import StoreConfig
from ..exceptions import StorageIOError, handle_storage_error
from .kv_store import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY NOT NULL,
    value TEXT NOT NULL
);
"""

# SQLite caps bound parameters per statement; stay well under the default.
_MULTI_GET_CHUNK = 500


class SQLiteKeyValueStore(KeyValueStore):
    """Durable key-value store on a SQLite file."""

    def __init__(self, db_path: Path, config: Optional[StoreConfig] = None) -> None:
        super().__init__("sqlite")
        self.db_path = Path(db_path)
        self.config = config or StoreConfig()
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()

    async def _run(self, func: Callable[..., T], *args: Any) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    # ── Connection lifecycle ──────────────────────────────────────────

    @handle_storage_error("open")
    def _open_sync(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(
            str(self.db_path),
            timeout=self.config.timeout_s,
            check_same_thread=False,
            isolation_level=None,  # autocommit: every statement is its own transaction
        )
        try:
            conn.execute(f"PRAGMA journal_mode={self.config.journal_mode}")
            conn.execute(f"PRAGMA synchronous={self.config.synchronous}")
            conn.executescript(_SCHEMA_SQL)
        except sqlite3.Error:
            conn.close()
            raise
        self._conn = conn

    @handle_storage_error("close")
    def _close_sync(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    async def _open(self) -> None:
        await self._run(self._open_sync)
        logger.debug(f"SQLite store ready at {self.db_path}")

    async def _close(self) -> None:
        await self._run(self._close_sync)

    def _connection(self, operation: str) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageIOError(operation, "SQLite connection is closed")
        return self._conn

    # ── Single-key operations ─────────────────────────────────────────

    @handle_storage_error("get")
    def _get_sync(self, key: str) -> Optional[str]:
        with self._lock:
            row = (
                self._connection("get")
                .execute("SELECT value FROM kv_store WHERE key = ?", (key,))
                .fetchone()
            )
        return row[0] if row else None

    @handle_storage_error("set")
    def _set_sync(self, key: str, value: str) -> None:
        with self._lock:
            self._connection("set").execute(
                "INSERT OR REPLACE INTO kv_store (key, value) VALUES (?, ?)",
                (key, value),
            )

    @handle_storage_error("delete")
    def _delete_sync(self, key: str) -> None:
        with self._lock:
            self._connection("delete").execute(
                "DELETE FROM kv_store WHERE key = ?", (key,)
            )

    # ── Multi-key reads ───────────────────────────────────────────────

    @handle_storage_error("list_keys")
    def _list_keys_sync(self, prefix: str) -> List[str]:
        with self._lock:
            rows = (
                self._connection("list_keys")
                .execute(
                    "SELECT key FROM kv_store WHERE substr(key, 1, ?) = ?",
                    (len(prefix), prefix),
                )
                .fetchall()
            )
        return [row[0] for row in rows]

    @handle_storage_error("multi_get")
    def _multi_get_sync(self, keys: List[str]) -> Dict[str, str]:
        found: Dict[str, str] = {}
        with self._lock:
            conn = self._connection("multi_get")
            for start in range(0, len(keys), _MULTI_GET_CHUNK):
                chunk = keys[start : start + _MULTI_GET_CHUNK]
                placeholders = ", ".join("?" for _ in chunk)
                rows = conn.execute(
                    f"SELECT key, value FROM kv_store WHERE key IN ({placeholders})",
                    chunk,
                ).fetchall()
                found.update({row[0]: row[1] for row in rows})
        return found

    async def _get(self, key: str) -> Optional[str]:
        return await self._run(self._get_sync, key)

    async def _set(self, key: str, value: str) -> None:
        await self._run(self._set_sync, key, value)

    async def _delete(self, key: str) -> None:
        await self._run(self._delete_sync, key)

    async def _list_keys(self, prefix: str) -> List[str]:
        return await self._run(self._list_keys_sync, prefix)

    async def _multi_get(self, keys: List[str]) -> Dict[str, str]:
        return await self._run(self._multi_get_sync, keys)

    def get_stats(self) -> Dict[str, Any]:
        """Get store statistics."""
        return {
            "backend": self.name,
            "db_path": str(self.db_path),
            "open": self.is_open,
            "journal_mode": self.config.journal_mode,
            "synchronous": self.config.synchronous,
        }
