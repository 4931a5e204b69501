import aiosqlite
import asyncio
import json
import sqlite3
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional, Any, AsyncIterator, Union

from errors import StorageError

logger = logging.getLogger(__name__)


class BlobStore:
    """Async key-value store of JSON documents on top of SQLite.

    Uses a single persistent connection with an async lock to serialize
    access. The connection is lazily opened on first use and reused until
    explicitly closed. Pass ":memory:" for a throwaway store.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path) if str(path) != ":memory:" else path
        self._conn: Optional[aiosqlite.Connection] = None
        self._conn_lock: Optional[asyncio.Lock] = None
        self._initialized = False

    async def _ensure_connection(self) -> aiosqlite.Connection:
        """Ensure we have an open connection with the schema in place."""
        if self._conn is None:
            try:
                self._conn = await aiosqlite.connect(self.path)
                self._conn.row_factory = aiosqlite.Row
                if self.path != ":memory:":
                    await self._conn.execute("PRAGMA journal_mode=WAL")
                await self._conn.execute("PRAGMA busy_timeout=5000")
            except (sqlite3.Error, OSError) as e:
                self._conn = None
                raise StorageError(f"Cannot open store at {self.path}: {e}") from e
        if not self._initialized:
            await self._init_schema(self._conn)
            self._initialized = True
        return self._conn

    async def _init_schema(self, conn: aiosqlite.Connection) -> None:
        try:
            await conn.execute(
                "CREATE TABLE IF NOT EXISTS blobs (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
            )
            await conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Error initializing blob schema: {e}")
            raise StorageError(f"Failed to initialize schema: {e}") from e

    async def _get_lock(self) -> asyncio.Lock:
        if self._conn_lock is None:
            self._conn_lock = asyncio.Lock()
        return self._conn_lock

    @asynccontextmanager
    async def _get_connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """Get the connection with serialized access."""
        lock = await self._get_lock()
        async with lock:
            conn = await self._ensure_connection()
            yield conn

    async def get(self, key: str, default: Any = None) -> Any:
        """Get a decoded document. Returns default if missing, malformed or on error."""
        try:
            async with self._get_connection() as conn:
                async with conn.execute("SELECT value FROM blobs WHERE key=?", (key,)) as cursor:
                    row = await cursor.fetchone()
        except (sqlite3.Error, StorageError) as e:
            logger.warning(f"Error reading {key}: {e}")
            return default
        if row is None:
            return default
        try:
            return json.loads(row["value"])
        except ValueError as e:
            logger.warning(f"Discarding malformed JSON stored under {key}: {e}")
            return default

    async def set(self, key: str, value: Any) -> None:
        try:
            payload = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Cannot encode {key}: {e}") from e
        try:
            async with self._get_connection() as conn:
                await conn.execute(
                    "INSERT OR REPLACE INTO blobs (key,value) VALUES (?,?)",
                    (key, payload),
                )
                await conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Error writing {key}: {e}")
            raise StorageError(f"Failed to save {key}: {e}") from e

    async def delete(self, key: str) -> None:
        try:
            async with self._get_connection() as conn:
                await conn.execute("DELETE FROM blobs WHERE key=?", (key,))
                await conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to delete {key}: {e}") from e

    async def close(self) -> None:
        """Close the persistent connection."""
        if self._conn is not None:
            try:
                await self._conn.close()
            except (sqlite3.Error, OSError) as e:
                logger.warning(f"Error closing blob store: {e}")
            finally:
                self._conn = None
                self._initialized = False
