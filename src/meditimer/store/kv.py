from pathlib import Path
from typing import Protocol

import aiosqlite

from meditimer.core.base import MeditimerBase
from meditimer.exceptions import StoreError
from meditimer.logging_ import LOG_LEVELS

_CREATE_TABLE = "CREATE TABLE IF NOT EXISTS kv (key TEXT PRIMARY KEY, value TEXT NOT NULL)"


class KeyValueStore(Protocol):
    async def get(self, key: str) -> str | None: ...
    async def set(self, key: str, value: str) -> None: ...
    async def delete(self, key: str) -> bool: ...


class SqliteKeyValueStore(MeditimerBase):
    """Minimal string key-value store in a single SQLite table.

    Pass `":memory:"` as the path for a throwaway store.
    """

    _db: aiosqlite.Connection | None
    """The aiosqlite connection, set by open()."""

    def __init__(self, path: Path | str, log_level: LOG_LEVELS | None = None) -> None:
        super().__init__(log_level=log_level)
        self.path = path
        self._db = None

    @property
    def db(self) -> aiosqlite.Connection:
        """Return the active database connection.

        Raises:
            StoreError: If the store has not been opened.
        """
        if self._db is None:
            raise StoreError("Key-value store is not open")
        return self._db

    @property
    def is_open(self) -> bool:
        return self._db is not None

    async def open(self) -> None:
        if self._db is not None:
            return

        if isinstance(self.path, Path):
            self.path.parent.mkdir(parents=True, exist_ok=True)

        try:
            self._db = await aiosqlite.connect(self.path)
            await self._db.execute(_CREATE_TABLE)
            await self._db.commit()
        except aiosqlite.Error as e:
            await self.close()
            raise StoreError(f"Unable to open key-value store at {self.path}: {e}") from e

        self.logger.debug("Opened key-value store at %s", self.path)

    async def close(self) -> None:
        if self._db is None:
            return
        db, self._db = self._db, None
        await db.close()
        self.logger.debug("Closed key-value store at %s", self.path)

    async def get(self, key: str) -> str | None:
        async with self.db.execute("SELECT value FROM kv WHERE key = ?", (key,)) as cursor:
            row = await cursor.fetchone()
        return row[0] if row else None

    async def set(self, key: str, value: str) -> None:
        await self.db.execute(
            "INSERT INTO kv (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value = excluded.value",
            (key, value),
        )
        await self.db.commit()

    async def delete(self, key: str) -> bool:
        cursor = await self.db.execute("DELETE FROM kv WHERE key = ?", (key,))
        await self.db.commit()
        return cursor.rowcount > 0

    async def __aenter__(self) -> "SqliteKeyValueStore":
        await self.open()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
