"""
SQLite-backed persistence.

Blobs live in a single ``kv`` table. Queries run in a worker thread so the
event loop is never blocked by disk I/O.
"""

import asyncio
import sqlite3
import threading
import time
from typing import Optional

from pocketarcade.persistence.base import PersistenceService

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    blob TEXT NOT NULL,
    updated_at REAL NOT NULL
);
"""


class SQLitePersistence(PersistenceService):
    """
    Store blobs in SQLite.

    Args:
        db_path: Path to the database file. If None, uses an in-memory database.
    """

    errors = (OSError, ValueError, sqlite3.Error)

    def __init__(self, db_path: Optional[str] = None, strict: bool = False):
        super().__init__(strict=strict)
        self.db_path = db_path
        self._lock = threading.Lock()
        self.conn = sqlite3.connect(
            db_path if db_path else ":memory:", check_same_thread=False
        )
        self.conn.executescript(SCHEMA_SQL)
        self.conn.commit()

    def close(self) -> None:
        """
        Close the database connection.

        Later reads and writes fail with ``sqlite3.ProgrammingError`` and are
        reported like any other storage failure.
        """
        self.conn.close()

    def _write_sync(self, key: str, blob: str) -> None:
        with self._lock:
            self.conn.execute(
                "INSERT OR REPLACE INTO kv (key, blob, updated_at) VALUES (?, ?, ?)",
                (key, blob, time.time()),
            )
            self.conn.commit()

    def _read_sync(self, key: str) -> Optional[str]:
        with self._lock:
            row = self.conn.execute(
                "SELECT blob FROM kv WHERE key = ?", (key,)
            ).fetchone()
        return row[0] if row else None

    async def _write(self, key: str, blob: str) -> None:
        await asyncio.to_thread(self._write_sync, key, blob)

    async def _read(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._read_sync, key)
