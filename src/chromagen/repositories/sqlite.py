"""SQLite implementation of the key-value store."""

from __future__ import annotations

import json
import sqlite3
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

from chromagen.exceptions import StoreUnavailableError
from chromagen.logging_config import get_logger
from chromagen.repositories.interfaces import KeyValueStore
from chromagen.repositories.memory import SWEEP_INTERVAL_SECONDS

logger = get_logger(__name__)


class SQLiteKeyValueStore(KeyValueStore):
    """SQLite-backed store with expiry timestamps kept per row.

    Expiry uses wall-clock time so records survive restarts. Expired rows
    are purged on ``initialize`` and swept from ``put`` at most once per
    ``sweep_interval`` seconds.
    """

    def __init__(
        self,
        path: str | Path = ":memory:",
        check_same_thread: bool = True,
        clock: Callable[[], float] = time.time,
        sweep_interval: float = SWEEP_INTERVAL_SECONDS,
    ) -> None:
        self._path = str(path)
        self._check_same_thread = check_same_thread
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._next_sweep = clock() + sweep_interval
        self._connection: sqlite3.Connection | None = None

    def get_connection(self) -> sqlite3.Connection:
        """Get or create the database connection."""
        if self._connection is None:
            try:
                self._connection = sqlite3.connect(
                    self._path, check_same_thread=self._check_same_thread
                )
            except sqlite3.Error as e:
                raise StoreUnavailableError(str(e)) from e
            self._connection.row_factory = sqlite3.Row
        return self._connection

    def initialize(self) -> None:
        """Create the store table and drop rows that expired while offline."""
        conn = self.get_connection()
        try:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    expires_at REAL
                );
                CREATE INDEX IF NOT EXISTS idx_kv_store_expires ON kv_store(expires_at);
                """
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StoreUnavailableError(str(e)) from e
        self.purge_expired()

    def get(self, key: str) -> Any | None:
        conn = self.get_connection()
        try:
            row = conn.execute(
                "SELECT value, expires_at FROM kv_store WHERE key = ?", (key,)
            ).fetchone()
            if row is None:
                return None
            if row["expires_at"] is not None and self._clock() >= row["expires_at"]:
                conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
                conn.commit()
                return None
        except sqlite3.Error as e:
            raise StoreUnavailableError(str(e)) from e
        try:
            return json.loads(row["value"])
        except ValueError:
            # Unreadable rows count as missing; the next put overwrites them.
            logger.warning("kv_store_corrupt_value", key=key)
            return None

    def put(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        now = self._clock()
        if now >= self._next_sweep:
            self.purge_expired()
        expires_at = now + ttl_seconds if ttl_seconds else None
        conn = self.get_connection()
        try:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, expires_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    expires_at = excluded.expires_at
                """,
                (key, json.dumps(value), expires_at),
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StoreUnavailableError(str(e)) from e

    def delete(self, key: str) -> None:
        conn = self.get_connection()
        try:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
        except sqlite3.Error as e:
            raise StoreUnavailableError(str(e)) from e

    def purge_expired(self) -> int:
        """Delete all expired rows and return how many were removed."""
        now = self._clock()
        conn = self.get_connection()
        try:
            cursor = conn.execute(
                "DELETE FROM kv_store WHERE expires_at IS NOT NULL AND expires_at <= ?",
                (now,),
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StoreUnavailableError(str(e)) from e
        self._next_sweep = now + self._sweep_interval
        return cursor.rowcount

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None
