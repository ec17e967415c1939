from __future__ import annotations

import logging
import sqlite3
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

logger = logging.getLogger(__name__)


class SqliteSessionStorage:
    """Key/value blob storage for session snapshots in a local SQLite file.

    Each ``(namespace, key)`` pair holds exactly one value; ``put`` replaces it
    in a single statement so a snapshot is either fully written or not at all.
    """

    def __init__(self, db_path: Path, clock: Callable[[], float] = time.time) -> None:
        self._db_path = db_path
        self._clock = clock
        self._conn: sqlite3.Connection | None = None

    def _connect(self) -> sqlite3.Connection:
        if self._conn is None:
            if str(self._db_path) != ":memory:":
                self._db_path.parent.mkdir(parents=True, exist_ok=True)
            logger.debug("Opening session storage at %s", self._db_path)
            conn = sqlite3.connect(str(self._db_path))
            conn.execute("PRAGMA busy_timeout=5000")
            if str(self._db_path) != ":memory:":
                conn.execute("PRAGMA journal_mode=WAL")
            conn.execute(
                "CREATE TABLE IF NOT EXISTS session_blob ("
                "  namespace TEXT NOT NULL,"
                "  key TEXT NOT NULL,"
                "  value TEXT NOT NULL,"
                "  updated_at REAL NOT NULL,"
                "  PRIMARY KEY (namespace, key)"
                ")"
            )
            conn.commit()
            self._conn = conn
        return self._conn

    def get(self, namespace: str, key: str) -> str | None:
        row = (
            self._connect()
            .execute(
                "SELECT value FROM session_blob WHERE namespace = ? AND key = ?",
                (namespace, key),
            )
            .fetchone()
        )
        if row is None:
            return None
        return row[0]

    def put(self, namespace: str, key: str, value: str) -> None:
        conn = self._connect()
        conn.execute(
            "INSERT OR REPLACE INTO session_blob (namespace, key, value, updated_at) VALUES (?, ?, ?, ?)",
            (namespace, key, value, self._clock()),
        )
        conn.commit()

    def delete(self, namespace: str, key: str) -> None:
        conn = self._connect()
        conn.execute(
            "DELETE FROM session_blob WHERE namespace = ? AND key = ?",
            (namespace, key),
        )
        conn.commit()

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None
