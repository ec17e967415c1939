from __future__ import annotations

from typing import TYPE_CHECKING

from pitch_tracker.storage.sqlite_store import SqliteSessionStorage

if TYPE_CHECKING:
    from pathlib import Path


class TestSqliteSessionStorage:
    def test_get_returns_none_on_miss(self, tmp_path: Path) -> None:
        storage = SqliteSessionStorage(tmp_path / "session.db")
        assert storage.get("ns", "missing") is None
        storage.close()

    def test_put_and_get_round_trip(self, tmp_path: Path) -> None:
        storage = SqliteSessionStorage(tmp_path / "session.db")
        storage.put("pitch_tracker", "v1", '{"lineup": []}')
        assert storage.get("pitch_tracker", "v1") == '{"lineup": []}'
        storage.close()

    def test_put_overwrites_existing(self, tmp_path: Path) -> None:
        storage = SqliteSessionStorage(tmp_path / "session.db")
        storage.put("ns", "k", "old")
        storage.put("ns", "k", "new")
        assert storage.get("ns", "k") == "new"
        storage.close()

    def test_delete(self, tmp_path: Path) -> None:
        storage = SqliteSessionStorage(tmp_path / "session.db")
        storage.put("ns", "a", "1")
        storage.put("ns", "b", "2")
        storage.delete("ns", "a")
        assert storage.get("ns", "a") is None
        assert storage.get("ns", "b") == "2"
        storage.close()

    def test_delete_missing_is_noop(self, tmp_path: Path) -> None:
        storage = SqliteSessionStorage(tmp_path / "session.db")
        storage.delete("ns", "missing")
        assert storage.get("ns", "missing") is None
        storage.close()

    def test_survives_reopen(self, tmp_path: Path) -> None:
        db_path = tmp_path / "session.db"
        first = SqliteSessionStorage(db_path)
        first.put("ns", "k", "kept")
        first.close()
        second = SqliteSessionStorage(db_path)
        assert second.get("ns", "k") == "kept"
        second.close()

    def test_auto_creates_parent_dirs(self, tmp_path: Path) -> None:
        db_path = tmp_path / "deep" / "nested" / "session.db"
        storage = SqliteSessionStorage(db_path)
        storage.put("ns", "k", "v")
        assert db_path.exists()
        storage.close()

    def test_namespaces_are_isolated(self, tmp_path: Path) -> None:
        storage = SqliteSessionStorage(tmp_path / "session.db")
        storage.put("ns1", "k", "val1")
        storage.put("ns2", "k", "val2")
        assert storage.get("ns1", "k") == "val1"
        assert storage.get("ns2", "k") == "val2"
        storage.close()

    def test_records_update_time(self, tmp_path: Path) -> None:
        storage = SqliteSessionStorage(tmp_path / "session.db", clock=lambda: 1234.5)
        storage.put("ns", "k", "v")
        row = storage._connect().execute("SELECT updated_at FROM session_blob").fetchone()
        assert row[0] == 1234.5
        storage.close()

    def test_wal_mode_enabled(self, tmp_path: Path) -> None:
        storage = SqliteSessionStorage(tmp_path / "session.db")
        journal_mode = storage._connect().execute("PRAGMA journal_mode").fetchone()[0]
        assert journal_mode == "wal"
        storage.close()

    def test_close_is_idempotent(self, tmp_path: Path) -> None:
        storage = SqliteSessionStorage(tmp_path / "session.db")
        storage.put("ns", "k", "v")
        storage.close()
        storage.close()
        # Reopens lazily after close.
        assert storage.get("ns", "k") == "v"
        storage.close()
