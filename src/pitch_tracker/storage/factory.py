from __future__ import annotations

from typing import TYPE_CHECKING

from pitch_tracker.storage.sqlite_store import SqliteSessionStorage

if TYPE_CHECKING:
    from pitch_tracker.config import TrackerSettings


def create_session_storage(settings: TrackerSettings | None = None) -> SqliteSessionStorage:
    """Build a SqliteSessionStorage at the configured ``storage.db_path``."""
    if settings is None:
        from pitch_tracker.config import load_settings

        settings = load_settings()
    return SqliteSessionStorage(settings.db_path)
