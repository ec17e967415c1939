from pitch_tracker.storage.protocol import SessionStorage
from pitch_tracker.storage.sqlite_store import SqliteSessionStorage

__all__ = ["SessionStorage", "SqliteSessionStorage"]
