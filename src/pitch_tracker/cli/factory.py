from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from pitch_tracker.config import TrackerSettings
from pitch_tracker.services.pitch_entry import PitchEntry
from pitch_tracker.services.session_store import SessionStore
from pitch_tracker.storage.factory import create_session_storage


@dataclass(frozen=True)
class SessionContext:
    settings: TrackerSettings
    store: SessionStore
    entry: PitchEntry


@contextmanager
def build_session_context(settings: TrackerSettings) -> Iterator[SessionContext]:
    """Open the persisted session for one command.

    On a clean exit the store writes a final snapshot before releasing
    storage; on an error the storage is released as-is.
    """
    storage = create_session_storage(settings)
    try:
        store = SessionStore.open(storage, namespace=settings.namespace, key=settings.key)
        yield SessionContext(settings=settings, store=store, entry=PitchEntry(store))
    except BaseException:
        storage.close()
        raise
    store.close()
