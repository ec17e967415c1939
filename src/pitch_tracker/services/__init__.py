from pitch_tracker.services.pitch_entry import PendingSelection, PendingState, PitchEntry
from pitch_tracker.services.session_store import SessionStore

__all__ = ["PendingSelection", "PendingState", "PitchEntry", "SessionStore"]
