"""Pending pitch selection for the presentation layer.

A pitch is committed only once its type, zone and result have all been chosen
since the last commit. The selection moves through
``EMPTY -> PITCH_CHOSEN -> PITCH_AND_ZONE_CHOSEN -> COMPLETE``; reaching
``COMPLETE`` logs the pitch through the session store and starts over.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from pitch_tracker.domain.pitch import PitchEvent, PitchResult, PitchType, parse_pitch_type, parse_result, parse_zone
from pitch_tracker.exceptions import PersistenceError, PitchTrackerError, PreconditionError

if TYPE_CHECKING:
    from pitch_tracker.services.session_store import SessionStore

logger = logging.getLogger(__name__)


class PendingState(StrEnum):
    EMPTY = "empty"
    PITCH_CHOSEN = "pitch_chosen"
    PITCH_AND_ZONE_CHOSEN = "pitch_and_zone_chosen"
    COMPLETE = "complete"


@dataclass(frozen=True)
class PendingSelection:
    pitch_type: PitchType | None = None
    zone: int | None = None
    result: PitchResult | None = None

    @property
    def state(self) -> PendingState:
        if self.pitch_type is None:
            return PendingState.EMPTY
        if self.zone is None:
            return PendingState.PITCH_CHOSEN
        if self.result is None:
            return PendingState.PITCH_AND_ZONE_CHOSEN
        return PendingState.COMPLETE


class PitchEntry:
    """Accumulates one pitch's choices and commits them to a ``SessionStore``."""

    def __init__(self, store: SessionStore) -> None:
        self._store = store
        self._pending = PendingSelection()

    @property
    def pending(self) -> PendingSelection:
        return self._pending

    @property
    def state(self) -> PendingState:
        return self._pending.state

    def choose_pitch(self, pitch_type: PitchType | str) -> PendingState:
        self._pending = PendingSelection(pitch_type=parse_pitch_type(pitch_type), zone=self._pending.zone)
        return self.state

    def choose_zone(self, zone: int | str) -> PendingState:
        if self._pending.pitch_type is None:
            raise PreconditionError("Pick a pitch type first.")
        self._pending = PendingSelection(pitch_type=self._pending.pitch_type, zone=parse_zone(zone))
        return self.state

    def choose_result(self, result: PitchResult | str) -> PitchEvent:
        """Complete the selection and log it.

        If the store refuses the pitch the type and zone stay selected so the
        caller can fix the pitcher or batter and choose the result again.
        """
        pitch_type = self._pending.pitch_type
        zone = self._pending.zone
        if pitch_type is None or zone is None:
            raise PreconditionError("Pick pitch type, zone, and result first.")
        self._pending = PendingSelection(pitch_type=pitch_type, zone=zone, result=parse_result(result))
        try:
            event = self._store.log_pitch(pitch_type, zone, self._pending.result)
        except PersistenceError:
            # The pitch is in the log even though the write failed.
            self._pending = PendingSelection()
            raise
        except PitchTrackerError:
            self._pending = PendingSelection(pitch_type=pitch_type, zone=zone)
            raise
        self._pending = PendingSelection()
        logger.debug("Committed pending selection")
        return event

    def clear(self) -> None:
        self._pending = PendingSelection()

    def describe(self) -> str:
        if self._pending.state is PendingState.EMPTY:
            return "Ready"
        return (
            f"Pitch: {self._pending.pitch_type or '-'} • "
            f"Zone: {self._pending.zone or '-'} • "
            f"Result: {self._pending.result or '-'}"
        )
