"""The session store: owner of the single active scorekeeping session."""

from __future__ import annotations

import logging
import sqlite3
import time
import uuid
from dataclasses import replace
from typing import TYPE_CHECKING

from pitch_tracker.domain.game import Game
from pitch_tracker.domain.lineup import BatsHand, LineupEntry
from pitch_tracker.domain.pitch import PitchEvent, PitchResult, PitchType, parse_pitch_type, parse_result, parse_zone
from pitch_tracker.domain.session import Pitcher, SessionState
from pitch_tracker.exceptions import PersistenceError, PreconditionError, ValidationError
from pitch_tracker.storage.serialization import SessionSerializer

if TYPE_CHECKING:
    from collections.abc import Callable

    from pitch_tracker.storage.protocol import SessionStorage

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "pitch_tracker"
DEFAULT_KEY = "v1"


def _new_id() -> str:
    return uuid.uuid4().hex


def _parse_number(number: int | str) -> int:
    if isinstance(number, bool):
        raise ValidationError("Enter a jersey number.")
    if isinstance(number, str):
        text = number.strip()
        if not text.isdigit():
            raise ValidationError("Enter a jersey number.")
        number = int(text)
    if not isinstance(number, int) or number <= 0:
        raise ValidationError("Enter a jersey number.")
    return number


def _optional_text(value: str | None, label: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be text, got {value!r}")
    return value.strip()


class SessionStore:
    """Holds the session state and applies one mutation per user intent.

    Each mutation re-checks its preconditions against the current state, swaps
    in a new immutable ``SessionState`` and writes the whole snapshot to
    storage before returning. A failed write raises ``PersistenceError`` but
    the in-memory state keeps the change.
    """

    def __init__(
        self,
        storage: SessionStorage,
        state: SessionState | None = None,
        *,
        namespace: str = DEFAULT_NAMESPACE,
        key: str = DEFAULT_KEY,
        clock: Callable[[], float] = time.time,
        id_factory: Callable[[], str] = _new_id,
        serializer: SessionSerializer | None = None,
    ) -> None:
        self._storage = storage
        self._state = state if state is not None else SessionState()
        self._namespace = namespace
        self._key = key
        self._clock = clock
        self._id_factory = id_factory
        self._serializer = serializer or SessionSerializer()

    @classmethod
    def open(
        cls,
        storage: SessionStorage,
        *,
        namespace: str = DEFAULT_NAMESPACE,
        key: str = DEFAULT_KEY,
        clock: Callable[[], float] = time.time,
        id_factory: Callable[[], str] = _new_id,
    ) -> SessionStore:
        """Load the persisted session, or start from an empty one."""
        serializer = SessionSerializer()
        state = serializer.load(storage.get(namespace, key))
        logger.debug("Loaded session: %d batters, %d pitches", len(state.lineup), len(state.pitches))
        return cls(
            storage,
            state,
            namespace=namespace,
            key=key,
            clock=clock,
            id_factory=id_factory,
            serializer=serializer,
        )

    # -- Reads ---------------------------------------------------------------

    def snapshot(self) -> SessionState:
        return self._state

    def current_batter(self) -> LineupEntry | None:
        return self._state.current_batter

    def batter(self, batter_id: str | None) -> LineupEntry | None:
        return self._state.batter(batter_id)

    # -- Mutations -----------------------------------------------------------

    def start_game(self, opponent: str | None = "", field: str | None = "") -> Game:
        opponent_text = _optional_text(opponent, "Opponent")
        field_text = _optional_text(field, "Field")
        game = Game(
            id=self._id_factory(),
            opponent=opponent_text,
            field=field_text,
            created_at=self._now_ms(),
        )
        logger.info("Started game %s vs '%s'", game.id, game.opponent)
        self._apply(replace(self._state, game=game))
        return game

    def reset_all(self) -> None:
        logger.info("Resetting session")
        self._state = SessionState()
        try:
            self._storage.delete(self._namespace, self._key)
        except (sqlite3.Error, OSError) as e:
            logger.warning("Failed to clear stored session: %s", e)
            raise PersistenceError(f"Could not clear saved session: {e}", cause=e) from e
        self._persist()

    def add_batter(self, number: int | str, name: str, bats: BatsHand | str) -> LineupEntry:
        parsed_number = _parse_number(number)
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Enter a batter name.")
        entry = LineupEntry(
            id=self._id_factory(),
            number=parsed_number,
            name=name.strip(),
            bats=BatsHand.parse(bats),
        )
        active_batter_id = self._state.active_batter_id
        if self._state.current_batter is None:
            active_batter_id = entry.id
        logger.debug("Adding batter %s (%s)", entry.label, entry.id)
        self._apply(
            replace(
                self._state,
                lineup=(*self._state.lineup, entry),
                active_batter_id=active_batter_id,
            )
        )
        return entry

    def remove_batter(self, batter_id: str) -> None:
        lineup = tuple(b for b in self._state.lineup if b.id != batter_id)
        active_batter_id = self._state.active_batter_id
        if active_batter_id == batter_id:
            active_batter_id = None
        logger.debug("Removing batter %s", batter_id)
        self._apply(replace(self._state, lineup=lineup, active_batter_id=active_batter_id))

    def set_pitcher(self, name: str) -> Pitcher:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Enter pitcher name.")
        pitcher = Pitcher(name=name.strip())
        logger.debug("Setting pitcher %s", pitcher.name)
        self._apply(replace(self._state, pitcher=pitcher))
        return pitcher

    def set_active_batter(self, batter_id: str) -> LineupEntry:
        batter = self._state.batter(batter_id)
        if batter is None:
            raise ValidationError(f"No batter with id '{batter_id}' in the lineup.")
        logger.debug("Setting active batter %s", batter.label)
        self._apply(replace(self._state, active_batter_id=batter.id))
        return batter

    def log_pitch(self, pitch_type: PitchType | str, zone: int | str, result: PitchResult | str) -> PitchEvent:
        if self._state.pitcher is None:
            raise PreconditionError("Set a pitcher first.")
        batter = self._state.current_batter
        if batter is None:
            raise PreconditionError("Set a batter first.")
        event = PitchEvent(
            timestamp=self._now_ms(),
            pitcher=self._state.pitcher.name,
            batter_id=batter.id,
            pitch_type=parse_pitch_type(pitch_type),
            zone=parse_zone(zone),
            result=parse_result(result),
        )
        logger.debug("Logging pitch %s zone %d %s", event.pitch_type, event.zone, event.result)
        self._apply(replace(self._state, pitches=(*self._state.pitches, event)))
        return event

    def undo_last(self) -> PitchEvent | None:
        if not self._state.pitches:
            return None
        removed = self._state.pitches[-1]
        logger.debug("Undoing pitch %s zone %d %s", removed.pitch_type, removed.zone, removed.result)
        self._apply(replace(self._state, pitches=self._state.pitches[:-1]))
        return removed

    def close(self) -> None:
        """Write a final snapshot and release the storage."""
        try:
            self._persist()
        finally:
            self._storage.close()

    # -- Internals -----------------------------------------------------------

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _apply(self, state: SessionState) -> None:
        self._state = state
        self._persist()

    def _persist(self) -> None:
        blob = self._serializer.serialize(self._state)
        try:
            self._storage.put(self._namespace, self._key, blob)
        except (sqlite3.Error, OSError) as e:
            logger.warning("Failed to persist session: %s", e)
            raise PersistenceError(f"Could not save session: {e}", cause=e) from e
