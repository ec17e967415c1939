"""JSON serialization of the session snapshot.

The stored layout keeps the field names of the original browser app so a
blob exported from it can be read back. That app kept the active batter
under ``batterId``, which is accepted when ``activeBatterId`` is absent:

    {"game": {...} | null, "lineup": [...], "pitcher": {"name": ...} | null,
     "activeBatterId": "..." | null, "pitches": [...]}

Reads are forgiving: missing top-level keys take their defaults, a pitcher
with a blank name reads as no pitcher, and a blob that cannot be parsed or
validated is replaced by an empty session. Stored values are handed to the
record constructors as-is so their validation applies.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pitch_tracker.domain.game import Game
from pitch_tracker.domain.lineup import BatsHand, LineupEntry
from pitch_tracker.domain.pitch import PitchEvent
from pitch_tracker.domain.session import Pitcher, SessionState
from pitch_tracker.exceptions import PitchTrackerError

logger = logging.getLogger(__name__)


class SessionSerializer:
    """Serializer for ``SessionState`` snapshots."""

    def serialize(self, value: SessionState) -> str:
        return json.dumps(
            {
                "game": _game_to_dict(value.game) if value.game is not None else None,
                "lineup": [_batter_to_dict(b) for b in value.lineup],
                "pitcher": {"name": value.pitcher.name} if value.pitcher is not None else None,
                "activeBatterId": value.active_batter_id,
                "pitches": [_pitch_to_dict(p) for p in value.pitches],
            }
        )

    def deserialize(self, data: str) -> SessionState:
        """Parse a stored blob, filling missing top-level keys from defaults.

        Raises ``ValueError``, ``TypeError``, ``KeyError`` or a
        ``PitchTrackerError`` when the blob is malformed.
        """
        raw = json.loads(data)
        if not isinstance(raw, dict):
            raise TypeError(f"Session blob must be a JSON object, got {type(raw).__name__}")

        game = raw.get("game")
        pitcher = raw.get("pitcher")
        active_batter_id = raw.get("activeBatterId", raw.get("batterId"))
        if active_batter_id is not None and not isinstance(active_batter_id, str):
            raise TypeError("activeBatterId must be a string or null")

        return SessionState(
            game=_game_from_dict(game) if game is not None else None,
            lineup=tuple(_batter_from_dict(b) for b in raw.get("lineup") or ()),
            pitcher=_pitcher_from_dict(pitcher) if pitcher is not None else None,
            active_batter_id=active_batter_id or None,
            pitches=tuple(_pitch_from_dict(p) for p in raw.get("pitches") or ()),
        )

    def load(self, data: str | None) -> SessionState:
        """Deserialize ``data``, falling back to an empty session."""
        if data is None:
            return SessionState()
        try:
            return self.deserialize(data)
        except (ValueError, TypeError, KeyError, AttributeError, RecursionError, PitchTrackerError) as e:
            logger.warning("Discarding unreadable session data: %s", e)
            return SessionState()


def _game_to_dict(game: Game) -> dict[str, Any]:
    return {"id": game.id, "opponent": game.opponent, "field": game.field, "createdAt": game.created_at}


def _game_from_dict(data: dict[str, Any]) -> Game:
    return Game(
        id=data["id"],
        opponent=data.get("opponent") or "",
        field=data.get("field") or "",
        created_at=data["createdAt"],
    )


def _pitcher_from_dict(data: dict[str, Any]) -> Pitcher | None:
    name = data.get("name")
    if name is None or (isinstance(name, str) and not name.strip()):
        return None
    return Pitcher(name=name)


def _batter_to_dict(batter: LineupEntry) -> dict[str, Any]:
    return {"id": batter.id, "num": batter.number, "name": batter.name, "bats": batter.bats.value}


def _batter_from_dict(data: dict[str, Any]) -> LineupEntry:
    return LineupEntry(
        id=data["id"],
        number=data["num"],
        name=data["name"],
        bats=BatsHand.parse(data["bats"]),
    )


def _pitch_to_dict(pitch: PitchEvent) -> dict[str, Any]:
    return {
        "t": pitch.timestamp,
        "pitcher": pitch.pitcher,
        "batterId": pitch.batter_id,
        "pitch": pitch.pitch_type.value,
        "zone": pitch.zone,
        "result": pitch.result.value,
    }


def _pitch_from_dict(data: dict[str, Any]) -> PitchEvent:
    return PitchEvent(
        timestamp=data["t"],
        pitcher=data["pitcher"],
        batter_id=data["batterId"],
        pitch_type=data["pitch"],
        zone=data["zone"],
        result=data["result"],
    )
