from dataclasses import dataclass

from pitch_tracker.domain.game import Game
from pitch_tracker.domain.lineup import LineupEntry
from pitch_tracker.domain.pitch import PitchEvent
from pitch_tracker.exceptions import ValidationError


@dataclass(frozen=True)
class Pitcher:
    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError(f"Pitcher name must be a non-empty string, got {self.name!r}")


@dataclass(frozen=True)
class SessionState:
    """Everything persisted for the active session.

    The default instance is the empty session: no game, empty lineup, no
    pitcher, no active batter and an empty pitch log.
    """

    game: Game | None = None
    lineup: tuple[LineupEntry, ...] = ()
    pitcher: Pitcher | None = None
    active_batter_id: str | None = None
    pitches: tuple[PitchEvent, ...] = ()

    def batter(self, batter_id: str | None) -> LineupEntry | None:
        if batter_id is None:
            return None
        return next((b for b in self.lineup if b.id == batter_id), None)

    @property
    def current_batter(self) -> LineupEntry | None:
        # A dangling reference reads as no active batter.
        return self.batter(self.active_batter_id)

    def lineup_by_number(self) -> list[LineupEntry]:
        return sorted(self.lineup, key=lambda b: b.number)
