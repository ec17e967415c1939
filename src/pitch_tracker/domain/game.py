from dataclasses import dataclass

from pitch_tracker.exceptions import ValidationError


@dataclass(frozen=True)
class Game:
    id: str
    opponent: str
    field: str
    created_at: int

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id:
            raise ValidationError(f"Game id must be a non-empty string, got {self.id!r}")
        if not isinstance(self.opponent, str) or not isinstance(self.field, str):
            raise ValidationError("Game opponent and field must be strings")
        if isinstance(self.created_at, bool) or not isinstance(self.created_at, int):
            raise ValidationError(f"Game creation time must be integer milliseconds, got {self.created_at!r}")
