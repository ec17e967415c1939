from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from pitch_tracker.exceptions import ValidationError


class BatsHand(StrEnum):
    LEFT = "Left"
    RIGHT = "Right"
    SWITCH = "Switch"

    @classmethod
    def parse(cls, value: str | BatsHand) -> BatsHand:
        """Accept the full name or its one-letter abbreviation, in any case."""
        if isinstance(value, BatsHand):
            return value
        text = str(value).strip().lower()
        for hand in cls:
            if text in (hand.value.lower(), hand.value[0].lower()):
                return hand
        raise ValidationError(f"Unknown batting hand '{value}'")


@dataclass(frozen=True)
class LineupEntry:
    id: str
    number: int
    name: str
    bats: BatsHand

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id:
            raise ValidationError(f"Batter id must be a non-empty string, got {self.id!r}")
        if isinstance(self.number, bool) or not isinstance(self.number, int) or self.number <= 0:
            raise ValidationError(f"Jersey number must be a positive integer, got {self.number!r}")
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError("Batter name must not be empty")
        if not isinstance(self.bats, BatsHand):
            object.__setattr__(self, "bats", BatsHand.parse(self.bats))

    @property
    def label(self) -> str:
        return f"#{self.number} {self.name}"
