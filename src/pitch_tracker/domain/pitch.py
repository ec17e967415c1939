from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from pitch_tracker.exceptions import ValidationError


class PitchType(StrEnum):
    FASTBALL = "FB"
    TWO_SEAM = "2S"
    CHANGEUP = "CH"
    SLIDER = "SL"
    CURVEBALL = "CB"
    CUTTER = "CUT"


class PitchResult(StrEnum):
    BALL = "Ball"
    CALLED_STRIKE = "CStr"
    SWINGING_STRIKE = "SwStr"
    FOUL = "Foul"
    IN_PLAY_OUT = "InPlay-Out"
    SINGLE = "1B"
    DOUBLE = "2B"
    TRIPLE = "3B"
    HOME_RUN = "HR"


# Every result except a ball counts toward strike rate, batted balls included.
STRIKE_RESULTS: frozenset[PitchResult] = frozenset(r for r in PitchResult if r is not PitchResult.BALL)

ZONES: range = range(1, 10)


def parse_pitch_type(value: str | PitchType) -> PitchType:
    try:
        return PitchType(value)
    except ValueError:
        choices = ", ".join(p.value for p in PitchType)
        raise ValidationError(f"Unknown pitch type '{value}' (expected one of {choices})") from None


def parse_result(value: str | PitchResult) -> PitchResult:
    try:
        return PitchResult(value)
    except ValueError:
        choices = ", ".join(r.value for r in PitchResult)
        raise ValidationError(f"Unknown pitch result '{value}' (expected one of {choices})") from None


def parse_zone(value: object) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"Zone must be an integer 1-9, got {value!r}")
    if isinstance(value, str):
        text = value.strip()
        if not text.isdigit():
            raise ValidationError(f"Zone must be an integer 1-9, got {value!r}")
        value = int(text)
    if not isinstance(value, int) or value not in ZONES:
        raise ValidationError(f"Zone must be an integer 1-9, got {value!r}")
    return value


@dataclass(frozen=True)
class PitchEvent:
    timestamp: int
    pitcher: str
    batter_id: str
    pitch_type: PitchType
    zone: int
    result: PitchResult

    def __post_init__(self) -> None:
        object.__setattr__(self, "pitch_type", parse_pitch_type(self.pitch_type))
        object.__setattr__(self, "result", parse_result(self.result))
        object.__setattr__(self, "zone", parse_zone(self.zone))
        if isinstance(self.timestamp, bool) or not isinstance(self.timestamp, int):
            raise ValidationError(f"Pitch timestamp must be integer milliseconds, got {self.timestamp!r}")
        if not isinstance(self.pitcher, str) or not self.pitcher.strip():
            raise ValidationError("Pitch event requires a pitcher name")
        if not isinstance(self.batter_id, str) or not self.batter_id:
            raise ValidationError("Pitch event requires a batter id")

    @property
    def is_strike(self) -> bool:
        return self.result in STRIKE_RESULTS

    @property
    def is_whiff(self) -> bool:
        return self.result is PitchResult.SWINGING_STRIKE
