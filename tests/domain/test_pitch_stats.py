import math

import pytest

from pitch_tracker.domain.pitch import PitchEvent, PitchResult, PitchType
from pitch_tracker.domain.pitch_stats import (
    PitchSummary,
    format_rate,
    pitch_type_breakdown,
    recent_events,
    strike_rate,
    summarize,
    total_pitches,
    whiff_rate,
)


def _pitch(pitch_type: str, result: str, t: int = 0) -> PitchEvent:
    return PitchEvent(timestamp=t, pitcher="Lopez", batter_id="b1", pitch_type=pitch_type, zone=5, result=result)  # type: ignore[arg-type]


@pytest.fixture
def sample() -> list[PitchEvent]:
    return [_pitch("FB", "Ball", 1), _pitch("FB", "SwStr", 2), _pitch("CH", "1B", 3)]


class TestAggregates:
    def test_total(self, sample: list[PitchEvent]) -> None:
        assert total_pitches(sample) == 3

    def test_strike_rate(self, sample: list[PitchEvent]) -> None:
        rate = strike_rate(sample)
        assert rate is not None
        assert math.isclose(rate, 2 / 3)

    def test_whiff_rate(self, sample: list[PitchEvent]) -> None:
        rate = whiff_rate(sample)
        assert rate is not None
        assert math.isclose(rate, 1 / 3)

    def test_empty_rates_are_not_available(self) -> None:
        assert total_pitches([]) == 0
        assert strike_rate([]) is None
        assert whiff_rate([]) is None

    def test_every_contact_result_counts_as_strike(self) -> None:
        events = [_pitch("SL", r.value) for r in PitchResult if r is not PitchResult.BALL]
        assert strike_rate(events) == 1.0

    def test_summarize(self, sample: list[PitchEvent]) -> None:
        summary = summarize(sample)
        assert summary == PitchSummary(total=3, strikes=2, whiffs=1)
        assert summary.strike_rate is not None
        assert math.isclose(summary.strike_rate, 2 / 3)

    def test_summarize_empty(self) -> None:
        summary = summarize([])
        assert summary.total == 0
        assert summary.strike_rate is None
        assert summary.whiff_rate is None


class TestPitchTypeBreakdown:
    def test_rows(self, sample: list[PitchEvent]) -> None:
        rows = {line.pitch_type: line for line in pitch_type_breakdown(sample)}
        assert set(rows) == {PitchType.FASTBALL, PitchType.CHANGEUP}

        fb = rows[PitchType.FASTBALL]
        assert fb.total == 2
        assert fb.strike_rate == 0.5
        assert fb.whiff_rate == 0.5

        ch = rows[PitchType.CHANGEUP]
        assert ch.total == 1
        assert ch.strike_rate == 1.0
        assert ch.whiff_rate == 0.0

    def test_empty_log(self) -> None:
        assert pitch_type_breakdown([]) == ()

    def test_canonical_order(self) -> None:
        events = [_pitch("CUT", "Ball"), _pitch("CB", "Foul"), _pitch("FB", "CStr")]
        assert [line.pitch_type.value for line in pitch_type_breakdown(events)] == ["FB", "CB", "CUT"]


class TestRecentEvents:
    def test_most_recent_first(self, sample: list[PitchEvent]) -> None:
        assert [e.timestamp for e in recent_events(sample, 2)] == [3, 2]

    def test_n_larger_than_log(self, sample: list[PitchEvent]) -> None:
        view = recent_events(sample, 12)
        assert len(view) == 3
        assert [e.timestamp for e in view] == [3, 2, 1]

    def test_restartable(self, sample: list[PitchEvent]) -> None:
        view = recent_events(sample, 3)
        assert list(view) == list(view)

    def test_does_not_mutate_log(self, sample: list[PitchEvent]) -> None:
        before = list(sample)
        list(recent_events(sample, 3))
        assert sample == before

    @pytest.mark.parametrize("n", [0, -1])
    def test_non_positive_n_is_empty(self, sample: list[PitchEvent], n: int) -> None:
        view = recent_events(sample, n)
        assert not view
        assert list(view) == []

    def test_empty_log(self) -> None:
        assert list(recent_events([], 5)) == []


class TestFormatRate:
    @pytest.mark.parametrize(
        ("rate", "expected"),
        [(None, "N/A"), (0.0, "0%"), (2 / 3, "67%"), (0.5, "50%"), (0.125, "13%"), (1.0, "100%")],
    )
    def test_format(self, rate: float | None, expected: str) -> None:
        assert format_rate(rate) == expected
