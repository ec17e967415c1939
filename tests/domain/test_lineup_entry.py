import pytest

from pitch_tracker.domain.lineup import BatsHand, LineupEntry
from pitch_tracker.exceptions import ValidationError


class TestBatsHand:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Right", BatsHand.RIGHT),
            ("left", BatsHand.LEFT),
            ("S", BatsHand.SWITCH),
            (" r ", BatsHand.RIGHT),
            (BatsHand.LEFT, BatsHand.LEFT),
        ],
    )
    def test_parse(self, raw: str, expected: BatsHand) -> None:
        assert BatsHand.parse(raw) is expected

    def test_parse_unknown(self) -> None:
        with pytest.raises(ValidationError, match="Unknown batting hand"):
            BatsHand.parse("Both")


class TestLineupEntry:
    def test_label(self) -> None:
        entry = LineupEntry(id="b1", number=7, name="Smith", bats=BatsHand.RIGHT)
        assert entry.label == "#7 Smith"

    def test_coerces_bats_string(self) -> None:
        entry = LineupEntry(id="b1", number=7, name="Smith", bats="L")  # type: ignore[arg-type]
        assert entry.bats is BatsHand.LEFT

    @pytest.mark.parametrize("number", [0, -3, True])
    def test_rejects_non_positive_number(self, number: int) -> None:
        with pytest.raises(ValidationError):
            LineupEntry(id="b1", number=number, name="Smith", bats=BatsHand.RIGHT)

    def test_rejects_blank_name(self) -> None:
        with pytest.raises(ValidationError):
            LineupEntry(id="b1", number=7, name="   ", bats=BatsHand.RIGHT)

    @pytest.mark.parametrize("number", [7.9, "7", None])
    def test_rejects_non_integer_number(self, number: object) -> None:
        with pytest.raises(ValidationError):
            LineupEntry(id="b1", number=number, name="Smith", bats=BatsHand.RIGHT)  # type: ignore[arg-type]

    def test_rejects_missing_name(self) -> None:
        with pytest.raises(ValidationError):
            LineupEntry(id="b1", number=7, name=None, bats=BatsHand.RIGHT)  # type: ignore[arg-type]

    @pytest.mark.parametrize("batter_id", ["", None, 3])
    def test_rejects_bad_id(self, batter_id: object) -> None:
        with pytest.raises(ValidationError):
            LineupEntry(id=batter_id, number=7, name="Smith", bats=BatsHand.RIGHT)  # type: ignore[arg-type]

    def test_is_frozen(self) -> None:
        entry = LineupEntry(id="b1", number=7, name="Smith", bats=BatsHand.RIGHT)
        with pytest.raises(AttributeError):
            entry.name = "Jones"  # type: ignore[misc]
