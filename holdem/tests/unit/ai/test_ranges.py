"""
对手范围估计单元测试
"""

import pytest

from holdem.ai.analysis import (
    BoardTexture, HandRange, RangeAction, call_three_bet_range, estimate_range, narrow_range,
    open_chen_threshold, opening_range, three_bet_chen_threshold, three_bet_range,
)

DRY = BoardTexture(wetness=0.1)
WET = BoardTexture(wetness=0.8)


@pytest.mark.unit
class TestPositionRanges:

    @pytest.mark.parametrize("position, width", [
        ("UTG", 0.14), ("MP", 0.20), ("HJ", 0.25), ("CO", 0.30),
        ("BTN", 0.42), ("SB", 0.30), ("BB", 0.45), ("BTN/SB", 0.42),
    ])
    def test_opening_widths(self, position, width):
        hand_range = opening_range(position)
        assert hand_range.width == pytest.approx(width)
        assert hand_range.action == RangeAction.RAISE
        assert hand_range.position == position

    def test_unknown_position_opens_like_middle(self):
        assert opening_range("??").width == opening_range("MP").width

    def test_later_positions_need_less_to_open(self):
        thresholds = [open_chen_threshold(opening_range(p)) for p in ("UTG", "MP", "HJ", "CO", "BTN")]
        assert thresholds == sorted(thresholds, reverse=True)
        assert thresholds[0] == pytest.approx(7.2)
        assert thresholds[-1] == pytest.approx(1.6)

    def test_in_position_ranges_are_wider(self):
        assert three_bet_range("BTN", True).width > three_bet_range("BB", False).width
        assert call_three_bet_range("BTN", True).width > call_three_bet_range("BB", False).width
        assert three_bet_chen_threshold(three_bet_range("BTN", True)) == pytest.approx(7.2)
        assert three_bet_chen_threshold(three_bet_range("BB", False)) == pytest.approx(7.8)

    def test_calling_range_is_looser_than_three_bet_range(self):
        for in_position in (True, False):
            call = three_bet_chen_threshold(call_three_bet_range("CO", in_position))
            three_bet = three_bet_chen_threshold(three_bet_range("CO", in_position))
            assert call < three_bet


@pytest.mark.unit
class TestRangeEstimate:

    @pytest.mark.parametrize("position, width", [("UTG", 0.30), ("BTN", 0.70), ("SB", 0.55)])
    def test_open_raise_width_follows_position(self, position, width):
        hand_range = estimate_range(position, RangeAction.RAISE)
        assert hand_range.width == pytest.approx(width)
        assert position in hand_range.description

    def test_unknown_position_raise(self):
        assert estimate_range("??", RangeAction.RAISE).width == pytest.approx(0.20)

    @pytest.mark.parametrize("action, facing_raise, width", [
        (RangeAction.FOLD, False, 0.0),
        (RangeAction.CALL, True, 0.15),
        (RangeAction.CALL, False, 0.25),
        (RangeAction.THREE_BET, True, 0.15),
        (RangeAction.FOUR_BET, True, 0.05),
    ])
    def test_other_preflop_actions(self, action, facing_raise, width):
        assert estimate_range("CO", action, facing_raise).width == pytest.approx(width)

    def test_fold_is_empty(self):
        assert estimate_range("CO", RangeAction.FOLD).is_empty


@pytest.mark.unit
class TestRangeNarrowing:

    @pytest.mark.parametrize("action, board, factor", [
        (RangeAction.BET, WET, 0.85),
        (RangeAction.BET, DRY, 0.95),
        (RangeAction.CHECK, DRY, 0.70),
        (RangeAction.RAISE, WET, 0.50),
        (RangeAction.CALL, WET, 0.75),
    ])
    def test_factors(self, action, board, factor):
        start = HandRange("BTN", RangeAction.RAISE, 0.70, "BTN")
        narrowed = narrow_range(start, action, board)
        assert narrowed.width == pytest.approx(0.70 * factor)
        assert narrowed.action == action
        assert narrowed.description.startswith("BTN -> ")
        assert start.width == 0.70

    def test_fold_clears_range(self):
        narrowed = narrow_range(estimate_range("BTN", RangeAction.RAISE), RangeAction.FOLD, DRY)
        assert narrowed.is_empty
        assert narrowed.description == "已弃牌"

    def test_button_raise_stays_wide_but_early_raise_does_not(self):
        late = narrow_range(estimate_range("BTN", RangeAction.RAISE), RangeAction.RAISE, WET)
        early = narrow_range(estimate_range("UTG", RangeAction.RAISE), RangeAction.RAISE, WET)
        assert late.is_wide
        assert not early.is_wide
