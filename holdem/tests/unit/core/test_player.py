"""
Player与AIProfile单元测试.
"""

import pytest

from holdem.core.player import AIProfile, Player, PlayerStatus


@pytest.mark.unit
class TestPlayer:

    def test_commit_moves_chips_to_bets(self):
        player = Player("p0", "甲", 100)
        assert player.commit(30) == 30
        assert (player.chips, player.current_bet, player.total_bet_this_hand) == (70, 30, 30)
        assert player.is_active

    def test_commit_everything_goes_all_in(self):
        player = Player("p0", "甲", 50)
        player.commit(50)
        assert player.is_all_in
        assert player.in_hand

    def test_commit_rejects_bad_amounts(self):
        player = Player("p0", "甲", 50)
        with pytest.raises(ValueError):
            player.commit(-1)
        with pytest.raises(ValueError):
            player.commit(51)

    def test_constructor_validation(self):
        with pytest.raises(ValueError):
            Player("", "甲", 10)
        with pytest.raises(ValueError):
            Player("p0", "甲", -10)

    def test_reset_for_new_hand(self):
        player = Player("p0", "甲", 0, status=PlayerStatus.ALL_IN, current_bet=10)
        player.reset_for_new_hand()
        assert player.status == PlayerStatus.ELIMINATED
        assert player.current_bet == 0

        sitting = Player("p1", "乙", 100, status=PlayerStatus.SITTING_OUT)
        sitting.reset_for_new_hand()
        assert sitting.status == PlayerStatus.SITTING_OUT

    def test_tilt_rises_after_loss_and_decays(self):
        player = Player("p0", "甲", 100, ai_profile=AIProfile(tilt_sensitivity=0.5))
        assert player.update_tilt(True, 800) == pytest.approx(0.5)
        assert player.update_tilt(True, 8000) == 1.0
        assert player.update_tilt(False, 0) == pytest.approx(1.0 - 0.03 * 0.75)

    def test_human_has_no_tilt(self):
        player = Player("p0", "甲", 100, is_human=True)
        assert player.update_tilt(True, 10000) == 0.0
        assert player.effective_profile is None

    def test_effective_profile_applies_tilt(self):
        player = Player("p0", "甲", 100, ai_profile=AIProfile(), tilt=0.5)
        effective = player.effective_profile
        assert effective.tightness == pytest.approx(0.55 - 0.2)
        assert effective.aggression == pytest.approx(0.68 + 0.15)


@pytest.mark.unit
class TestAIProfile:

    def test_parameters_are_validated(self):
        with pytest.raises(ValueError):
            AIProfile(tightness=1.2)
        with pytest.raises(ValueError):
            AIProfile(difficulty=5)
        with pytest.raises(ValueError):
            AIProfile(deep_stack_threshold=0)

    def test_apply_tilt(self):
        profile = AIProfile()
        assert profile.apply_tilt(0.0) is profile
        tilted = profile.apply_tilt(0.5)
        assert tilted.tightness == pytest.approx(0.35)
        assert tilted.aggression == pytest.approx(0.83)
        assert tilted.bluff_freq == pytest.approx(0.345)
        assert tilted.call_down_tendency == pytest.approx(0.40)
        assert profile.tightness == 0.55

    def test_apply_tilt_is_clamped(self):
        tilted = AIProfile(tightness=0.1, aggression=0.95, bluff_freq=0.7).apply_tilt(1.0)
        assert tilted.tightness == pytest.approx(0.05)
        assert tilted.aggression == 1.0
        assert tilted.bluff_freq == pytest.approx(0.8)

    def test_preflop_threshold(self):
        profile = AIProfile()
        assert profile.preflop_threshold(0) == pytest.approx(0.7 - 0.20 * 0.80 * 0.55)
        assert profile.preflop_threshold(3) == pytest.approx(0.7 + 0.18 * 0.80 * 0.55)

    def test_low_position_awareness_ignores_position(self):
        profile = AIProfile(position_awareness=0.1)
        assert profile.position_adjustment(0) == 0.0
        assert profile.preflop_threshold(7) == pytest.approx(0.7)

    def test_to_dict(self):
        data = AIProfile().to_dict()
        assert data['profile_id'] == "fox"
        assert data['difficulty'] == 3
