"""
对手建模单元测试: 统计、风格分类、倾向剧本与模型存储
"""

import pytest

from holdem.ai.opponent import (
    STYLE_ADJUSTMENTS, OpponentModel, OpponentModelStore, OpponentStats, Playbook, classify_style,
    infer_playbooks, playbook_adjustment, strategy_adjustment,
)
from holdem.ai.types import PlayerStyle, StrategyAdjustment
from holdem.tests.anti_cheat.core_usage_checker import CoreUsageChecker


def model_of(hands=100, vpip=0, pfr=0, aggressive=0, passive=0, three_bet=0):
    return OpponentModel("villain", OpponentStats(hands, vpip, pfr, aggressive, passive, three_bet))


@pytest.mark.unit
class TestOpponentStats:

    def test_negative_counts_rejected(self):
        with pytest.raises(ValueError):
            OpponentStats(hands=-1)
        with pytest.raises(ValueError):
            OpponentStats(passive_calls=-3)


@pytest.mark.unit
class TestOpponentModel:

    def test_percentages_and_aggression(self):
        model = model_of(hands=40, vpip=10, pfr=8, aggressive=9, passive=3, three_bet=2)
        assert model.vpip == pytest.approx(25.0)
        assert model.pfr == pytest.approx(20.0)
        assert model.three_bet == pytest.approx(5.0)
        assert model.aggression_factor == pytest.approx(3.0)
        assert model.style == PlayerStyle.TAG

    def test_aggression_without_calls(self):
        assert model_of(aggressive=7).aggression_factor == 7.0

    def test_confidence_grows_with_hands(self):
        assert model_of(hands=10).confidence == pytest.approx(0.2)
        assert not model_of(hands=10).is_reliable
        assert model_of(hands=25).is_reliable
        assert model_of(hands=500).confidence == 1.0

    def test_small_sample_has_unknown_style(self):
        assert model_of(hands=10, vpip=9, pfr=1, passive=9).style == PlayerStyle.UNKNOWN

    def test_summary(self):
        assert OpponentModel("villain").summary() is None
        text = model_of(hands=40, vpip=10, pfr=8, aggressive=9, passive=3).summary()
        assert "VPIP 25%" in text
        assert "tag" in text


@pytest.mark.unit
class TestClassifier:

    @pytest.mark.parametrize("vpip, pfr, af, style", [
        (15, 10, 3.0, PlayerStyle.ROCK),
        (50, 10, 1.0, PlayerStyle.FISH),
        (35, 28, 3.5, PlayerStyle.LAG),
        (25, 20, 2.5, PlayerStyle.TAG),
        (0, 0, 1.0, PlayerStyle.UNKNOWN),
        (22, 5, 1.0, PlayerStyle.TAG),
        (42, 30, 1.0, PlayerStyle.FISH),
        (35, 10, 2.0, PlayerStyle.TAG),
    ])
    def test_style_table(self, vpip, pfr, af, style):
        assert classify_style(vpip, pfr, af) == style

    def test_adjustments(self):
        assert strategy_adjustment(PlayerStyle.ROCK).steal_freq_bonus == pytest.approx(0.30)
        assert strategy_adjustment(PlayerStyle.FISH).bluff_freq_adjust == pytest.approx(-0.70)
        assert strategy_adjustment(PlayerStyle.LAG).call_down_adjust == pytest.approx(0.20)
        assert STYLE_ADJUSTMENTS[PlayerStyle.TAG].is_neutral
        assert STYLE_ADJUSTMENTS[PlayerStyle.UNKNOWN].is_neutral


@pytest.mark.unit
class TestPlaybooks:

    def test_calling_station_is_also_loose(self):
        model = model_of(vpip=50, aggressive=10, passive=10)
        assert infer_playbooks(model) == [Playbook.CALLING_STATION, Playbook.LOOSE]
        assert playbook_adjustment(model) == StrategyAdjustment(call_down_adjust=0.2)

    def test_aggressive(self):
        model = model_of(vpip=40, aggressive=40, passive=10)
        assert infer_playbooks(model) == [Playbook.AGGRESSIVE]
        assert playbook_adjustment(model).value_size_adjust == pytest.approx(0.2)

    def test_tight_bluffer_adjustments_combine(self):
        model = model_of(vpip=15, three_bet=12, aggressive=30, passive=10)
        assert infer_playbooks(model) == [Playbook.TIGHT, Playbook.BLUFFY]
        assert playbook_adjustment(model).bluff_freq_adjust == pytest.approx(0.1)

    def test_standard(self):
        model = model_of(vpip=25, aggressive=20, passive=10)
        assert infer_playbooks(model) == [Playbook.STANDARD]
        assert playbook_adjustment(model).is_neutral


@pytest.mark.unit
class TestOpponentModelStore:

    def test_update_copies_stats(self):
        store = OpponentModelStore()
        stats = OpponentStats(hands=5, vpip_count=2)
        model = store.update("p1", stats)
        CoreUsageChecker.verify_real_objects(model, "OpponentModel")
        stats.hands = 99
        assert store.get("p1").stats.hands == 5
        assert store.update("p1", OpponentStats(hands=6)) is model
        assert model.stats.hands == 6

    def test_get_or_create_and_reset(self):
        store = OpponentModelStore()
        assert store.get("p2") is None
        created = store.get_or_create("p2")
        assert store.get_or_create("p2") is created
        assert "p2" in store and len(store) == 1
        store.reset()
        assert len(store) == 0
        assert "p2" not in store
