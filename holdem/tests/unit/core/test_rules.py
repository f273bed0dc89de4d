"""
牌桌规则与锦标赛配置单元测试
"""

import pytest

from holdem.core.rules import (
    DEEP_STACK, STANDARD, TOURNAMENT_PRESETS, TURBO, BlindLevel, TableRules, TournamentConfig,
)


@pytest.mark.unit
class TestTableRules:

    def test_defaults(self):
        rules = TableRules()
        assert (rules.small_blind, rules.big_blind, rules.ante) == (10, 20, 0)
        assert rules.strict_invariants

    def test_big_blind_not_below_small_blind(self):
        with pytest.raises(ValueError):
            TableRules(small_blind=20, big_blind=10)

    def test_player_range(self):
        with pytest.raises(ValueError):
            TableRules(min_players=6, max_players=4)
        with pytest.raises(ValueError):
            TableRules(max_players=11)

    def test_rules_are_frozen(self):
        rules = TableRules()
        with pytest.raises(Exception):
            rules.big_blind = 40


@pytest.mark.unit
class TestTournamentConfig:

    def test_blind_level_display(self):
        assert str(BlindLevel(level=1, small_blind=10, big_blind=20)) == "Level 1: 10/20"
        assert str(BlindLevel(level=3, small_blind=25, big_blind=50, ante=5)) == "Level 3: 25/50 ante 5"

    def test_payouts_validated(self):
        levels = [BlindLevel(level=1, small_blind=10, big_blind=20)]
        with pytest.raises(ValueError):
            TournamentConfig(name="x", starting_chips=100, blind_schedule=levels,
                             hands_per_level=5, payout_structure=[0.7, 0.5])
        with pytest.raises(ValueError):
            TournamentConfig(name="x", starting_chips=100, blind_schedule=levels,
                             hands_per_level=5, payout_structure=[1.0, 0.0])

    def test_empty_schedule_rejected(self):
        with pytest.raises(ValueError):
            TournamentConfig(name="x", starting_chips=100, blind_schedule=[], hands_per_level=5)

    def test_level_at_stays_on_last_level(self):
        assert TURBO.level_at(0).big_blind == 20
        assert TURBO.level_at(99) == TURBO.blind_schedule[-1]

    def test_to_table_rules_uses_first_level(self):
        rules = DEEP_STACK.to_table_rules(TableRules(max_players=6))
        assert (rules.small_blind, rules.big_blind) == (10, 20)
        assert rules.starting_chips == 2000
        assert rules.max_players == 6

    def test_presets(self):
        assert TOURNAMENT_PRESETS['standard'] is STANDARD
        assert [c.hands_per_level for c in (TURBO, STANDARD, DEEP_STACK)] == [5, 10, 15]
        assert STANDARD.paid_places == 3
