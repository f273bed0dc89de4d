"""
蒙特卡洛胜率与缓存单元测试
"""

import random

import pytest

from holdem.ai.equity import EquityCache, EquityCalculator, EquityResult, make_key
from holdem.ai.types import EquityConfig
from holdem.core.deck import parse_cards
from holdem.tests.anti_cheat.core_usage_checker import CoreUsageChecker


def calculator(seed=11, **config):
    return EquityCalculator(EquityConfig(**config), rng=random.Random(seed))


@pytest.mark.unit
class TestEquityCalculator:

    def test_pocket_aces_heads_up(self):
        calc = calculator()
        CoreUsageChecker.verify_real_objects(calc, "EquityCalculator")
        equity = calc.calculate_equity(parse_cards("AH AS"), [], 1, iterations=1000)
        assert 0.8 <= equity <= 0.9

    def test_no_opponents_is_certain(self):
        assert calculator().calculate_equity(parse_cards("7H 2C"), [], 0) == 1.0

    def test_royal_board_splits_evenly(self):
        board = parse_cards("AH KH QH JH 10H")
        calc = calculator()
        assert calc.calculate_equity(parse_cards("2C 3D"), board, 1, iterations=50) == pytest.approx(0.5)
        assert calc.calculate_equity(parse_cards("2C 3D"), board, 2, iterations=50) == pytest.approx(1 / 3)

    def test_nut_hand_always_wins(self):
        equity = calculator().calculate_equity(parse_cards("AH KH"), parse_cards("QH JH 10H 2C 3D"), 3,
                                               iterations=100)
        assert equity == 1.0

    def test_more_opponents_lower_equity(self):
        hole = parse_cards("AH KD")
        heads_up = calculator(seed=3).calculate_equity(hole, [], 1, iterations=800)
        multiway = calculator(seed=3).calculate_equity(hole, [], 4, iterations=800)
        assert multiway < heads_up

    def test_made_straight_gains_equity_as_cards_fall(self):
        # 9高顺子是坚果，但翻牌面还有同花和更大顺子的听牌
        hole = parse_cards("9C 8C")
        board = parse_cards("7H 6H 5D 2C KS")
        flop, turn, river = (calculator(seed=21).calculate_equity(hole, board[:count], 2, iterations=3000)
                             for count in (3, 4, 5))
        assert flop < turn < river
        assert river > 0.95

    def test_seeded_results_are_reproducible(self):
        hole, board = parse_cards("9S 8S"), parse_cards("7S 2D KC")
        first = calculator(seed=5).calculate_equity(hole, board, 2, iterations=300)
        second = calculator(seed=5).calculate_equity(hole, board, 2, iterations=300)
        assert first == second

    def test_parallel_simulation_is_reproducible(self):
        hole = parse_cards("QH QD")
        first = calculator(seed=8, workers=4, parallel_threshold=100).simulate(hole, [], 1, 401)
        second = calculator(seed=8, workers=4, parallel_threshold=100).simulate(hole, [], 1, 401)
        assert first.iterations == 401
        assert first == second
        assert first.wins + first.ties + first.losses == 401

    @pytest.mark.parametrize("hole, board, opponents, iterations", [
        ("AH", "", 1, 100),
        ("AH KH", "2C 3C 4C 5C 6C 7C", 1, 100),
        ("AH KH", "AH 3C 4C", 1, 100),
        ("AH KH", "", -1, 100),
        ("AH KH", "", 1, 0),
        ("AH KH", "", 24, 100),
    ])
    def test_invalid_input(self, hole, board, opponents, iterations):
        with pytest.raises(ValueError):
            calculator().calculate_equity(parse_cards(hole), parse_cards(board), opponents, iterations)


@pytest.mark.unit
class TestIterationStrategy:

    def test_street_based_counts(self):
        calc = calculator()
        assert calc.choose_iterations(parse_cards("AH KD"), [], 1) == 500
        assert calc.choose_iterations(parse_cards("AH KD"), parse_cards("2C 7D 9H JS 3S"), 1) == 200

    def test_draws_get_more_iterations(self):
        calc = calculator()
        assert calc.choose_iterations(parse_cards("8H 9H"), parse_cards("7H 6H 2C"), 1) == 1000

    def test_clear_favourite_uses_default(self):
        calc = calculator()
        assert calc.choose_iterations(parse_cards("AH AD"), parse_cards("AC AS 2D"), 1) == 500

    def test_counts_are_clamped(self):
        calc = calculator(river_iterations=20, min_iterations=50)
        assert calc.choose_iterations(parse_cards("AH KD"), parse_cards("2C 7D 9H JS 3S"), 1) == 50


@pytest.mark.unit
class TestEquityCache:

    def test_key_ignores_card_order(self):
        assert make_key(parse_cards("AH KD"), parse_cards("2C 3C 4C"), 2) == \
            make_key(parse_cards("KD AH"), parse_cards("4C 2C 3C"), 2)

    def test_cache_hit_skips_simulation(self):
        cache = EquityCache()
        calc = EquityCalculator(rng=random.Random(1), cache=cache)
        cache.begin_hand("table-1:1")
        first = calc.calculate_equity(parse_cards("AH KD"), parse_cards("2C 7D 9H"), 1, iterations=100)
        second = calc.calculate_equity(parse_cards("KD AH"), parse_cards("9H 7D 2C"), 1, iterations=100)
        assert first == second
        assert (cache.hits, cache.misses) == (1, 1)
        assert len(cache) == 1

    def test_new_hand_clears_entries(self):
        cache = EquityCache()
        cache.begin_hand("h1")
        cache.put(make_key(parse_cards("AH KD"), [], 1), 0.6)
        cache.begin_hand("h1")
        assert len(cache) == 1
        cache.begin_hand("h2")
        assert len(cache) == 0
        assert cache.hand_key == "h2"

    def test_clear_resets_counters(self):
        cache = EquityCache()
        cache.get(make_key(parse_cards("AH KD"), [], 1))
        cache.clear()
        assert cache.misses == 0
        assert cache.hand_key is None


@pytest.mark.unit
class TestEquityResult:

    def test_equity_and_merge(self):
        merged = EquityResult(wins=3, iterations=4, losses=1).merge(
            EquityResult(ties=2, tie_credit=1.0, iterations=2))
        assert merged.iterations == 6
        assert merged.equity == pytest.approx(4 / 6)
        assert EquityResult().equity == 0.0
