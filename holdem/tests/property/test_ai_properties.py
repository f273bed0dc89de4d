"""
Property-based Tests for AI - AI属性测试

- 胜率始终落在[0, 1]
- 任意参数组合的AI给出的行动都能被引擎接受
"""

import random

import pytest
from hypothesis import given, settings, strategies as st

from holdem.ai.decision_engine import DecisionEngine
from holdem.ai.equity import EquityCalculator
from holdem.ai.opponent import OpponentModelStore, OpponentStats
from holdem.ai.types import EquityConfig
from holdem.core.deck import full_deck
from holdem.core.engine import PokerEngine
from holdem.core.player import AIProfile, Player
from holdem.core.rules import TURBO, TableRules

DECK = full_deck()
FAST = EquityConfig(default_iterations=40, preflop_iterations=40, river_iterations=40,
                    draw_iterations=40, min_iterations=20)

unit = st.floats(min_value=0.0, max_value=1.0, allow_nan=False)

profiles = st.builds(
    AIProfile,
    profile_id=st.just("fuzz"),
    name=st.just("模糊"),
    tightness=unit,
    aggression=unit,
    bluff_freq=unit,
    fold_to_3bet=unit,
    cbet_freq=unit,
    cbet_turn_freq=unit,
    position_awareness=unit,
    tilt_sensitivity=unit,
    call_down_tendency=unit,
    risk_tolerance=unit,
    bluff_detection=unit,
    deep_stack_threshold=st.floats(min_value=10, max_value=400),
    use_gto_strategy=st.booleans(),
    difficulty=st.integers(min_value=1, max_value=4),
)


@pytest.mark.property_test
@settings(max_examples=30, deadline=None)
@given(
    st.permutations(range(52)),
    st.sampled_from([0, 3, 4, 5]),
    st.integers(min_value=1, max_value=5),
    st.integers(min_value=0, max_value=1000),
)
def test_equity_within_bounds(order, board_size, opponents, seed):
    cards = [DECK[i] for i in order]
    calculator = EquityCalculator(FAST, random.Random(seed))
    equity = calculator.calculate_equity(cards[:2], cards[2:2 + board_size], opponents)
    assert 0.0 <= equity <= 1.0


@pytest.mark.property_test
@settings(max_examples=25, deadline=None)
@given(
    st.lists(profiles, min_size=2, max_size=5),
    st.lists(st.floats(min_value=0.0, max_value=1.0), min_size=5, max_size=5),
    st.integers(min_value=0, max_value=10_000),
    st.booleans(),
)
def test_decisions_always_accepted(seat_profiles, tilts, seed, tournament):
    players = [
        Player(f"p{i}", f"p{i}", 200 + 150 * i, ai_profile=profile, tilt=tilts[i])
        for i, profile in enumerate(seat_profiles)
    ]
    engine = PokerEngine(players, TableRules(), TURBO if tournament else None, rng=random.Random(seed))
    store = OpponentModelStore()
    for player in players:
        store.update(player.player_id, OpponentStats(hands=40, vpip_count=12, pfr_count=8,
                                                     aggressive_actions=15, passive_calls=5))
    ai = DecisionEngine(EquityCalculator(FAST, random.Random(seed)), store, rng=random.Random(seed + 1))
    initial = sum(p.chips for p in players)

    for _ in range(2):
        if not engine.start_hand():
            break
        while not engine.is_hand_over:
            player = engine.current_player
            decision = ai.decide_action(engine.snapshot(player.player_id), player.player_id)
            outcome = engine.process_action(decision.to_action(), player.player_id)
            assert outcome, f"{decision} -> {outcome.error_message}"
        assert sum(p.chips for p in engine.players) == initial
