"""
RandomAI单元测试
"""

import random

import pytest

from holdem.ai.Dummy import RandomAI
from holdem.ai.types import AIDecisionType, RandomAIConfig
from holdem.core.rules import TableRules
from holdem.tests.anti_cheat.core_usage_checker import CoreUsageChecker


@pytest.mark.unit
class TestRandomAI:

    def test_decisions_are_always_legal(self, make_engine):
        engine = make_engine()
        engine.start_hand()
        snapshot = engine.snapshot("p0")
        legal = snapshot.legal_actions
        allowed = {t.name for t in legal.available_types()}

        for seed in range(50):
            ai = RandomAI(rng=random.Random(seed))
            CoreUsageChecker.verify_real_objects(ai, "RandomAI")
            decision = ai.decide_action(snapshot, "p0")
            assert decision.decision_type.name in allowed
            if decision.decision_type == AIDecisionType.RAISE:
                assert legal.min_raise_to <= decision.amount <= legal.max_raise_to

    def test_never_folds_when_check_is_free(self, make_engine):
        engine = make_engine(rules=TableRules(small_blind=0, big_blind=0))
        engine.start_hand()
        snapshot = engine.snapshot("p0")
        assert snapshot.legal_actions.can_check
        for seed in range(30):
            decision = RandomAI(rng=random.Random(seed)).decide_action(snapshot, "p0")
            assert decision.decision_type != AIDecisionType.FOLD

    def test_folds_when_not_its_turn(self, make_engine):
        engine = make_engine()
        engine.start_hand()
        decision = RandomAI(RandomAIConfig(seed=1)).decide_action(engine.snapshot("p1"), "p1")
        assert decision.decision_type == AIDecisionType.FOLD

    def test_all_in_probability(self, make_engine):
        engine = make_engine()
        engine.start_hand()
        ai = RandomAI(RandomAIConfig(all_in_probability=1.0), rng=random.Random(3))
        assert ai.decide_action(engine.snapshot("p0"), "p0").decision_type == AIDecisionType.ALL_IN

    def test_decision_executes_on_engine(self, make_engine):
        engine = make_engine()
        engine.start_hand()
        decision = RandomAI(rng=random.Random(4)).decide_action(engine.snapshot("p0"), "p0")
        assert engine.process_action(decision.to_action(), "p0")

    def test_strategy_name(self):
        assert RandomAI().get_strategy_name() == "RandomAI"

    @pytest.mark.parametrize("kwargs", [
        {"min_bet_ratio": 0.0},
        {"max_bet_ratio": 6.0},
        {"min_bet_ratio": 0.8, "max_bet_ratio": 0.5},
        {"all_in_probability": 1.5},
    ])
    def test_invalid_config(self, kwargs):
        with pytest.raises(ValueError):
            RandomAIConfig(**kwargs)
