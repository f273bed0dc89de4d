"""
StatsRecorder单元测试
"""

import pytest

from holdem.ai.opponent import OpponentModelStore
from holdem.application.stats_recorder import StatsRecorder
from holdem.core.betting import PlayerAction


@pytest.fixture
def recorder(event_bus):
    store = OpponentModelStore()
    recorder = StatsRecorder(store)
    recorder.attach(event_bus)
    return recorder, store


@pytest.mark.unit
class TestStatsRecorder:

    def test_raise_and_three_bet_counts(self, make_engine, recorder):
        recorder, store = recorder
        engine = make_engine()
        engine.start_hand()
        assert engine.process_action(PlayerAction.raise_to(60), "p0")
        assert engine.process_action(PlayerAction.raise_to(180), "p1")
        assert engine.process_action(PlayerAction.call(), "p0")
        assert engine.process_action(PlayerAction.raise_to(100), "p1")
        assert engine.process_action(PlayerAction.fold(), "p0")
        assert engine.is_hand_over

        opener = store.get("p0").stats
        assert (opener.hands, opener.vpip_count, opener.pfr_count, opener.three_bet_count) == (1, 1, 1, 0)
        assert (opener.aggressive_actions, opener.passive_calls) == (1, 1)

        three_bettor = store.get("p1").stats
        assert (three_bettor.vpip_count, three_bettor.pfr_count, three_bettor.three_bet_count) == (1, 1, 1)
        assert (three_bettor.aggressive_actions, three_bettor.passive_calls) == (2, 0)

    def test_limp_and_check_are_not_raises(self, make_engine, recorder):
        recorder, store = recorder
        engine = make_engine()
        engine.start_hand()
        engine.process_action(PlayerAction.call(), "p0")
        engine.process_action(PlayerAction.check(), "p1")
        engine.process_action(PlayerAction.raise_to(20), "p1")
        engine.process_action(PlayerAction.fold(), "p0")

        limper = store.get("p0").stats
        assert (limper.vpip_count, limper.pfr_count, limper.passive_calls) == (1, 0, 1)
        big_blind = store.get("p1").stats
        assert (big_blind.vpip_count, big_blind.pfr_count, big_blind.aggressive_actions) == (0, 0, 1)

    def test_store_updates_only_at_hand_end(self, make_engine, recorder):
        recorder, store = recorder
        engine = make_engine()
        engine.start_hand()
        engine.process_action(PlayerAction.raise_to(60), "p0")
        assert store.get("p0") is None
        assert recorder.stats_for("p0").pfr_count == 1

    def test_stats_accumulate_across_hands(self, make_engine, recorder):
        recorder, store = recorder
        engine = make_engine()
        for _ in range(3):
            engine.start_hand()
            engine.process_action(PlayerAction.fold())
        assert store.get("p0").stats.hands == 3
        assert store.get("p1").stats.vpip_count == 0

    def test_stats_copy_and_reset(self, make_engine, recorder):
        recorder, _ = recorder
        engine = make_engine()
        engine.start_hand()
        copy = recorder.stats_for("p0")
        copy.hands = 50
        assert recorder.stats_for("p0").hands == 1
        recorder.reset()
        assert recorder.stats_for("p0").hands == 0

    def test_detach_stops_recording(self, make_engine, event_bus, recorder):
        recorder, _ = recorder
        recorder.detach(event_bus)
        engine = make_engine()
        engine.start_hand()
        assert recorder.stats_for("p0").hands == 0
