"""
完整游戏流程集成测试

由GameSession驱动真实引擎与AI，覆盖锦标赛打到结束、人类玩家参与、可重现性与统计累计。
"""

import pytest

from holdem.application.game_session import GameSession
from holdem.core.betting import PlayerAction
from holdem.core.events import EventType
from holdem.core.rules import TURBO
from holdem.tests.anti_cheat.core_usage_checker import CoreUsageChecker

MAX_HANDS = 400


def chips_in_play(session):
    return sum(p.chips for p in session.engine.players) + session.engine.pot.total


def human_plays_passively(session):
    """人类玩家能过牌就过牌，否则跟注"""
    while not session.engine.is_hand_over:
        legal = session.engine.legal_actions()
        action = PlayerAction.check() if legal.can_check else PlayerAction.call()
        if not legal.can_check and not legal.can_call:
            action = PlayerAction.all_in() if legal.can_all_in else PlayerAction.fold()
        assert session.submit_human_action(action)


@pytest.mark.integration
@pytest.mark.slow
class TestTournamentToGameOver:

    @pytest.mark.parametrize("difficulty, seed", [(1, 11), (2, 12), (3, 13), (4, 14)])
    def test_ai_tournament_finishes(self, event_bus, event_recorder, difficulty, seed):
        session = GameSession.create(None, opponent_count=4, difficulty=difficulty,
                                     tournament=TURBO, seed=seed, event_bus=event_bus)
        initial = chips_in_play(session)

        for _ in range(MAX_HANDS):
            if session.engine.is_game_over:
                break
            result = session.play_hand()
            assert result, result.message
            CoreUsageChecker.verify_chip_conservation(initial, chips_in_play(session))

        assert session.engine.is_game_over
        survivors = [p for p in session.engine.players if p.chips > 0]
        assert len(survivors) == 1
        assert survivors[0].chips == initial

        standings = session.engine.final_standings()
        assert [s.rank for s in standings] == [1, 2, 3, 4]
        assert standings[0].player_id == survivors[0].player_id
        assert [s.payout_share for s in standings] == [0.5, 0.3, 0.2, 0.0]

        assert len(event_recorder.of_type(EventType.GAME_OVER)) == 1
        assert len(event_recorder.of_type(EventType.PLAYER_ELIMINATED)) == 3
        assert event_recorder.of_type(EventType.BLIND_LEVEL_CHANGED)
        assert session.start_hand().error_code == "GAME_OVER"


@pytest.mark.integration
class TestHumanSession:

    def test_passive_human_hands(self):
        session = GameSession.create("小明", opponent_count=3, difficulty=3, seed=21)
        initial = chips_in_play(session)
        for _ in range(8):
            if session.engine.is_game_over:
                break
            assert session.start_hand()
            human_plays_passively(session)
            assert session.engine.is_hand_over
            CoreUsageChecker.verify_chip_conservation(initial, chips_in_play(session))

    def test_stats_follow_hands_played(self):
        session = GameSession.create(None, opponent_count=3, difficulty=3, seed=22)
        hands = 0
        for _ in range(6):
            if session.engine.is_game_over:
                break
            assert session.play_hand()
            hands += 1
        for player in session.engine.players:
            if player.chips > 0:
                assert session.model_store.get(player.player_id).stats.hands == hands


@pytest.mark.integration
class TestReproducibility:

    def test_same_seed_same_game(self):
        results = []
        for _ in range(2):
            session = GameSession.create(None, opponent_count=3, difficulty=4, seed=31)
            for _ in range(5):
                if session.engine.is_game_over:
                    break
                session.play_hand()
            results.append([p.chips for p in session.engine.players])
        assert results[0] == results[1]
