"""
GameSession - 游戏会话

把引擎、事件总线、统计记录器、对手模型表、胜率缓存与AI决策引擎组装在一起，
并驱动AI座位行动，直到轮到人类玩家或本手结束。

所有缓存都属于会话本身：不同会话之间互不影响，``reset`` 清空它们。
"""

import logging
import random
from typing import Dict, List, Optional, Sequence

from ..ai.decision_engine import DecisionEngine
from ..ai.equity.cache import EquityCache
from ..ai.equity.monte_carlo import EquityCalculator
from ..ai.opponent.store import OpponentModelStore
from ..ai.profiles import pick_opponents
from ..ai.types import AIStrategy, DecisionConfig, EquityConfig
from ..core.betting.betting_types import PlayerAction
from ..core.engine.poker_engine import PokerEngine
from ..core.engine.types import ActionOutcome, TableSnapshot
from ..core.events.event_bus import EventBus
from ..core.player.player import Player
from ..core.rules.types import TableRules, TournamentConfig
from .stats_recorder import StatsRecorder
from .types import CommandResult, QueryResult

__all__ = ['GameSession']

# 单手牌内AI连续行动的上限，防止策略缺陷造成死循环
MAX_AI_ACTIONS_PER_HAND = 500


class GameSession:
    """
    一局游戏的应用层入口

    Args:
        players: 按座位排列的玩家；``is_human`` 为True的座位等待外部提交行动
        rules: 牌桌规则
        tournament: 锦标赛配置
        seed: 随机种子；洗牌、蒙特卡洛与AI随机分支都由它派生
        equity_config: 胜率估算配置
        decision_config: 决策配置
        strategies: 按玩家ID覆盖默认的决策引擎（例如RandomAI）
        event_bus: 事件总线
    """

    def __init__(self, players: Sequence[Player], rules: Optional[TableRules] = None,
                 tournament: Optional[TournamentConfig] = None, seed: Optional[int] = None,
                 equity_config: Optional[EquityConfig] = None,
                 decision_config: Optional[DecisionConfig] = None,
                 strategies: Optional[Dict[str, AIStrategy]] = None,
                 event_bus: Optional[EventBus] = None):
        self.logger = logging.getLogger(__name__)
        self._rng = random.Random(seed)
        self.event_bus = event_bus or EventBus()
        self.engine = PokerEngine(players, rules, tournament,
                                  rng=self._derive_rng(), event_bus=self.event_bus)

        self.model_store = OpponentModelStore(decision_config)
        self.equity_cache = EquityCache()
        self.recorder = StatsRecorder(self.model_store)
        self.recorder.attach(self.event_bus)

        calculator = EquityCalculator(equity_config, self._derive_rng(), cache=self.equity_cache)
        self.decision_engine = DecisionEngine(calculator, self.model_store, decision_config,
                                              self._derive_rng())
        self._strategies: Dict[str, AIStrategy] = dict(strategies or {})

    @classmethod
    def create(cls, human_name: Optional[str] = "玩家", opponent_count: int = 3, difficulty: int = 2,
               rules: Optional[TableRules] = None, tournament: Optional[TournamentConfig] = None,
               seed: Optional[int] = None, **kwargs) -> 'GameSession':
        """
        按难度创建一局游戏

        Args:
            human_name: 人类玩家名称；None表示全部是AI
            opponent_count: AI对手数
            difficulty: 难度1-4
        """
        effective_rules = tournament.to_table_rules(rules) if tournament else (rules or TableRules())
        profiles = pick_opponents(opponent_count, difficulty, random.Random(seed))

        players: List[Player] = []
        if human_name is not None:
            players.append(Player("human", human_name, effective_rules.starting_chips, is_human=True))
        for index, profile in enumerate(profiles):
            players.append(Player(f"ai_{index}_{profile.profile_id}", profile.name,
                                  effective_rules.starting_chips, ai_profile=profile))
        return cls(players, rules, tournament, seed, **kwargs)

    def _derive_rng(self) -> random.Random:
        return random.Random(self._rng.getrandbits(64))

    # ------------------------------------------------------------------
    # 命令
    # ------------------------------------------------------------------

    def start_hand(self) -> CommandResult:
        """开始新的一手牌，并让AI行动到人类玩家或本手结束"""
        if self.engine.is_game_over:
            return CommandResult.business_rule_violation("游戏已经结束", error_code="GAME_OVER")
        if not self.engine.start_hand():
            return CommandResult.business_rule_violation("可参与的玩家不足", error_code="NOT_ENOUGH_PLAYERS")
        outcomes = self.run_ai_turns()
        return CommandResult.success_result(
            f"第{self.engine.hand_number}手开始",
            data={'hand_number': self.engine.hand_number, 'ai_actions': len(outcomes),
                  'is_hand_over': self.engine.is_hand_over},
        )

    def submit_human_action(self, action: PlayerAction) -> CommandResult:
        """提交人类玩家的行动，成功后继续驱动AI"""
        player = self.engine.current_player
        if player is None or not player.is_human:
            return CommandResult.business_rule_violation("当前不是人类玩家行动", error_code="NOT_HUMAN_TURN")

        outcome = self.engine.process_action(action, player.player_id)
        if not outcome:
            return CommandResult.failure_result(outcome.error_message, error_code="INVALID_ACTION")

        outcomes = self.run_ai_turns()
        return CommandResult.success_result(
            f"{player.name} {action}",
            data={'ai_actions': len(outcomes), 'is_hand_over': self.engine.is_hand_over,
                  'winners': list(self.engine.winners)},
        )

    def run_ai_turns(self) -> List[ActionOutcome]:
        """
        连续执行AI座位的行动

        Returns:
            List[ActionOutcome]: 每个AI行动的结果
        """
        outcomes: List[ActionOutcome] = []
        while not self.engine.is_hand_over:
            player = self.engine.current_player
            if player is None or player.is_human:
                break
            if len(outcomes) >= MAX_AI_ACTIONS_PER_HAND:
                self.logger.error(f"第{self.engine.hand_number}手AI行动次数超过上限，停止驱动")
                break
            outcomes.append(self._play_ai_turn(player))
        return outcomes

    def _play_ai_turn(self, player: Player) -> ActionOutcome:
        strategy = self.strategy_for(player.player_id)
        snapshot = self.engine.snapshot(viewer_id=player.player_id)
        decision = strategy.decide_action(snapshot, player.player_id)
        outcome = self.engine.process_action(decision.to_action(), player.player_id)
        if outcome:
            return outcome

        # 策略给出了非法行动：退回到过牌或弃牌
        self.logger.error(f"{player.name} 的AI行动被拒绝: {outcome.error_message}")
        legal = snapshot.legal_actions
        fallback = PlayerAction.check() if legal is not None and legal.can_check else PlayerAction.fold()
        return self.engine.process_action(fallback, player.player_id)

    def play_hand(self) -> CommandResult:
        """全部座位都是AI时完整打完一手牌"""
        if any(p.is_human and p.chips > 0 for p in self.engine.players):
            return CommandResult.business_rule_violation("有人类玩家时不能自动打完一手",
                                                         error_code="HUMAN_SEATED")
        result = self.start_hand()
        if not result:
            return result
        if not self.engine.is_hand_over:
            return CommandResult.failure_result("本手未能结束", error_code="HAND_STUCK")
        return CommandResult.success_result(
            f"第{self.engine.hand_number}手结束",
            data={'winners': list(self.engine.winners)},
        )

    def reset(self) -> None:
        """清空会话持有的对手模型、统计与胜率缓存"""
        self.model_store.reset()
        self.recorder.reset()
        self.equity_cache.clear()

    # ------------------------------------------------------------------
    # 查询
    # ------------------------------------------------------------------

    def strategy_for(self, player_id: str) -> AIStrategy:
        return self._strategies.get(player_id, self.decision_engine)

    def set_strategy(self, player_id: str, strategy: AIStrategy) -> None:
        self._strategies[player_id] = strategy

    def get_snapshot(self, viewer_id: Optional[str] = None) -> QueryResult[TableSnapshot]:
        return QueryResult.success_result(self.engine.snapshot(viewer_id=viewer_id))

    def get_equity(self, player_id: str) -> QueryResult[float]:
        """查询某个玩家当前的胜率估计（提示功能）"""
        snapshot = self.engine.snapshot(viewer_id=player_id)
        try:
            view = snapshot.player(player_id)
        except KeyError as e:
            return QueryResult.failure_result(str(e), error_code="PLAYER_NOT_FOUND")
        if not view.in_hand or len(view.hole_cards) != 2:
            return QueryResult.failure_result("玩家不在本手牌中", error_code="PLAYER_NOT_IN_HAND")

        self.equity_cache.begin_hand(f"{snapshot.table_id}#{snapshot.hand_number}")
        opponents = len(snapshot.opponents_in_hand(player_id))
        equity = self.decision_engine.equity_calculator.calculate_equity(
            view.hole_cards, snapshot.community_cards, opponents)
        return QueryResult.success_result(equity)
