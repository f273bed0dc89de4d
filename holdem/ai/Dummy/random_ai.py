"""
RandomAI - 纯随机决策AI

在当前合法行动中随机选择，用作基准对照组和引擎鲁棒性测试。
"""

import random
from typing import List, Optional

from ...core.betting.betting_types import ActionType, LegalActions
from ...core.engine.types import TableSnapshot
from ..types import AIDecision, AIDecisionType, RandomAIConfig

_ACTION_TO_DECISION = {
    ActionType.FOLD: AIDecisionType.FOLD,
    ActionType.CHECK: AIDecisionType.CHECK,
    ActionType.CALL: AIDecisionType.CALL,
    ActionType.RAISE: AIDecisionType.RAISE,
    ActionType.ALL_IN: AIDecisionType.ALL_IN,
}


class RandomAI:
    """纯随机AI玩家

    对所有可执行的行动进行概率选择：
    - all-in: ``all_in_probability``
    - 其他行动: 平均分配剩余概率；能过牌时不弃牌
    """

    def __init__(self, config: Optional[RandomAIConfig] = None, rng: Optional[random.Random] = None):
        """初始化RandomAI

        Args:
            config: AI配置，如果为None则使用默认配置
            rng: 随机数生成器；为None时按配置中的种子创建
        """
        self.config = config or RandomAIConfig()
        self._random = rng or random.Random(self.config.seed)

    def get_strategy_name(self) -> str:
        return "RandomAI"

    def decide_action(self, snapshot: TableSnapshot, player_id: str) -> AIDecision:
        """在合法行动中随机选择

        Args:
            snapshot: 当前牌桌快照
            player_id: 玩家ID

        Returns:
            AI决策结果
        """
        legal = snapshot.legal_actions
        if legal is None or legal.player_id != player_id:
            return AIDecision(AIDecisionType.FOLD, reasoning="没有可用行动，默认弃牌")

        available = self._available(legal)
        if not available:
            return AIDecision(AIDecisionType.FOLD, reasoning="没有可用行动，默认弃牌")

        chosen = self._choose_action_with_probability(available)
        amount = self._raise_amount(snapshot, legal) if chosen == AIDecisionType.RAISE else 0
        return AIDecision(
            decision_type=chosen,
            amount=amount,
            confidence=1.0,
            reasoning=f"随机选择: {chosen.name}",
        )

    @staticmethod
    def _available(legal: LegalActions) -> List[AIDecisionType]:
        types = [_ACTION_TO_DECISION[action_type] for action_type in legal.available_types()]
        if AIDecisionType.CHECK in types and AIDecisionType.FOLD in types:
            types.remove(AIDecisionType.FOLD)
        return types

    def _choose_action_with_probability(self, available_actions: List[AIDecisionType]) -> AIDecisionType:
        if len(available_actions) == 1:
            return available_actions[0]

        if AIDecisionType.ALL_IN in available_actions and self._random.random() < self.config.all_in_probability:
            return AIDecisionType.ALL_IN

        non_all_in_actions = [action for action in available_actions if action != AIDecisionType.ALL_IN]
        if not non_all_in_actions:
            return AIDecisionType.ALL_IN
        return self._random.choice(non_all_in_actions)

    def _raise_amount(self, snapshot: TableSnapshot, legal: LegalActions) -> int:
        """按底池比例随机取加注额，再收敛到合法区间"""
        pot = max(snapshot.pot_total, snapshot.big_blind)
        low = snapshot.current_bet + int(pot * self.config.min_bet_ratio)
        high = snapshot.current_bet + int(pot * self.config.max_bet_ratio)
        return legal.clamp_raise(self._random.randint(low, max(low, high)))
