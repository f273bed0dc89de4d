"""
筹码守恒检查器

检查德州扑克游戏中的筹码守恒不变量。
"""

from typing import Iterable

from ..player.player import Player
from .base_checker import BaseInvariantChecker
from .types import InvariantType

__all__ = ['ChipConservationChecker']


class ChipConservationChecker(BaseInvariantChecker):
    """筹码守恒检查器

    验证以下筹码守恒规则：
    1. 玩家筹码 + 奖池 = 本手开始时的总筹码
    2. 筹码与下注不能为负数
    """

    def __init__(self):
        super().__init__(InvariantType.CHIP_CONSERVATION)

    def _perform_check(self, players: Iterable[Player], pot_total: int, expected_total: int) -> bool:
        """执行筹码守恒检查

        Args:
            players: 全部玩家
            pot_total: 尚未分配的奖池金额
            expected_total: 期望的筹码总量

        Returns:
            bool: 检查是否通过
        """
        players = list(players)
        for player in players:
            if player.chips < 0:
                self._create_violation(f"玩家{player.player_id}筹码为负数: {player.chips}",
                                       player_id=player.player_id)
            if player.current_bet < 0 or player.total_bet_this_hand < 0:
                self._create_violation(f"玩家{player.player_id}下注为负数",
                                       player_id=player.player_id)

        actual_total = sum(player.chips for player in players) + pot_total
        if actual_total != expected_total:
            self._create_violation(
                f"筹码总量不守恒: 期望{expected_total}, 实际{actual_total}",
                expected=expected_total, actual=actual_total, difference=actual_total - expected_total,
            )
        return not self._violations
