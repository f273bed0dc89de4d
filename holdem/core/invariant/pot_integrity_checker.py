"""
奖池完整性检查器

验证分层奖池的金额与资格集合。
"""

from typing import FrozenSet, Sequence, Tuple

from .base_checker import BaseInvariantChecker
from .types import InvariantType

__all__ = ['PotIntegrityChecker']


class PotIntegrityChecker(BaseInvariantChecker):
    """奖池完整性检查器

    验证以下规则：
    1. 各分池金额之和 == 奖池累计总额
    2. 奖池累计总额 == 所有玩家本手投入之和
    3. 每个分池金额为正且至少有一名有资格的玩家
    4. 相邻分池的资格集合不相同（应已合并）
    """

    def __init__(self):
        super().__init__(InvariantType.POT_INTEGRITY)

    def _perform_check(self, portions: Sequence[Tuple[int, FrozenSet[str]]],
                       running_total: int, total_contributed: int) -> bool:
        """
        Args:
            portions: (金额, 有资格玩家集合) 列表，按层级从低到高
            running_total: 奖池累计总额
            total_contributed: 所有玩家 total_bet_this_hand 之和
        """
        portion_sum = sum(amount for amount, _ in portions)
        if portion_sum != running_total:
            self._create_violation(
                f"分池之和{portion_sum}与奖池总额{running_total}不一致",
                portion_sum=portion_sum, running_total=running_total,
            )
        if running_total != total_contributed:
            self._create_violation(
                f"奖池总额{running_total}与玩家投入之和{total_contributed}不一致",
                running_total=running_total, total_contributed=total_contributed,
            )
        for index, (amount, eligible) in enumerate(portions):
            if amount <= 0:
                self._create_violation(f"第{index}个分池金额{amount}不是正数", index=index)
            if not eligible:
                self._create_violation(f"第{index}个分池没有有资格的玩家", index=index)
            if index > 0 and portions[index - 1][1] == eligible:
                self._create_violation(f"第{index}个分池与前一个分池资格相同，未合并",
                                       'WARNING', index=index)
        return not self._violations
