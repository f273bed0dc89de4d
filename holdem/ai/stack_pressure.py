"""
筹码压力（简化ICM）

锦标赛中按自己筹码与平均筹码之比分为大/中/短三档，
结合是否临近钱圈给出入池、进攻与偷盲倾向的调整。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

__all__ = ['StackCategory', 'StackSituation', 'StackPressureAdjustment',
           'analyze_stack_situation', 'bubble_jump_factor', 'stack_pressure_adjustment']

BIG_STACK_RATIO = 1.5
SHORT_STACK_RATIO = 0.7

# (奖金跳跃百分比阈值, 因子)，从高到低匹配
_JUMP_FACTORS = ((30.0, 0.7), (15.0, 0.4), (5.0, 0.2))
_CRITICAL_JUMP = 50.0


class StackCategory(Enum):
    BIG = "big"        # > 1.5倍平均
    MEDIUM = "medium"
    SHORT = "short"    # < 0.7倍平均


@dataclass(frozen=True)
class StackSituation:
    """筹码局势"""
    my_chips: int
    average_chips: float
    stack_ratio: float
    players_remaining: int
    paid_places: int
    bubble_jump: float

    @property
    def category(self) -> StackCategory:
        if self.stack_ratio > BIG_STACK_RATIO:
            return StackCategory.BIG
        if self.stack_ratio < SHORT_STACK_RATIO:
            return StackCategory.SHORT
        return StackCategory.MEDIUM

    @property
    def is_bubble(self) -> bool:
        return self.paid_places > 0 and self.players_remaining == self.paid_places + 1

    @property
    def is_near_bubble(self) -> bool:
        return self.paid_places > 0 and self.paid_places < self.players_remaining <= self.paid_places + 5

    @property
    def pressure(self) -> float:
        base = {StackCategory.BIG: 0.15, StackCategory.MEDIUM: -0.10, StackCategory.SHORT: -0.25}
        return base[self.category] * (1.0 + self.bubble_jump)


@dataclass(frozen=True)
class StackPressureAdjustment:
    """
    Attributes:
        vpip_adjust: 从紧度中减去的量
        aggression_adjust: 加到进攻性上的量
        steal_bonus: 偷盲倾向加成
        push_or_fold: 只全押或弃牌
        description: 说明
    """
    vpip_adjust: float = 0.0
    aggression_adjust: float = 0.0
    steal_bonus: float = 0.0
    push_or_fold: bool = False
    description: str = ""


def bubble_jump_factor(players_remaining: int, payout_structure: Sequence[float]) -> float:
    """
    奖金跳跃因子

    比较"再活过一个淘汰"能拿到的名次奖金与当前名次奖金的相对增幅：
    当前名次没有奖金而下一名次有奖金时增幅按100%计。
    """
    paid = len(payout_structure)
    if paid == 0 or players_remaining <= 1:
        return 0.0

    def payout(place: int) -> float:
        return payout_structure[place - 1] if 1 <= place <= paid else 0.0

    current = payout(players_remaining)
    better = payout(players_remaining - 1)
    if current > 0:
        jump = (better - current) / current * 100.0
    else:
        jump = 100.0 if better > 0 else 0.0

    if jump > _CRITICAL_JUMP:
        return min(1.0, jump / 100.0)
    for threshold, factor in _JUMP_FACTORS:
        if jump > threshold:
            return factor
    return 0.0


def analyze_stack_situation(my_chips: int, all_chips: Sequence[int],
                            payout_structure: Sequence[float]) -> StackSituation:
    """
    分析筹码局势

    Args:
        my_chips: 自己的筹码
        all_chips: 仍在比赛中的所有玩家筹码（含自己）
        payout_structure: 奖金比例
    """
    if not all_chips:
        raise ValueError("all_chips不能为空")
    total = sum(all_chips)
    average = total / len(all_chips) if total > 0 else 1.0
    return StackSituation(
        my_chips=my_chips,
        average_chips=average,
        stack_ratio=my_chips / average,
        players_remaining=len(all_chips),
        paid_places=len(payout_structure),
        bubble_jump=bubble_jump_factor(len(all_chips), payout_structure),
    )


def stack_pressure_adjustment(situation: StackSituation) -> StackPressureAdjustment:
    """按筹码档位给出策略调整"""
    pressure = situation.pressure
    category = situation.category

    if category == StackCategory.BIG:
        return StackPressureAdjustment(
            vpip_adjust=0.15 * (1.0 + pressure),
            aggression_adjust=0.25 * (1.0 + pressure),
            steal_bonus=0.20 * (1.0 + pressure),
            description="大筹码：利用筹码压力偷盲",
        )

    if category == StackCategory.MEDIUM:
        caution = 1.5 if situation.is_near_bubble else 1.0
        return StackPressureAdjustment(
            vpip_adjust=-0.12 * caution,
            aggression_adjust=-0.08 * caution,
            steal_bonus=-0.05 * caution,
            description="接近钱圈：保守进圈" if situation.is_near_bubble else "中筹码：标准策略",
        )

    desperation = max(0.0, 1.0 - situation.stack_ratio)
    return StackPressureAdjustment(
        vpip_adjust=0.20 + desperation * 0.15,
        aggression_adjust=0.35 + desperation * 0.20,
        steal_bonus=desperation * 0.10,
        push_or_fold=True,
        description="短筹码：全押或弃牌",
    )
