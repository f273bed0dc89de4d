"""
分层奖池

累计所有投入（包括弃牌玩家的投入），并按全押层级切分为主池和边池。
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Sequence, Tuple

from ..invariant.pot_integrity_checker import PotIntegrityChecker
from ..invariant.types import InvariantError
from ..player.player import Player
from ..player.types import PlayerStatus

__all__ = ['Pot', 'PotPortion', 'UncalledBetReturn']

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PotPortion:
    """
    奖池中的一个分池.

    Attributes:
        amount: 金额
        eligible_player_ids: 有资格争夺该分池的玩家（未弃牌且投入达到层级）
        level: 该分池对应的投入上限
    """
    amount: int
    eligible_player_ids: FrozenSet[str]
    level: int = 0

    def __post_init__(self):
        """验证分池数据的有效性"""
        if self.amount < 0:
            raise ValueError("分池金额不能为负数")
        if not self.eligible_player_ids:
            raise ValueError("分池必须有至少一个有资格的玩家")


@dataclass(frozen=True)
class UncalledBetReturn:
    """未被跟注部分的退还记录"""
    player_id: str
    amount: int


class Pot:
    """
    分层奖池

    ``running_total`` 随每次投入累加；``recalculate`` 根据玩家本手投入重新切分分池，
    并校验 Σ分池 == running_total == Σ玩家投入。

    Examples:
        >>> pot = Pot()
        >>> pot.add(30); pot.add(50); pot.add(100); pot.add(100)
        >>> [p.amount for p in pot.recalculate(players)]
        [120, 60, 100]
    """

    def __init__(self, strict_invariants: bool = True):
        """
        Args:
            strict_invariants: 为True时不一致直接抛出InvariantError；
                否则记录ERROR日志并把差额计入主池
        """
        self._strict = strict_invariants
        self._running_total = 0
        self._portions: List[PotPortion] = []
        self._checker = PotIntegrityChecker()

    @property
    def running_total(self) -> int:
        return self._running_total

    @property
    def total(self) -> int:
        return self._running_total

    @property
    def portions(self) -> Tuple[PotPortion, ...]:
        return tuple(self._portions)

    @property
    def main_pot(self) -> int:
        return self._portions[0].amount if self._portions else self._running_total

    @property
    def side_pots(self) -> Tuple[PotPortion, ...]:
        return tuple(self._portions[1:])

    def reset(self) -> None:
        self._running_total = 0
        self._portions = []

    def add(self, amount: int) -> None:
        """
        累加一笔投入

        Raises:
            ValueError: 当金额为负数时
        """
        if amount < 0:
            raise ValueError(f"投入金额不能为负数: {amount}")
        self._running_total += amount

    def recalculate(self, players: Sequence[Player]) -> List[PotPortion]:
        """
        按投入层级重新切分分池

        层级取所有玩家（含弃牌者）不同的非零本手投入额。每层金额为各玩家在该层区间内的投入之和，
        资格为未弃牌且投入达到该层的玩家。没有资格玩家的层并入前一分池；
        资格集合相同的相邻分池合并。

        Args:
            players: 全部玩家

        Returns:
            List[PotPortion]: 从主池到最高边池的分池列表

        Raises:
            InvariantError: 严格模式下分池之和与累计总额不一致时
        """
        contributions = [(p, p.total_bet_this_hand) for p in players if p.total_bet_this_hand > 0]
        levels = sorted({bet for _, bet in contributions})

        raw: List[List] = []  # [amount, eligible, level]
        carry = 0
        previous = 0
        for level in levels:
            amount = sum(min(bet, level) - min(bet, previous) for _, bet in contributions)
            eligible = frozenset(
                p.player_id for p, bet in contributions
                if bet >= level and p.status in (PlayerStatus.ACTIVE, PlayerStatus.ALL_IN)
            )
            previous = level
            if not eligible:
                if raw:
                    raw[-1][0] += amount
                    raw[-1][2] = level
                else:
                    carry += amount
                continue
            if raw and raw[-1][1] == eligible:
                raw[-1][0] += amount + carry
                raw[-1][2] = level
            else:
                raw.append([amount + carry, eligible, level])
            carry = 0

        self._portions = [PotPortion(amount, eligible, level) for amount, eligible, level in raw]
        self._verify(players, carry)
        return list(self._portions)

    def _verify(self, players: Sequence[Player], unassigned: int) -> None:
        total_contributed = sum(p.total_bet_this_hand for p in players)
        result = self._checker.check(
            [(p.amount, p.eligible_player_ids) for p in self._portions],
            self._running_total,
            total_contributed,
        )
        if result:
            return
        if self._strict:
            raise InvariantError.from_result(result)

        logger.error(f"奖池不变量被破坏，按主池修正: {result.describe()} (未分配{unassigned})")
        difference = self._running_total - sum(p.amount for p in self._portions)
        if self._portions and difference:
            main = self._portions[0]
            self._portions[0] = PotPortion(max(0, main.amount + difference),
                                           main.eligible_player_ids, main.level)

    def return_uncalled_bet(self, players: Sequence[Player]) -> Optional[UncalledBetReturn]:
        """
        退还未被跟注的部分

        只比较未弃牌的玩家：唯一最高投入者超出第二高投入的部分退回其筹码，
        并从其本手投入、本轮下注和奖池累计总额中扣除。弃牌者的投入留在奖池中。

        Returns:
            Optional[UncalledBetReturn]: 有退还时返回记录，否则None
        """
        contenders = sorted(
            (p for p in players if p.total_bet_this_hand > 0 and p.status != PlayerStatus.FOLDED),
            key=lambda p: p.total_bet_this_hand,
            reverse=True,
        )
        if not contenders:
            return None
        top = contenders[0]
        second = contenders[1].total_bet_this_hand if len(contenders) > 1 else 0
        excess = top.total_bet_this_hand - second
        if excess <= 0:
            return None

        top.chips += excess
        top.total_bet_this_hand -= excess
        top.current_bet = max(0, top.current_bet - excess)
        if top.status == PlayerStatus.ALL_IN:
            top.status = PlayerStatus.ACTIVE
        self._running_total -= excess
        logger.debug(f"退还{top.player_id}未被跟注的{excess}")
        return UncalledBetReturn(top.player_id, excess)

    def clear(self) -> int:
        """分配完毕后清空奖池，返回清空前的金额"""
        amount = self._running_total
        self.reset()
        return amount

    def __repr__(self) -> str:
        return f"Pot(total={self._running_total}, portions={[p.amount for p in self._portions]})"
