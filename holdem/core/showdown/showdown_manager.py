"""
摊牌管理器

逐个分池比较有资格玩家的牌型并分配筹码。
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..deck.card import Card
from ..eval.evaluator import HandEvaluator
from ..eval.types import HandResult
from ..player.player import Player
from ..pot.pot import PotPortion

__all__ = ['ShowdownManager', 'ShowdownResult', 'PortionAward']

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PortionAward:
    """单个分池的分配结果"""
    portion_index: int
    amount: int
    winner_ids: Tuple[str, ...]
    shares: Dict[str, int]
    winning_hand: Optional[HandResult] = None

    def __post_init__(self):
        """验证分配结果的一致性"""
        distributed = sum(self.shares.values())
        if distributed != self.amount:
            raise ValueError(f"分配结果不一致: 分配{distributed}, 分池{self.amount}")


@dataclass(frozen=True)
class ShowdownResult:
    """
    摊牌（或无人跟注）结果

    Attributes:
        winners: 赢得任意筹码的玩家，按座位顺序
        awards: 玩家ID -> 赢得的总金额
        portion_awards: 每个分池的分配明细
        evaluated: 是否进行了牌型评估
        hand_results: 参与摊牌玩家的牌型
    """
    winners: Tuple[str, ...]
    awards: Dict[str, int]
    portion_awards: Tuple[PortionAward, ...] = ()
    evaluated: bool = False
    hand_results: Dict[str, HandResult] = field(default_factory=dict)

    @property
    def total_awarded(self) -> int:
        return sum(self.awards.values())


class ShowdownManager:
    """
    摊牌管理器

    平分时的零头规则：从庄家左手第一个座位开始按顺时针顺序，
    每个并列赢家依次多得1个筹码，直到分完。
    """

    def __init__(self, evaluator: Optional[HandEvaluator] = None):
        self._evaluator = evaluator or HandEvaluator()

    def award_uncontested(self, winner: Player, amount: int) -> ShowdownResult:
        """
        只剩一名未弃牌玩家时直接判给他，不评估牌型

        Args:
            winner: 唯一剩下的玩家
            amount: 奖池总额
        """
        winner.chips += amount
        award = PortionAward(0, amount, (winner.player_id,), {winner.player_id: amount})
        logger.debug(f"{winner.player_id}无人争夺赢得{amount}")
        return ShowdownResult(
            winners=(winner.player_id,),
            awards={winner.player_id: amount},
            portion_awards=(award,),
            evaluated=False,
        )

    def resolve(self, players: Sequence[Player], portions: Sequence[PotPortion],
                community_cards: Sequence[Card], dealer_seat: int) -> ShowdownResult:
        """
        摊牌并分配所有分池

        Args:
            players: 全部玩家（按座位顺序）
            portions: 分池列表
            community_cards: 公共牌（5张）
            dealer_seat: 庄家座位

        Returns:
            ShowdownResult: 分配结果；筹码已加到赢家身上
        """
        by_id = {player.player_id: player for player in players}
        order = self._payout_order(players, dealer_seat)

        hand_results: Dict[str, HandResult] = {}
        for player in players:
            if player.in_hand and player.hole_cards:
                hand_results[player.player_id] = self._evaluator.evaluate(
                    player.hole_cards, list(community_cards)
                )

        awards: Dict[str, int] = {}
        portion_awards: List[PortionAward] = []
        for index, portion in enumerate(portions):
            contenders = [pid for pid in order
                          if pid in portion.eligible_player_ids and pid in hand_results]
            if not contenders:
                raise ValueError(f"第{index}个分池没有可以摊牌的玩家")

            best = max(hand_results[pid] for pid in contenders)
            winners = [pid for pid in contenders if hand_results[pid].compare_to(best) == 0]
            shares = self.split(portion.amount, winners)
            for pid, share in shares.items():
                by_id[pid].chips += share
                awards[pid] = awards.get(pid, 0) + share
            portion_awards.append(
                PortionAward(index, portion.amount, tuple(winners), shares, best)
            )
            logger.debug(f"分池{index}({portion.amount}) -> {winners} 牌型{best}")

        winners_in_order = tuple(pid for pid in order if awards.get(pid, 0) > 0)
        return ShowdownResult(
            winners=winners_in_order,
            awards=awards,
            portion_awards=tuple(portion_awards),
            evaluated=True,
            hand_results=hand_results,
        )

    @staticmethod
    def split(amount: int, winners_in_order: Sequence[str]) -> Dict[str, int]:
        """
        平分金额，零头按给定顺序每人1个

        Examples:
            >>> ShowdownManager.split(101, ["a", "b"])
            {'a': 51, 'b': 50}
        """
        if not winners_in_order:
            raise ValueError("至少需要一个赢家")
        base, remainder = divmod(amount, len(winners_in_order))
        return {pid: base + (1 if i < remainder else 0) for i, pid in enumerate(winners_in_order)}

    @staticmethod
    def _payout_order(players: Sequence[Player], dealer_seat: int) -> List[str]:
        """从庄家左手第一个座位开始的顺时针顺序"""
        count = len(players)
        return [players[(dealer_seat + 1 + i) % count].player_id for i in range(count)]

