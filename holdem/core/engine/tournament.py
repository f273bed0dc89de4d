"""
锦标赛进度

记录盲注升级节奏、淘汰顺序，并在比赛结束时生成最终排名。
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..player.player import Player
from ..rules.types import BlindLevel, TournamentConfig

__all__ = ['TournamentState', 'EliminationRecord', 'FinalStanding']

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EliminationRecord:
    """一名玩家被淘汰的记录"""
    player_id: str
    name: str
    hand_number: int
    starting_stack: int
    is_human: bool = False


@dataclass(frozen=True)
class FinalStanding:
    """
    最终排名中的一行

    Attributes:
        rank: 名次（1为冠军）
        player_id: 玩家ID
        name: 玩家名称
        final_chips: 结束时筹码
        hands_played: 参与的手数（被淘汰者为被淘汰时的手牌编号）
        is_human: 是否为人类玩家
        payout_share: 按奖金结构获得的比例，未进入奖励圈为0
    """
    rank: int
    player_id: str
    name: str
    final_chips: int
    hands_played: int
    is_human: bool = False
    payout_share: float = 0.0


@dataclass
class TournamentState:
    """
    锦标赛进度

    每打完一手调用 ``record_hand``；打满 ``hands_per_level`` 手且还有更高级别时升级。
    同一手牌中被淘汰的多名玩家，本手开始时筹码较少者先出局（名次更低）。
    """
    config: Optional[TournamentConfig] = None
    level_index: int = 0
    hands_at_level: int = 0
    eliminations: List[EliminationRecord] = field(default_factory=list)

    @property
    def is_tournament(self) -> bool:
        return self.config is not None

    @property
    def current_level(self) -> Optional[BlindLevel]:
        if self.config is None:
            return None
        return self.config.level_at(self.level_index)

    @property
    def payout_structure(self) -> List[float]:
        return list(self.config.payout_structure) if self.config else []

    def record_hand(self) -> Optional[BlindLevel]:
        """
        记录完成一手牌

        Returns:
            Optional[BlindLevel]: 升级后的新级别；未升级返回None
        """
        if self.config is None:
            return None
        self.hands_at_level += 1
        if self.hands_at_level < self.config.hands_per_level:
            return None
        next_index = self.level_index + 1
        if next_index >= len(self.config.blind_schedule):
            return None
        self.level_index = next_index
        self.hands_at_level = 0
        level = self.current_level
        logger.info(f"盲注升级: {level}")
        return level

    def record_eliminations(self, busted: Sequence[Player], hand_number: int,
                            starting_stacks: Dict[str, int]) -> List[EliminationRecord]:
        """
        记录本手被淘汰的玩家

        Args:
            busted: 本手筹码归零的玩家
            hand_number: 手牌编号
            starting_stacks: 玩家ID -> 本手开始时筹码

        Returns:
            List[EliminationRecord]: 新增的淘汰记录，按出局先后排序
        """
        known = {record.player_id for record in self.eliminations}
        ordered = sorted(
            (p for p in busted if p.player_id not in known),
            key=lambda p: (starting_stacks.get(p.player_id, 0), p.seat),
        )
        records = [
            EliminationRecord(p.player_id, p.name, hand_number,
                              starting_stacks.get(p.player_id, 0), p.is_human)
            for p in ordered
        ]
        self.eliminations.extend(records)
        return records

    def final_standings(self, players: Sequence[Player], hand_number: int) -> List[FinalStanding]:
        """
        生成最终排名

        仍有筹码的玩家按筹码从多到少排在前面，之后按淘汰顺序倒序（最后出局者名次最高）。
        """
        payouts = self.payout_structure
        alive = sorted((p for p in players if p.chips > 0), key=lambda p: (-p.chips, p.seat))
        standings: List[FinalStanding] = []
        for player in alive:
            rank = len(standings) + 1
            standings.append(FinalStanding(
                rank, player.player_id, player.name, player.chips, hand_number,
                player.is_human, payouts[rank - 1] if rank <= len(payouts) else 0.0,
            ))
        for record in reversed(self.eliminations):
            rank = len(standings) + 1
            standings.append(FinalStanding(
                rank, record.player_id, record.name, 0, record.hand_number,
                record.is_human, payouts[rank - 1] if rank <= len(payouts) else 0.0,
            ))
        return standings
