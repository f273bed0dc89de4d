"""
引擎对外类型

行动结果与牌桌快照都是不可变对象，可以安全地交给AI或界面层读取。
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..betting.betting_types import BetRecord, LegalActions, PlayerAction, Street
from ..deck.card import Card
from ..player.profile import AIProfile
from ..player.types import PlayerStatus
from ..pot.pot import PotPortion

__all__ = ['ActionOutcome', 'PlayerView', 'TableSnapshot']


@dataclass(frozen=True)
class ActionOutcome:
    """
    ``PokerEngine.process_action`` 的结果

    非法行动不会抛出异常，而是返回 ``success=False`` 并附带原因。

    Attributes:
        success: 行动是否被接受
        error_message: 被拒绝的原因
        action: 提交的行动
        player_id: 行动玩家
        chips_moved: 本次移入底池的筹码
        street: 行动处理后的当前街道
        current_bet: 行动处理后的本轮最高下注
        pot_total: 行动处理后的底池总额
        active_player_index: 下一个需要行动的座位；None表示没有人需要行动
        is_hand_over: 本手是否已结束
        winners: 本手结束时的赢家
    """
    success: bool
    error_message: str = ""
    action: Optional[PlayerAction] = None
    player_id: Optional[str] = None
    chips_moved: int = 0
    street: Street = Street.PRE_FLOP
    current_bet: int = 0
    pot_total: int = 0
    active_player_index: Optional[int] = None
    is_hand_over: bool = False
    winners: Tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return self.success


@dataclass(frozen=True)
class PlayerView:
    """
    快照中的一名玩家

    ``hole_cards`` 只对查看者本人（或摊牌后）可见，其他情况下为空。
    """
    player_id: str
    name: str
    seat: int
    chips: int
    current_bet: int
    total_bet_this_hand: int
    status: PlayerStatus
    hole_cards: Tuple[Card, ...] = ()
    is_human: bool = False
    ai_profile: Optional[AIProfile] = None
    tilt: float = 0.0

    @property
    def in_hand(self) -> bool:
        return self.status.in_hand

    @property
    def is_active(self) -> bool:
        return self.status == PlayerStatus.ACTIVE


@dataclass(frozen=True)
class TableSnapshot:
    """
    某一时刻的牌桌只读视图

    AI决策只依赖快照，不接触引擎的可变状态。
    """
    table_id: str
    hand_number: int
    street: Street
    community_cards: Tuple[Card, ...]
    players: Tuple[PlayerView, ...]
    pot_total: int
    portions: Tuple[PotPortion, ...]
    current_bet: int
    min_raise: int
    raise_count: int
    dealer_seat: Optional[int]
    small_blind_seat: Optional[int]
    big_blind_seat: Optional[int]
    active_player_index: Optional[int]
    small_blind: int
    big_blind: int
    ante: int
    history: Tuple[BetRecord, ...] = ()
    preflop_aggressor_id: Optional[str] = None
    legal_actions: Optional[LegalActions] = None
    payout_structure: Tuple[float, ...] = ()
    is_hand_over: bool = False
    viewer_id: Optional[str] = None
    winners: Tuple[str, ...] = ()

    def player(self, player_id: str) -> PlayerView:
        for view in self.players:
            if view.player_id == player_id:
                return view
        raise KeyError(f"玩家不存在: {player_id}")

    @property
    def active_player(self) -> Optional[PlayerView]:
        if self.active_player_index is None:
            return None
        return self.players[self.active_player_index]

    def opponents_in_hand(self, player_id: str) -> List[PlayerView]:
        """仍在争夺底池的其他玩家"""
        return [p for p in self.players if p.player_id != player_id and p.in_hand]

    def history_for(self, street: Street) -> List[BetRecord]:
        return [record for record in self.history if record.street == street]

    def seat_offset(self, seat: int) -> int:
        """相对庄家的座位偏移（0=庄家，1=小盲，2=大盲，...）"""
        if self.dealer_seat is None:
            return seat
        return (seat - self.dealer_seat) % len(self.players)

    @property
    def players_remaining(self) -> int:
        """仍有筹码的玩家数"""
        return sum(1 for p in self.players if p.chips > 0 or p.in_hand)

    @property
    def average_stack(self) -> float:
        stacks = [p.chips + p.total_bet_this_hand for p in self.players
                  if p.status != PlayerStatus.ELIMINATED]
        return sum(stacks) / len(stacks) if stacks else 0.0
