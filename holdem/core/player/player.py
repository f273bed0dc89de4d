"""
玩家数据结构.

Player是引擎独占的可变对象，记录筹码、本轮下注、本手累计下注和状态.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..deck.card import Card
from .profile import AIProfile
from .types import PlayerStatus


@dataclass
class Player:
    """
    牌桌上的一个座位.

    Attributes:
        player_id: 唯一标识
        name: 显示名称
        chips: 剩余筹码
        seat: 座位号（在玩家列表中的下标）
        current_bet: 本轮（本街）已下注
        total_bet_this_hand: 本手牌累计投入（含前注）
        status: 当前状态
        hole_cards: 手牌
        ai_profile: AI参数，人类玩家为None
        tilt: 当前倾斜程度[0, 1]
        is_human: 是否为人类玩家
    """

    player_id: str
    name: str
    chips: int
    seat: int = 0
    current_bet: int = 0
    total_bet_this_hand: int = 0
    status: PlayerStatus = PlayerStatus.ACTIVE
    hole_cards: List[Card] = field(default_factory=list)
    ai_profile: Optional[AIProfile] = None
    tilt: float = 0.0
    is_human: bool = False

    def __post_init__(self) -> None:
        if not self.player_id:
            raise ValueError("player_id不能为空")
        if self.chips < 0:
            raise ValueError(f"筹码不能为负数: {self.chips}")

    @property
    def is_active(self) -> bool:
        """仍可自主行动."""
        return self.status == PlayerStatus.ACTIVE

    @property
    def is_all_in(self) -> bool:
        return self.status == PlayerStatus.ALL_IN

    @property
    def is_folded(self) -> bool:
        return self.status == PlayerStatus.FOLDED

    @property
    def in_hand(self) -> bool:
        """仍在争夺底池."""
        return self.status.in_hand

    @property
    def effective_profile(self) -> Optional[AIProfile]:
        """叠加当前倾斜后的AI参数."""
        if self.ai_profile is None:
            return None
        return self.ai_profile.apply_tilt(self.tilt)

    def commit(self, amount: int) -> int:
        """
        从筹码中投入指定金额到本轮下注.

        筹码归零时状态变为ALL_IN.

        Args:
            amount: 投入金额（不超过剩余筹码）

        Returns:
            int: 实际投入金额

        Raises:
            ValueError: 当金额为负或超过剩余筹码时
        """
        if amount < 0:
            raise ValueError(f"投入金额不能为负数: {amount}")
        if amount > self.chips:
            raise ValueError(f"投入金额{amount}超过剩余筹码{self.chips}")
        self.chips -= amount
        self.current_bet += amount
        self.total_bet_this_hand += amount
        if self.chips == 0 and self.status == PlayerStatus.ACTIVE:
            self.status = PlayerStatus.ALL_IN
        return amount

    def update_tilt(self, lost_hand: bool, pot_size: int) -> float:
        """
        一手牌结束后更新倾斜程度.

        输掉筹码时按 ``敏感度 * 底池 / 800`` 上升（上限1）；
        否则按 ``0.03 * (1 - 敏感度/2)`` 缓慢回落。人类玩家不受影响.

        Returns:
            float: 更新后的倾斜程度
        """
        if self.ai_profile is None:
            return self.tilt
        sensitivity = self.ai_profile.tilt_sensitivity
        if lost_hand:
            self.tilt = min(1.0, self.tilt + sensitivity * pot_size / 800.0)
        else:
            self.tilt = max(0.0, self.tilt - 0.03 * (1.0 - sensitivity * 0.5))
        return self.tilt

    def reset_for_new_hand(self) -> None:
        """清空手牌与下注记录，并根据筹码决定是否淘汰."""
        self.hole_cards = []
        self.current_bet = 0
        self.total_bet_this_hand = 0
        if self.status == PlayerStatus.SITTING_OUT:
            return
        self.status = PlayerStatus.ACTIVE if self.chips > 0 else PlayerStatus.ELIMINATED

    def __str__(self) -> str:
        return f"{self.name}({self.chips})"
