"""
下注类型定义

定义街道、行动类型、玩家行动、下注记录与合法行动集合。
"""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Dict, List, Optional

__all__ = ['Street', 'ActionType', 'PlayerAction', 'BetRecord', 'LegalActions', 'BettingRoundState']


class Street(Enum):
    """下注街道"""
    PRE_FLOP = auto()
    FLOP = auto()
    TURN = auto()
    RIVER = auto()
    SHOWDOWN = auto()

    @property
    def next_street(self) -> Optional['Street']:
        """下一条街；摊牌之后为None."""
        order = list(Street)
        index = order.index(self)
        return order[index + 1] if index + 1 < len(order) else None

    @property
    def cards_to_deal(self) -> int:
        """进入本街时需要发出的公共牌数."""
        return {Street.FLOP: 3, Street.TURN: 1, Street.RIVER: 1}.get(self, 0)

    @property
    def is_betting_street(self) -> bool:
        return self != Street.SHOWDOWN


class ActionType(Enum):
    """行动类型"""
    FOLD = auto()         # 弃牌
    CHECK = auto()        # 过牌
    CALL = auto()         # 跟注
    RAISE = auto()        # 下注/加注到指定金额
    ALL_IN = auto()       # 全押
    SMALL_BLIND = auto()  # 小盲（强制）
    BIG_BLIND = auto()    # 大盲（强制）
    ANTE = auto()         # 前注（强制）

    @property
    def is_forced(self) -> bool:
        """是否为强制下注（不能由玩家主动提交）"""
        return self in (ActionType.SMALL_BLIND, ActionType.BIG_BLIND, ActionType.ANTE)


@dataclass(frozen=True)
class PlayerAction:
    """
    玩家行动.

    ``amount`` 只对RAISE有意义，表示"加注到"的本轮总下注额；
    其它行动的金额由下注管理器计算。

    Examples:
        >>> PlayerAction.raise_to(60)
        PlayerAction(action_type=<ActionType.RAISE: 4>, amount=60)
    """
    action_type: ActionType
    amount: int = 0

    def __post_init__(self):
        """验证行动的有效性"""
        if not isinstance(self.action_type, ActionType):
            raise TypeError(f"action_type必须是ActionType类型，实际: {type(self.action_type)}")
        if self.amount < 0:
            raise ValueError("下注金额不能为负数")
        if self.action_type == ActionType.RAISE and self.amount <= 0:
            raise ValueError("RAISE操作的金额必须大于0")
        if self.action_type in (ActionType.FOLD, ActionType.CHECK, ActionType.CALL,
                                ActionType.ALL_IN) and self.amount != 0:
            raise ValueError(f"{self.action_type.name}操作不需要指定金额")

    @classmethod
    def fold(cls) -> 'PlayerAction':
        return cls(ActionType.FOLD)

    @classmethod
    def check(cls) -> 'PlayerAction':
        return cls(ActionType.CHECK)

    @classmethod
    def call(cls) -> 'PlayerAction':
        return cls(ActionType.CALL)

    @classmethod
    def raise_to(cls, amount: int) -> 'PlayerAction':
        return cls(ActionType.RAISE, amount)

    @classmethod
    def all_in(cls) -> 'PlayerAction':
        return cls(ActionType.ALL_IN)

    def __str__(self) -> str:
        if self.action_type == ActionType.RAISE:
            return f"RAISE({self.amount})"
        return self.action_type.name


@dataclass(frozen=True)
class BetRecord:
    """
    下注历史中的一条记录.

    Attributes:
        player_id: 行动玩家
        street: 所在街道
        action_type: 行动类型（含强制下注）
        amount: 本次实际投入的筹码
        total_bet: 行动后该玩家本轮的总下注
        pot_before: 行动前的底池总额
        is_raise: 本次行动是否抬高了本轮最高下注
    """
    player_id: str
    street: Street
    action_type: ActionType
    amount: int
    total_bet: int
    pot_before: int
    is_raise: bool = False

    def __post_init__(self):
        if not self.player_id:
            raise ValueError("player_id不能为空")
        if self.amount < 0 or self.total_bet < 0 or self.pot_before < 0:
            raise ValueError("下注记录中的金额不能为负数")

    @property
    def is_aggressive(self) -> bool:
        """下注或加注（含加注性质的全押）"""
        return self.is_raise and not self.action_type.is_forced

    @property
    def is_voluntary(self) -> bool:
        """主动投入筹码（跟注、加注、全押）"""
        return self.action_type in (ActionType.CALL, ActionType.RAISE, ActionType.ALL_IN)


@dataclass(frozen=True)
class LegalActions:
    """
    当前行动玩家的合法行动集合.

    Attributes:
        player_id: 玩家ID
        can_fold: 能否弃牌
        can_check: 能否过牌
        can_call: 能否跟注
        call_amount: 跟注需投入的筹码（已按剩余筹码截断）
        can_raise: 能否加注
        min_raise_to: 最小"加注到"金额
        max_raise_to: 最大"加注到"金额（即全押时的本轮总下注）
        can_all_in: 能否全押
    """
    player_id: str
    can_fold: bool = True
    can_check: bool = False
    can_call: bool = False
    call_amount: int = 0
    can_raise: bool = False
    min_raise_to: int = 0
    max_raise_to: int = 0
    can_all_in: bool = False

    def __post_init__(self):
        if self.can_check and self.can_call:
            raise ValueError("不能同时允许过牌和跟注")
        if self.can_raise and self.min_raise_to > self.max_raise_to:
            raise ValueError("min_raise_to不能大于max_raise_to")

    def available_types(self) -> List[ActionType]:
        """按固定顺序列出可用的行动类型"""
        flags = [
            (ActionType.FOLD, self.can_fold),
            (ActionType.CHECK, self.can_check),
            (ActionType.CALL, self.can_call),
            (ActionType.RAISE, self.can_raise),
            (ActionType.ALL_IN, self.can_all_in),
        ]
        return [action_type for action_type, allowed in flags if allowed]

    def clamp_raise(self, amount: int) -> int:
        """把期望的加注额收敛到合法区间"""
        return max(self.min_raise_to, min(amount, self.max_raise_to))


@dataclass
class BettingRoundState:
    """
    一条街的下注状态.

    Attributes:
        street: 当前街道
        current_bet: 本轮最高下注
        min_raise: 最小加注增量；最后一次加注是不足额全押时为0
        last_full_raise: 最近一次足额加注的增量（未行动者再加注的下限）
        has_acted: 玩家ID -> 本轮是否已在当前下注水平行动
        raise_count: 本轮抬高下注的次数
        last_aggressor_id: 最后一个抬高下注的玩家
    """
    street: Street = Street.PRE_FLOP
    current_bet: int = 0
    min_raise: int = 0
    last_full_raise: int = 0
    has_acted: Dict[str, bool] = field(default_factory=dict)
    raise_count: int = 0
    last_aggressor_id: Optional[str] = None

    def __post_init__(self):
        if self.current_bet < 0:
            raise ValueError("current_bet不能为负数")
        if self.min_raise < 0 or self.last_full_raise < 0:
            raise ValueError("最小加注额不能为负数")

    @property
    def is_locked(self) -> bool:
        """不足额全押后，已行动者只能跟注或弃牌"""
        return self.min_raise == 0 and self.current_bet > 0

    @property
    def effective_min_raise(self) -> int:
        return self.min_raise if self.min_raise > 0 else self.last_full_raise
