"""
玩家相关类型定义.
"""

from enum import Enum, auto


class PlayerStatus(Enum):
    """玩家状态枚举"""
    ACTIVE = auto()       # 仍可行动
    FOLDED = auto()       # 本手已弃牌
    ALL_IN = auto()       # 已全押，不再行动但仍争夺底池
    ELIMINATED = auto()   # 筹码输光，离开比赛
    SITTING_OUT = auto()  # 暂离，不参与发牌

    @property
    def in_hand(self) -> bool:
        """是否仍在争夺本手底池（未弃牌的行动者或全押者）."""
        return self in (PlayerStatus.ACTIVE, PlayerStatus.ALL_IN)
