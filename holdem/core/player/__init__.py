"""
玩家模块.

提供Player座位对象、PlayerStatus状态枚举和只读的AIProfile参数结构.
"""

from .types import PlayerStatus
from .profile import AIProfile, POSITION_BONUSES
from .player import Player

__all__ = ['PlayerStatus', 'AIProfile', 'POSITION_BONUSES', 'Player']
