"""
Betting Module - 下注系统

该模块实现德州扑克的下注逻辑，包括：
- 行动类型与玩家行动
- 行动合法性验证
- 单条街的下注状态机
"""

from .betting_types import (
    Street, ActionType, PlayerAction, BetRecord, LegalActions, BettingRoundState,
)
from .betting_validator import BettingValidator, BetValidationResult
from .betting_manager import BettingManager, BetResult

__all__ = [
    'Street',
    'ActionType',
    'PlayerAction',
    'BetRecord',
    'LegalActions',
    'BettingRoundState',
    'BettingValidator',
    'BetValidationResult',
    'BettingManager',
    'BetResult',
]
