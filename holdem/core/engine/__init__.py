"""
Engine Module - 手牌生命周期引擎

Classes:
    PokerEngine: 编排盲注、发牌、逐街下注、跑牌与摊牌
    ActionOutcome: 提交行动的结果
    TableSnapshot / PlayerView: 牌桌只读快照
    TournamentState: 盲注升级、淘汰顺序与最终排名
"""

from ..betting.betting_types import Street
from .poker_engine import PokerEngine
from .tournament import EliminationRecord, FinalStanding, TournamentState
from .types import ActionOutcome, PlayerView, TableSnapshot

__all__ = [
    'Street',
    'PokerEngine',
    'ActionOutcome',
    'PlayerView',
    'TableSnapshot',
    'TournamentState',
    'EliminationRecord',
    'FinalStanding',
]
