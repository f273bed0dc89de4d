"""
Opponent Module - 对手建模

Classes:
    OpponentStats: 外部记录的累计计数
    OpponentModel: VPIP/PFR/AF、置信度与风格
    OpponentModelStore: 可注入的模型表
"""

from .classifier import STYLE_ADJUSTMENTS, classify_style, strategy_adjustment
from .model import OpponentModel, OpponentStats
from .playbook import Playbook, infer_playbooks, playbook_adjustment
from .store import OpponentModelStore

__all__ = [
    'OpponentStats',
    'OpponentModel',
    'OpponentModelStore',
    'classify_style',
    'strategy_adjustment',
    'STYLE_ADJUSTMENTS',
    'Playbook',
    'infer_playbooks',
    'playbook_adjustment',
]
