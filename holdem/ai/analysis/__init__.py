"""
AI分析工具

纯函数：翻牌前强度、牌面结构、听牌、赔率、位置与对手范围。
"""

from .board import BoardTexture, analyze_board_texture
from .draws import DrawInfo, analyze_draws
from .odds import call_ev, implied_odds, is_positive_ev, pot_odds, raise_ev, stack_to_pot_ratio
from .position import is_late_position, position_name
from .preflop import PREMIUM_CHEN, STRONG_CHEN, chen_formula, chen_to_normalized
from .ranges import (HandRange, RangeAction, call_three_bet_range, estimate_range, narrow_range,
                     open_chen_threshold, opening_range, three_bet_chen_threshold, three_bet_range)

__all__ = [
    'BoardTexture', 'analyze_board_texture',
    'DrawInfo', 'analyze_draws',
    'pot_odds', 'call_ev', 'raise_ev', 'implied_odds', 'is_positive_ev', 'stack_to_pot_ratio',
    'position_name', 'is_late_position',
    'chen_formula', 'chen_to_normalized', 'PREMIUM_CHEN', 'STRONG_CHEN',
    'HandRange', 'RangeAction', 'opening_range', 'three_bet_range', 'call_three_bet_range',
    'estimate_range', 'narrow_range', 'open_chen_threshold', 'three_bet_chen_threshold',
]
