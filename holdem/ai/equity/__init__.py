"""
Equity Module - 蒙特卡洛胜率估算与单手牌缓存
"""

from .cache import EquityCache, make_key
from .monte_carlo import EquityCalculator, EquityResult

__all__ = ['EquityCache', 'make_key', 'EquityCalculator', 'EquityResult']
