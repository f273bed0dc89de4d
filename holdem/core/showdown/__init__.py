"""
Showdown Module - 摊牌

按分池比较牌型并分配筹码。
"""

from .showdown_manager import ShowdownManager, ShowdownResult, PortionAward

__all__ = ['ShowdownManager', 'ShowdownResult', 'PortionAward']
