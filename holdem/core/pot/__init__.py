"""
Pot Module - 奖池系统

该模块实现德州扑克的奖池管理：
- 投入累计
- 按全押层级切分主池/边池
- 未被跟注部分的退还
"""

from .pot import Pot, PotPortion, UncalledBetReturn

__all__ = ['Pot', 'PotPortion', 'UncalledBetReturn']
