"""
运行时不变量检查

- 筹码守恒：玩家筹码与奖池之和在一手牌内保持不变
- 奖池完整性：分池之和等于所有投入之和
- 发牌唯一性：同一张牌在一手牌内只出现一次
"""

from .types import (
    InvariantType,
    Severity,
    InvariantViolation,
    InvariantCheckResult,
    InvariantError
)
from .base_checker import BaseInvariantChecker
from .pot_integrity_checker import PotIntegrityChecker
from .chip_conservation_checker import ChipConservationChecker
from .card_distribution_checker import CardDistributionChecker

__all__ = [
    'BaseInvariantChecker',
    'PotIntegrityChecker',
    'ChipConservationChecker',
    'CardDistributionChecker',
    'InvariantType',
    'Severity',
    'InvariantViolation',
    'InvariantCheckResult',
    'InvariantError'
]
