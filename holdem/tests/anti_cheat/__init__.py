"""
Anti-cheat helpers - 测试辅助

确保测试使用真实的holdem对象，并检查分层边界与筹码守恒。
"""

from .core_usage_checker import CoreUsageChecker, LayerViolation

__all__ = ['CoreUsageChecker', 'LayerViolation']
