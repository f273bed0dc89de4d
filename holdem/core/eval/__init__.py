"""
德州扑克牌型评估模块.

提供HandEvaluator类和相关类型，实现牌型识别与比较.
"""

from .types import HandCategory, HandResult, compare_kickers
from .evaluator import HandEvaluator

__all__ = ['HandCategory', 'HandResult', 'HandEvaluator', 'compare_kickers']
