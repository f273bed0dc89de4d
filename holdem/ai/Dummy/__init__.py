"""
随机基准策略

不看牌力，只在合法行动中按权重抽取，用于与参数化AI对照。
"""

from .random_ai import RandomAI

__all__ = ["RandomAI"]
