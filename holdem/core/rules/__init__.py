"""
Rules Module - 游戏规则

该模块定义牌桌规则与锦标赛配置：

Classes:
    TableRules: 盲注、前注、初始筹码、人数与不变量模式
    BlindLevel: 盲注级别
    TournamentConfig: 盲注结构、升级节奏与奖金比例
"""

from .types import (
    TableRules, BlindLevel, TournamentConfig, TURBO, STANDARD, DEEP_STACK, TOURNAMENT_PRESETS,
)

__all__ = [
    'TableRules',
    'BlindLevel',
    'TournamentConfig',
    'TURBO',
    'STANDARD',
    'DEEP_STACK',
    'TOURNAMENT_PRESETS',
]
