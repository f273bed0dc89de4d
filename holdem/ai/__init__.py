"""
德州扑克AI模块

基于参数的决策引擎、蒙特卡洛胜率、对手建模、诈唬检测、筹码压力与角色预设。
只依赖 ``holdem.core``。
"""

from .bluff_detector import BluffDetector, BluffEstimate
from .decision_engine import DecisionEngine
from .Dummy import RandomAI
from .equity import EquityCache, EquityCalculator, EquityResult
from .opponent import OpponentModel, OpponentModelStore, OpponentStats
from .profiles import DIFFICULTY_NAMES, PROFILE_PRESETS, get_profile, pick_opponents, profiles_for_difficulty
from .stack_pressure import StackCategory, StackPressureAdjustment, analyze_stack_situation, stack_pressure_adjustment
from .types import (AIDecision, AIDecisionType, AIStrategy, DecisionConfig, EquityConfig, PlayerStyle,
                    RandomAIConfig, StrategyAdjustment)

__all__ = [
    "AIDecision",
    "AIDecisionType",
    "AIStrategy",
    "DecisionConfig",
    "EquityConfig",
    "RandomAIConfig",
    "PlayerStyle",
    "StrategyAdjustment",
    "DecisionEngine",
    "RandomAI",
    "EquityCache",
    "EquityCalculator",
    "EquityResult",
    "OpponentStats",
    "OpponentModel",
    "OpponentModelStore",
    "BluffDetector",
    "BluffEstimate",
    "StackCategory",
    "StackPressureAdjustment",
    "analyze_stack_situation",
    "stack_pressure_adjustment",
    "PROFILE_PRESETS",
    "DIFFICULTY_NAMES",
    "get_profile",
    "profiles_for_difficulty",
    "pick_opponents",
]
