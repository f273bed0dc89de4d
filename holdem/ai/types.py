"""
AI模块类型定义

定义AI决策结果、策略接口、配置与对手风格相关的数据结构。
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Protocol

from pydantic import Field, ValidationInfo, field_validator
from pydantic.dataclasses import dataclass as pydantic_dataclass

from ..core.betting.betting_types import PlayerAction
from ..core.engine.types import TableSnapshot

__all__ = [
    'AIDecisionType',
    'AIDecision',
    'AIStrategy',
    'EquityConfig',
    'DecisionConfig',
    'RandomAIConfig',
    'PlayerStyle',
    'StrategyAdjustment',
]


class AIDecisionType(Enum):
    """AI决策类型"""
    FOLD = auto()
    CHECK = auto()
    CALL = auto()
    RAISE = auto()
    ALL_IN = auto()


@dataclass(frozen=True)
class AIDecision:
    """
    AI决策结果

    Attributes:
        decision_type: 决策类型
        amount: RAISE时为"加注到"的金额，其它为0
        confidence: 决策信心[0, 1]
        reasoning: 简短的决策理由
        equity: 决策时使用的胜率估计
        pot_odds: 决策时的底池赔率
    """
    decision_type: AIDecisionType
    amount: int = 0
    confidence: float = 1.0
    reasoning: str = ""
    equity: Optional[float] = None
    pot_odds: float = 0.0

    def __post_init__(self):
        if self.decision_type == AIDecisionType.RAISE and self.amount <= 0:
            raise ValueError("RAISE决策必须给出正的加注金额")
        if self.decision_type != AIDecisionType.RAISE and self.amount != 0:
            raise ValueError(f"{self.decision_type.name}决策不需要金额")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError("confidence必须在0.0-1.0之间")

    def to_action(self) -> PlayerAction:
        """转换为引擎可执行的行动"""
        action_map = {
            AIDecisionType.FOLD: PlayerAction.fold,
            AIDecisionType.CHECK: PlayerAction.check,
            AIDecisionType.CALL: PlayerAction.call,
            AIDecisionType.ALL_IN: PlayerAction.all_in,
        }
        if self.decision_type == AIDecisionType.RAISE:
            return PlayerAction.raise_to(self.amount)
        return action_map[self.decision_type]()


class AIStrategy(Protocol):
    """AI策略接口"""

    def decide_action(self, snapshot: TableSnapshot, player_id: str) -> AIDecision:
        """基于牌桌快照决定行动

        Args:
            snapshot: 以该玩家视角生成的快照
            player_id: 玩家ID

        Returns:
            AI决策结果
        """
        ...

    def get_strategy_name(self) -> str:
        """获取策略名称"""
        ...


@pydantic_dataclass(frozen=True)
class EquityConfig:
    """
    蒙特卡洛胜率估算配置

    听牌或胜率落在模糊区间时增加迭代次数，河牌阶段减少迭代次数。
    """
    default_iterations: int = Field(500, gt=0, description="翻牌/转牌默认迭代次数")
    preflop_iterations: int = Field(500, gt=0, description="翻牌前迭代次数")
    river_iterations: int = Field(200, gt=0, description="河牌迭代次数")
    draw_iterations: int = Field(1000, gt=0, description="听牌或模糊胜率时的迭代次数")
    min_iterations: int = Field(100, gt=0, description="迭代次数下限")
    max_iterations: int = Field(5000, gt=0, description="迭代次数上限")
    ambiguity_low: float = Field(0.4, ge=0.0, le=1.0, description="模糊区间下限")
    ambiguity_high: float = Field(0.6, ge=0.0, le=1.0, description="模糊区间上限")
    workers: int = Field(1, ge=1, le=32, description="并行线程数")
    parallel_threshold: int = Field(2000, gt=0, description="迭代次数达到该值才并行")

    @field_validator('max_iterations')
    @classmethod
    def validate_iteration_range(cls, v, info: ValidationInfo):
        """验证迭代次数上限不小于下限"""
        min_iterations = info.data.get('min_iterations')
        if min_iterations is not None and v < min_iterations:
            raise ValueError("max_iterations不能小于min_iterations")
        return v

    @field_validator('ambiguity_high')
    @classmethod
    def validate_ambiguity_band(cls, v, info: ValidationInfo):
        """验证模糊区间有效"""
        low = info.data.get('ambiguity_low')
        if low is not None and v < low:
            raise ValueError("ambiguity_high不能小于ambiguity_low")
        return v

    def clamp(self, iterations: int) -> int:
        return max(self.min_iterations, min(self.max_iterations, iterations))


@pydantic_dataclass(frozen=True)
class DecisionConfig:
    """决策引擎配置"""
    model_confidence_gate: float = Field(0.5, ge=0.0, le=1.0, description="使用对手模型所需的最低置信度")
    min_hands_for_style: int = Field(20, ge=0, description="风格分类所需的最少手数")
    full_confidence_hands: int = Field(50, gt=0, description="置信度达到1所需手数")
    bluff_full_confidence_hands: int = Field(30, gt=0, description="诈唬检测置信度达到1所需手数")
    bluff_detection_gate: float = Field(0.6, ge=0.0, le=1.0, description="采用诈唬检测结论所需的置信度")
    raise_war_limit: int = Field(2, ge=1, description="本街加注达到该次数后停止再加注")
    push_fold_big_blinds: int = Field(10, ge=1, description="短筹码只全押或弃牌的大盲数")
    use_opponent_modeling: bool = Field(True, description="是否使用对手建模")
    use_bluff_detection: bool = Field(True, description="是否使用诈唬检测")
    use_stack_pressure: bool = Field(True, description="锦标赛中是否使用筹码压力调整")
    use_range_analysis: bool = Field(True, description="专家难度是否估计最后下注者的范围")


@dataclass
class RandomAIConfig:
    """随机AI配置"""
    seed: Optional[int] = None     # 随机种子，用于测试重现
    min_bet_ratio: float = 0.2     # 最小下注比例（相对于底池）
    max_bet_ratio: float = 0.5     # 最大下注比例（相对于底池）
    all_in_probability: float = 0.05

    def __post_init__(self):
        if not 0.0 < self.min_bet_ratio <= 5.0:
            raise ValueError("min_bet_ratio必须在0.0-5.0之间")
        if not 0.0 < self.max_bet_ratio <= 5.0:
            raise ValueError("max_bet_ratio必须在0.0-5.0之间")
        if self.min_bet_ratio > self.max_bet_ratio:
            raise ValueError("min_bet_ratio不能大于max_bet_ratio")
        if not 0.0 <= self.all_in_probability <= 1.0:
            raise ValueError("all_in_probability必须在0.0-1.0之间")


class PlayerStyle(Enum):
    """对手风格分类"""
    ROCK = "rock"        # 石头：VPIP<20%, PFR<15%, AF>2.5
    TAG = "tag"          # 紧凶：VPIP 20-30%, PFR 15-25%, AF 2-3
    LAG = "lag"          # 松凶：VPIP 30-45%, PFR 25-35%, AF>=3
    FISH = "fish"        # 鱼：VPIP>45%, PFR<15%, AF<1.5
    UNKNOWN = "unknown"  # 样本不足

    @property
    def description(self) -> str:
        return {
            PlayerStyle.ROCK: "石头 (超紧)",
            PlayerStyle.TAG: "紧凶 (平衡)",
            PlayerStyle.LAG: "松凶 (攻击)",
            PlayerStyle.FISH: "鱼 (跟注站)",
            PlayerStyle.UNKNOWN: "未知",
        }[self]


@dataclass(frozen=True)
class StrategyAdjustment:
    """
    针对对手风格的策略调整向量

    Attributes:
        steal_freq_bonus: 偷盲倾向加成（加到有效进攻性上）
        bluff_freq_adjust: 诈唬频率增量
        value_size_adjust: 价值下注尺寸的相对调整
        call_down_adjust: 跟注倾向增量
    """
    steal_freq_bonus: float = 0.0
    bluff_freq_adjust: float = 0.0
    value_size_adjust: float = 0.0
    call_down_adjust: float = 0.0

    @classmethod
    def balanced(cls) -> 'StrategyAdjustment':
        return cls()

    def combine(self, other: 'StrategyAdjustment') -> 'StrategyAdjustment':
        """逐项相加"""
        return StrategyAdjustment(
            self.steal_freq_bonus + other.steal_freq_bonus,
            self.bluff_freq_adjust + other.bluff_freq_adjust,
            self.value_size_adjust + other.value_size_adjust,
            self.call_down_adjust + other.call_down_adjust,
        )

    @property
    def is_neutral(self) -> bool:
        return self == StrategyAdjustment()
