"""
AI玩家参数结构.

AIProfile是只读的参数集合，驱动决策引擎中的各个分支.
倾斜（tilt）不修改原始参数，而是通过 ``apply_tilt`` 派生出一份有效参数.
"""

from dataclasses import dataclass, fields, replace
from typing import Dict

# 座位偏移（相对庄家）对应的位置加成
POSITION_BONUSES: Dict[int, float] = {
    0: 0.20, 1: -0.05, 2: 0.05, 3: -0.18,
    4: -0.14, 5: -0.08, 6: 0.06, 7: 0.14,
}

PREFLOP_THRESHOLD_BASE = 0.7
MIN_PREFLOP_THRESHOLD = 0.05
MAX_PREFLOP_THRESHOLD = 0.9

_TILT_ON_TIGHTNESS = 0.4
_TILT_ON_AGGRESSION = 0.3
_TILT_ON_BLUFF = 0.25
_TILT_ON_CALL_DOWN = 0.2
_MIN_TIGHTNESS = 0.05
_MAX_BLUFF = 0.8

_UNIT_FIELDS = (
    'tightness', 'aggression', 'bluff_freq', 'fold_to_3bet', 'cbet_freq',
    'cbet_turn_freq', 'position_awareness', 'tilt_sensitivity',
    'call_down_tendency', 'risk_tolerance', 'bluff_detection',
)


@dataclass(frozen=True)
class AIProfile:
    """
    AI玩家的性格参数.

    除 ``deep_stack_threshold``（以大盲数计的深筹码阈值）外，所有数值参数取值[0, 1].

    Attributes:
        profile_id: 唯一标识
        name: 显示名称
        tightness: 紧度，越大入池越少
        aggression: 激进度，越大越倾向下注/加注
        bluff_freq: 诈唬频率
        fold_to_3bet: 面对3-bet的弃牌倾向
        cbet_freq: 翻牌持续下注频率
        cbet_turn_freq: 转牌持续下注频率
        position_awareness: 位置意识
        tilt_sensitivity: 倾斜敏感度
        call_down_tendency: 跟注到底倾向
        risk_tolerance: 风险承受度
        bluff_detection: 识破诈唬的能力
        deep_stack_threshold: 深筹码阈值（大盲数）
        use_gto_strategy: 是否偏向平衡策略
        difficulty: 难度等级1-4
    """

    profile_id: str = "fox"
    name: str = "老狐狸"
    tightness: float = 0.55
    aggression: float = 0.68
    bluff_freq: float = 0.22
    fold_to_3bet: float = 0.52
    cbet_freq: float = 0.65
    cbet_turn_freq: float = 0.45
    position_awareness: float = 0.80
    tilt_sensitivity: float = 0.15
    call_down_tendency: float = 0.30
    risk_tolerance: float = 0.6
    bluff_detection: float = 0.7
    deep_stack_threshold: float = 180
    use_gto_strategy: bool = False
    difficulty: int = 3

    def __post_init__(self) -> None:
        """
        验证参数取值范围.

        Raises:
            ValueError: 当参数越界时
        """
        for name in _UNIT_FIELDS:
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name}必须在[0, 1]范围内，实际: {value}")
        if self.deep_stack_threshold <= 0:
            raise ValueError("deep_stack_threshold必须为正数")
        if not 1 <= self.difficulty <= 4:
            raise ValueError(f"difficulty必须在1-4之间，实际: {self.difficulty}")

    def apply_tilt(self, tilt: float) -> 'AIProfile':
        """
        返回倾斜状态下的有效参数.

        Args:
            tilt: 当前倾斜程度[0, 1]

        Returns:
            AIProfile: 新的参数对象；tilt为0时返回自身
        """
        if tilt <= 0:
            return self
        tilt = min(tilt, 1.0)
        return replace(
            self,
            tightness=max(_MIN_TIGHTNESS, self.tightness - tilt * _TILT_ON_TIGHTNESS),
            aggression=min(1.0, self.aggression + tilt * _TILT_ON_AGGRESSION),
            bluff_freq=min(_MAX_BLUFF, self.bluff_freq + tilt * _TILT_ON_BLUFF),
            call_down_tendency=min(1.0, self.call_down_tendency + tilt * _TILT_ON_CALL_DOWN),
        )

    def position_adjustment(self, seat_offset: int) -> float:
        """位置加成乘以位置意识；位置意识过低时不做调整."""
        if self.position_awareness <= 0.1:
            return 0.0
        return POSITION_BONUSES.get(seat_offset, 0.0) * self.position_awareness

    def preflop_threshold(self, seat_offset: int) -> float:
        """
        翻牌前入池门槛.

        Args:
            seat_offset: 相对庄家的座位偏移（0为庄家）

        Returns:
            float: 标准化手牌强度需超过的门槛，限定在[0.05, 0.9]
        """
        threshold = PREFLOP_THRESHOLD_BASE - self.position_adjustment(seat_offset) * self.tightness
        return min(max(threshold, MIN_PREFLOP_THRESHOLD), MAX_PREFLOP_THRESHOLD)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}
