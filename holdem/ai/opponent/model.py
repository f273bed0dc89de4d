"""
对手统计与模型

统计计数由外部的统计记录器维护；模型只负责把计数换算成
VPIP/PFR/AF等指标，并给出风格分类与置信度。
"""

from dataclasses import dataclass, field
from typing import Optional

from ..types import DecisionConfig, PlayerStyle
from .classifier import classify_style

__all__ = ['OpponentStats', 'OpponentModel']


@dataclass
class OpponentStats:
    """
    单个玩家的累计计数

    Attributes:
        hands: 参与的手数
        vpip_count: 翻牌前主动入池的手数
        pfr_count: 翻牌前加注的手数
        aggressive_actions: 下注/加注次数
        passive_calls: 跟注次数
        three_bet_count: 翻牌前再加注的手数
    """
    hands: int = 0
    vpip_count: int = 0
    pfr_count: int = 0
    aggressive_actions: int = 0
    passive_calls: int = 0
    three_bet_count: int = 0

    def __post_init__(self):
        for name in ('hands', 'vpip_count', 'pfr_count', 'aggressive_actions',
                     'passive_calls', 'three_bet_count'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name}不能为负数")


@dataclass
class OpponentModel:
    """基于累计计数的对手画像"""
    player_id: str
    stats: OpponentStats = field(default_factory=OpponentStats)
    config: DecisionConfig = field(default_factory=DecisionConfig)

    @property
    def vpip(self) -> float:
        """主动入池率（百分比）"""
        return self._percent(self.stats.vpip_count)

    @property
    def pfr(self) -> float:
        return self._percent(self.stats.pfr_count)

    @property
    def three_bet(self) -> float:
        return self._percent(self.stats.three_bet_count)

    @property
    def aggression_factor(self) -> float:
        """进攻次数 / 跟注次数；从不跟注时返回进攻次数本身"""
        if self.stats.passive_calls == 0:
            return float(self.stats.aggressive_actions)
        return self.stats.aggressive_actions / self.stats.passive_calls

    @property
    def confidence(self) -> float:
        return min(1.0, self.stats.hands / self.config.full_confidence_hands)

    @property
    def is_reliable(self) -> bool:
        return self.confidence >= self.config.model_confidence_gate

    @property
    def style(self) -> PlayerStyle:
        if self.stats.hands < self.config.min_hands_for_style:
            return PlayerStyle.UNKNOWN
        return classify_style(self.vpip, self.pfr, self.aggression_factor)

    def _percent(self, count: int) -> float:
        if self.stats.hands == 0:
            return 0.0
        return count / self.stats.hands * 100.0

    def summary(self) -> Optional[str]:
        if self.stats.hands == 0:
            return None
        return (f"{self.player_id}: VPIP {self.vpip:.0f}% PFR {self.pfr:.0f}% "
                f"AF {self.aggression_factor:.1f} ({self.style.value}, {self.stats.hands}手)")
