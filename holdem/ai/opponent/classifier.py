"""
对手风格分类

| 风格 | VPIP      | PFR      | AF      |
|------|-----------|----------|---------|
| rock | < 20      | < 15     | > 2.5   |
| fish | > 45      | < 15     | < 1.5   |
| lag  | 30 - 45   | 25 - 35  | >= 3    |
| tag  | 20 - 30   | 15 - 25  | 2 - 3   |

不满足任何一行时按VPIP兜底：< 25 视为tag，> 40 视为fish，其余也视为tag。
"""

from typing import Dict

from ..types import PlayerStyle, StrategyAdjustment

__all__ = ['classify_style', 'strategy_adjustment', 'STYLE_ADJUSTMENTS']


STYLE_ADJUSTMENTS: Dict[PlayerStyle, StrategyAdjustment] = {
    # 对石头多偷盲，少诈唬，价值下注缩小，少跟注
    PlayerStyle.ROCK: StrategyAdjustment(0.30, -0.50, -0.25, -0.30),
    PlayerStyle.TAG: StrategyAdjustment.balanced(),
    PlayerStyle.LAG: StrategyAdjustment(-0.10, -0.30, 0.30, 0.20),
    # 对鱼几乎不诈唬，价值下注放大
    PlayerStyle.FISH: StrategyAdjustment(0.0, -0.70, 0.40, -0.20),
    PlayerStyle.UNKNOWN: StrategyAdjustment.balanced(),
}


def classify_style(vpip: float, pfr: float, aggression_factor: float) -> PlayerStyle:
    """
    按固定阈值分类

    Args:
        vpip: 主动入池率（百分比）
        pfr: 翻牌前加注率（百分比）
        aggression_factor: 进攻因子

    Returns:
        PlayerStyle: 没有任何入池记录时为UNKNOWN
    """
    if vpip == 0 and pfr == 0:
        return PlayerStyle.UNKNOWN

    if vpip < 20 and pfr < 15 and aggression_factor > 2.5:
        return PlayerStyle.ROCK
    if vpip > 45 and pfr < 15 and aggression_factor < 1.5:
        return PlayerStyle.FISH
    if 30 <= vpip <= 45 and 25 <= pfr <= 35 and aggression_factor >= 3:
        return PlayerStyle.LAG
    if 20 <= vpip <= 30 and 15 <= pfr <= 25 and 2 <= aggression_factor <= 3:
        return PlayerStyle.TAG

    if vpip < 25:
        return PlayerStyle.TAG
    if vpip > 40:
        return PlayerStyle.FISH
    return PlayerStyle.TAG


def strategy_adjustment(style: PlayerStyle) -> StrategyAdjustment:
    return STYLE_ADJUSTMENTS[style]
