"""
听牌分析

只在翻牌和转牌阶段有意义；河牌之后没有听牌。
"""

from collections import Counter
from dataclasses import dataclass
from typing import Sequence

from ...core.deck.card import Card

__all__ = ['DrawInfo', 'analyze_draws', 'FLUSH_DRAW_OUTS', 'OESD_OUTS', 'GUTSHOT_OUTS']

FLUSH_DRAW_OUTS = 9
OESD_OUTS = 8
GUTSHOT_OUTS = 4


@dataclass(frozen=True)
class DrawInfo:
    """
    听牌信息

    Attributes:
        has_flush_draw: 同花听牌（四张同花）
        has_oesd: 两头顺听牌
        has_gutshot: 卡顺听牌
        outs: 估算的有效出牌数（组合听牌扣除重叠的1张）
    """
    has_flush_draw: bool = False
    has_oesd: bool = False
    has_gutshot: bool = False
    outs: int = 0

    @property
    def has_straight_draw(self) -> bool:
        return self.has_oesd or self.has_gutshot

    @property
    def is_combo_draw(self) -> bool:
        return self.has_flush_draw and self.has_straight_draw

    @property
    def has_any_draw(self) -> bool:
        return self.has_flush_draw or self.has_straight_draw


def analyze_draws(hole_cards: Sequence[Card], community: Sequence[Card]) -> DrawInfo:
    """
    分析手牌加公共牌的听牌情况

    Args:
        hole_cards: 两张手牌
        community: 公共牌

    Returns:
        DrawInfo: 公共牌少于3张或已满5张时返回空的听牌信息
    """
    if len(community) < 3 or len(community) >= 5:
        return DrawInfo()

    cards = list(hole_cards) + list(community)

    suit_counts = Counter(card.suit for card in cards)
    has_flush_draw = max(suit_counts.values()) == 4

    ranks = {int(card.rank) for card in cards}
    if 14 in ranks:
        ranks.add(1)

    has_oesd = False
    has_gutshot = False
    # 检查每个5连窗口中恰好缺一张的情况
    for low in range(1, 11):
        window = range(low, low + 5)
        missing = [rank for rank in window if rank not in ranks]
        if len(missing) != 1:
            continue
        if missing[0] in (window[0], window[-1]) and low != 1 and low != 10:
            has_oesd = True
        else:
            has_gutshot = True

    if has_oesd:
        has_gutshot = False

    straight_outs = OESD_OUTS if has_oesd else GUTSHOT_OUTS if has_gutshot else 0
    flush_outs = FLUSH_DRAW_OUTS if has_flush_draw else 0
    overlap = 1 if flush_outs and straight_outs else 0

    return DrawInfo(
        has_flush_draw=has_flush_draw,
        has_oesd=has_oesd,
        has_gutshot=has_gutshot,
        outs=flush_outs + straight_outs - overlap,
    )
