"""
公共牌面结构分析
"""

from collections import Counter
from dataclasses import dataclass
from typing import Sequence

from ...core.deck.card import Card

__all__ = ['BoardTexture', 'analyze_board_texture']


@dataclass(frozen=True)
class BoardTexture:
    """
    牌面结构

    Attributes:
        wetness: 湿润程度[0, 1]，越大听牌越多
        is_paired: 公共牌有对子
        is_monotone: 同一花色至少三张
        is_two_tone: 恰好两种花色
        has_high_cards: 有Q及以上的牌
        connectivity: 两两点数相差不超过4的比例
    """
    wetness: float = 0.0
    is_paired: bool = False
    is_monotone: bool = False
    is_two_tone: bool = False
    has_high_cards: bool = False
    connectivity: float = 0.0

    @property
    def is_dry(self) -> bool:
        return self.wetness < 0.3

    @property
    def is_wet(self) -> bool:
        return self.wetness > 0.7


def analyze_board_texture(community: Sequence[Card]) -> BoardTexture:
    """
    分析牌面的湿润程度

    同花面+0.40（两色+0.15），连接度×0.35，公共对子-0.10，结果限定在[0, 1]。
    """
    if not community:
        return BoardTexture()

    suit_counts = Counter(card.suit for card in community)
    is_monotone = max(suit_counts.values()) >= 3
    is_two_tone = len(suit_counts) == 2

    ranks = sorted(int(card.rank) for card in community)
    is_paired = len(set(ranks)) < len(ranks)
    has_high_cards = any(rank >= 12 for rank in ranks)

    pairs = 0
    connected = 0
    for i in range(len(ranks)):
        for j in range(i + 1, len(ranks)):
            pairs += 1
            if ranks[j] - ranks[i] <= 4:
                connected += 1
    connectivity = connected / pairs if pairs else 0.0

    wetness = 0.0
    if is_monotone:
        wetness += 0.40
    elif is_two_tone:
        wetness += 0.15
    wetness += connectivity * 0.35
    if is_paired:
        wetness -= 0.10

    return BoardTexture(
        wetness=max(0.0, min(1.0, wetness)),
        is_paired=is_paired,
        is_monotone=is_monotone,
        is_two_tone=is_two_tone,
        has_high_cards=has_high_cards,
        connectivity=connectivity,
    )
