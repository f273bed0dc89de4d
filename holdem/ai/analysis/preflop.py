"""
翻牌前手牌强度

使用Chen公式给起手牌打分，并归一化到[0, 1]以便与AI的入池门槛比较。
"""

from typing import Sequence

from ...core.deck.card import Card

__all__ = ['chen_formula', 'chen_to_normalized', 'PREMIUM_CHEN', 'STRONG_CHEN']

PREMIUM_CHEN = 10.0  # AA, KK, QQ, AKs, AKo
STRONG_CHEN = 7.0    # JJ, TT, AQs, AJs, KQs

_HIGH_CARD_POINTS = {14: 10.0, 13: 8.0, 12: 7.0, 11: 6.0}
_GAP_PENALTY = {1: 0.0, 2: 1.0, 3: 2.0, 4: 4.0}


def chen_formula(cards: Sequence[Card]) -> float:
    """
    计算Chen分数

    规则：最高牌A=10、K=8、Q=7、J=6，其余为点数的一半；对子翻倍且最少5分；
    同花+2；间隔扣分0/1/2/4/5；两张牌都小于Q且间隔不超过2时+1；最低-1.5。

    Args:
        cards: 两张手牌

    Returns:
        float: Chen分数，范围[-1.5, 20]

    Raises:
        ValueError: 手牌不是两张时

    Examples:
        >>> chen_formula(parse_cards("AH AS"))
        20.0
        >>> chen_formula(parse_cards("7H 2C"))
        -1.5
    """
    if len(cards) != 2:
        raise ValueError(f"Chen公式需要两张手牌，实际: {len(cards)}")

    high = max(int(cards[0].rank), int(cards[1].rank))
    low = min(int(cards[0].rank), int(cards[1].rank))
    score = _HIGH_CARD_POINTS.get(high, high / 2.0)

    if high == low:
        return max(5.0, score * 2.0)

    if cards[0].suit == cards[1].suit:
        score += 2.0

    gap = high - low
    score -= _GAP_PENALTY.get(gap, 5.0)

    if gap <= 2 and high < 12:
        score += 1.0

    return max(-1.5, score)


def chen_to_normalized(chen: float) -> float:
    """把Chen分数映射到[0, 1]"""
    return max(0.0, min(1.0, (chen + 1.5) / 21.5))
