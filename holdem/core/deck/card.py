"""
扑克牌数据结构.

定义不可变的Card类，以及从字符串批量解析牌的辅助函数.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List

from .types import Suit, Rank

_RANK_PARSE: Dict[str, Rank] = {rank.short_name: rank for rank in Rank}
_RANK_PARSE["T"] = Rank.TEN


@dataclass(frozen=True)
class Card:
    """
    表示一张扑克牌.

    不可变值类型：相同点数和花色的两张牌相等且哈希一致，可放入集合去重.

    Attributes:
        rank: 点数（2-14）
        suit: 花色

    Examples:
        >>> card = Card(Rank.ACE, Suit.HEARTS)
        >>> str(card)
        'AH'
        >>> Card.from_str("Td").rank
        <Rank.TEN: 10>
    """

    rank: Rank
    suit: Suit

    def __post_init__(self) -> None:
        if not isinstance(self.rank, Rank):
            raise TypeError(f"rank应为Rank，收到{type(self.rank).__name__}")
        if not isinstance(self.suit, Suit):
            raise TypeError(f"suit应为Suit，收到{type(self.suit).__name__}")

    def __str__(self) -> str:
        return f"{self.rank.short_name}{self.suit.value}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @classmethod
    def from_str(cls, card_str: str) -> 'Card':
        """
        解析"点数+花色"，如"AH"、"10d"、"Ts"，大小写不敏感.

        Raises:
            TypeError: 输入不是字符串
            ValueError: 点数或花色无法识别
        """
        if not isinstance(card_str, str):
            raise TypeError(f"牌面应为字符串，收到{type(card_str).__name__}")

        text = card_str.strip()
        if len(text) < 2:
            raise ValueError(f"牌面过短: {card_str!r}")

        rank_str, suit_str = text[:-1].upper(), text[-1].upper()
        if rank_str not in _RANK_PARSE:
            raise ValueError(f"无效的点数: {rank_str}")
        try:
            suit = Suit(suit_str)
        except ValueError:
            raise ValueError(f"无效的花色: {suit_str}") from None

        return cls(_RANK_PARSE[rank_str], suit)

    def __lt__(self, other: 'Card') -> bool:
        """按点数比较大小，花色不参与比较."""
        if not isinstance(other, Card):
            return NotImplemented
        return self.rank < other.rank


def parse_cards(text: str) -> List[Card]:
    """
    解析以空格分隔的多张牌.

    Args:
        text: 如 "AH KD 10C"

    Returns:
        List[Card]: 解析后的牌列表（保持顺序）
    """
    return [Card.from_str(token) for token in text.split()]


def ensure_unique(cards: Iterable[Card]) -> None:
    """
    检查一组牌没有重复.

    Raises:
        ValueError: 当存在重复的牌时
    """
    seen = set()
    for card in cards:
        if card in seen:
            raise ValueError(f"重复的牌: {card}")
        seen.add(card)
