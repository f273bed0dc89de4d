"""
扑克牌组管理.

定义Deck类，提供标准52张牌的洗牌、烧牌、发牌功能.
同一手牌内保证不会重复发出任何一张牌.
"""

import random
from typing import Iterable, List, Optional

from .card import Card
from .types import Suit, Rank


def full_deck() -> List[Card]:
    """按固定顺序返回完整的52张牌."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


class Deck:
    """
    表示一副扑克牌.

    使用可选的随机数生成器以支持确定性测试；每手牌开始前调用 ``reset``
    并 ``shuffle``.

    Attributes:
        _cards: 当前牌组中剩余的牌，列表末尾为牌顶
        _dealt: 本手牌已发出（含烧牌）的牌
        _rng: 随机数生成器

    Examples:
        >>> deck = Deck(random.Random(7))
        >>> deck.shuffle()
        >>> hole = deck.deal_cards(2)
        >>> len(deck)
        50
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        """
        初始化牌组.

        Args:
            rng: 随机数生成器，用于洗牌。为None时使用新的 ``random.Random()``
        """
        self._rng = rng or random.Random()
        self._cards: List[Card] = []
        self._dealt: List[Card] = []
        self.reset()

    @classmethod
    def stacked(cls, top_cards: Iterable[Card], rng: Optional[random.Random] = None) -> 'Deck':
        """
        构造一副"叠好"的牌组：``top_cards`` 按顺序最先发出，其余牌随机排在后面.

        主要用于测试中复现特定牌面.

        Args:
            top_cards: 需要最先发出的牌（按发牌顺序）
            rng: 用于打乱剩余牌的随机数生成器

        Raises:
            ValueError: 当top_cards中有重复牌时
        """
        deck = cls(rng)
        ordered = list(top_cards)
        if len(set(ordered)) != len(ordered):
            raise ValueError("叠牌中存在重复的牌")
        deck.shuffle()
        chosen = set(ordered)
        rest = [card for card in deck._cards if card not in chosen]
        deck._cards = rest + list(reversed(ordered))
        return deck

    def reset(self) -> None:
        """重置牌组为完整的52张牌，并清空已发牌记录."""
        self._cards = full_deck()
        self._dealt = []

    def shuffle(self) -> None:
        """使用注入的随机数生成器打乱剩余的牌."""
        self._rng.shuffle(self._cards)

    def remove(self, cards: Iterable[Card]) -> None:
        """
        从牌组中移除已知的牌（例如蒙特卡洛模拟中的手牌和公共牌）.

        Raises:
            ValueError: 当某张牌已不在牌组中时
        """
        for card in cards:
            try:
                self._cards.remove(card)
            except ValueError:
                raise ValueError(f"牌 {card} 不在牌组中") from None

    def burn(self) -> Card:
        """烧掉牌顶的一张牌."""
        return self.deal_card()

    def deal_card(self) -> Card:
        """
        发一张牌.

        Raises:
            IndexError: 当牌组为空时
        """
        if not self._cards:
            raise IndexError("牌组已空，无法发牌")
        card = self._cards.pop()
        self._dealt.append(card)
        return card

    def deal_cards(self, count: int) -> List[Card]:
        """
        发多张牌.

        Args:
            count: 要发的牌数

        Raises:
            ValueError: 当count为负数时
            IndexError: 当牌组中的牌不足时
        """
        if count < 0:
            raise ValueError(f"发牌数量不能为负数: {count}")
        if count > len(self._cards):
            raise IndexError(f"剩余{len(self._cards)}张牌，不足以发出{count}张")
        return [self.deal_card() for _ in range(count)]

    @property
    def dealt_cards(self) -> List[Card]:
        """本手牌已发出的牌（副本）."""
        return list(self._dealt)

    @property
    def cards_remaining(self) -> int:
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck(cards_remaining={len(self._cards)})"
