"""
牌分发一致性检查器
"""

from typing import Iterable

from ..deck.card import Card
from .base_checker import BaseInvariantChecker
from .types import InvariantType

__all__ = ['CardDistributionChecker']


class CardDistributionChecker(BaseInvariantChecker):
    """同一手牌内任何一张牌最多出现一次（手牌、公共牌、烧牌）"""

    def __init__(self):
        super().__init__(InvariantType.CARD_DISTRIBUTION)

    def _perform_check(self, cards: Iterable[Card]) -> bool:
        seen = set()
        for card in cards:
            if card in seen:
                self._create_violation(f"牌{card}被重复发出", card=str(card))
            seen.add(card)
        return not self._violations
