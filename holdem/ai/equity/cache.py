"""
胜率结果缓存

缓存只在一手牌内有效：``begin_hand`` 传入新的手牌标识时自动清空。
缓存由调用方持有并注入计算器，不存在模块级单例。
"""

import logging
import threading
from typing import Dict, Optional, Sequence, Tuple

from ...core.deck.card import Card

__all__ = ['EquityCache', 'EquityKey', 'make_key']

logger = logging.getLogger(__name__)

EquityKey = Tuple[Tuple[str, ...], Tuple[str, ...], int]


def make_key(hole_cards: Sequence[Card], community: Sequence[Card], opponent_count: int) -> EquityKey:
    """手牌与公共牌各自排序，保证与顺序无关"""
    hole = tuple(sorted(str(card) for card in hole_cards))
    board = tuple(sorted(str(card) for card in community))
    return hole, board, opponent_count


class EquityCache:
    """线程安全的单手牌胜率缓存"""

    def __init__(self) -> None:
        self._entries: Dict[EquityKey, float] = {}
        self._hand_key: Optional[str] = None
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def begin_hand(self, hand_key: str) -> None:
        """进入新的一手牌；标识变化时清空缓存"""
        with self._lock:
            if hand_key != self._hand_key:
                if self._entries:
                    logger.debug(f"新的一手牌 {hand_key}，清空{len(self._entries)}条胜率缓存")
                self._entries.clear()
                self._hand_key = hand_key

    def get(self, key: EquityKey) -> Optional[float]:
        with self._lock:
            value = self._entries.get(key)
            if value is None:
                self.misses += 1
            else:
                self.hits += 1
            return value

    def put(self, key: EquityKey, equity: float) -> None:
        with self._lock:
            self._entries[key] = equity

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hand_key = None
            self.hits = 0
            self.misses = 0

    @property
    def hand_key(self) -> Optional[str]:
        return self._hand_key

    def __len__(self) -> int:
        return len(self._entries)
