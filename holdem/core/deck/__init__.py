"""
德州扑克牌组管理模块.

提供Card和Deck类，实现扑克牌的基本操作和牌组管理功能.
"""

from .types import Suit, Rank
from .card import Card, parse_cards, ensure_unique
from .deck import Deck, full_deck

__all__ = ['Suit', 'Rank', 'Card', 'Deck', 'parse_cards', 'ensure_unique', 'full_deck']
