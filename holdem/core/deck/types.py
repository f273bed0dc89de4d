"""
花色与点数.
"""

from enum import Enum, IntEnum
from typing import Dict


class Suit(Enum):
    """
    扑克牌花色枚举.

    值为单字母缩写，与Card的字符串表示保持一致.
    """

    HEARTS = "H"      # 红桃
    DIAMONDS = "D"    # 方块
    CLUBS = "C"       # 梅花
    SPADES = "S"      # 黑桃

    @property
    def symbol(self) -> str:
        """返回花色的Unicode符号."""
        return _SUIT_SYMBOLS[self]


_SUIT_SYMBOLS: Dict[Suit, str] = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}


class Rank(IntEnum):
    """
    扑克牌点数枚举.

    数值2-14，A为14（最大）。A-2-3-4-5顺子由评估器特殊处理.
    """

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    @property
    def short_name(self) -> str:
        """返回点数的短名称，如 'A'、'10'、'7'."""
        return _RANK_NAMES[self]


_RANK_NAMES: Dict[Rank, str] = {
    Rank.TWO: "2", Rank.THREE: "3", Rank.FOUR: "4", Rank.FIVE: "5",
    Rank.SIX: "6", Rank.SEVEN: "7", Rank.EIGHT: "8", Rank.NINE: "9",
    Rank.TEN: "10", Rank.JACK: "J", Rank.QUEEN: "Q",
    Rank.KING: "K", Rank.ACE: "A",
}

