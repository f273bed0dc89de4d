"""
德州扑克牌型评估相关类型定义.

定义牌型类别、评估结果等核心数据结构.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence, Tuple

from ..deck.types import Rank


class HandCategory(IntEnum):
    """
    德州扑克牌型类别.

    数值0-8，越大越强。皇家同花顺只是A高的同花顺，不单独成类.
    """

    HIGH_CARD = 0          # 高牌
    ONE_PAIR = 1           # 一对
    TWO_PAIR = 2           # 两对
    THREE_OF_A_KIND = 3    # 三条
    STRAIGHT = 4           # 顺子
    FLUSH = 5              # 同花
    FULL_HOUSE = 6         # 葫芦
    FOUR_OF_A_KIND = 7     # 四条
    STRAIGHT_FLUSH = 8     # 同花顺

    @property
    def display_name(self) -> str:
        return _CATEGORY_NAMES[self]


_CATEGORY_NAMES = {
    HandCategory.HIGH_CARD: "高牌",
    HandCategory.ONE_PAIR: "一对",
    HandCategory.TWO_PAIR: "两对",
    HandCategory.THREE_OF_A_KIND: "三条",
    HandCategory.STRAIGHT: "顺子",
    HandCategory.FLUSH: "同花",
    HandCategory.FULL_HOUSE: "葫芦",
    HandCategory.FOUR_OF_A_KIND: "四条",
    HandCategory.STRAIGHT_FLUSH: "同花顺",
}


def compare_kickers(mine: Sequence[int], theirs: Sequence[int]) -> int:
    """
    按字典序比较两组踢脚牌.

    只比较两者共同长度的前缀；前缀完全相同视为平局.

    Returns:
        int: 1表示mine更大，-1表示更小，0表示相等
    """
    for my_kicker, other_kicker in zip(mine, theirs):
        if my_kicker != other_kicker:
            return 1 if my_kicker > other_kicker else -1
    return 0


@dataclass(frozen=True)
class HandResult:
    """
    牌型评估结果.

    Attributes:
        category: 牌型类别
        kickers: 按比较优先级降序排列的点数序列。
            顺子/同花顺只有最高牌（A-2-3-4-5为5）；四条为(四条点数, 踢脚)；
            葫芦为(三条点数, 对子点数)；同花与高牌为全部5张点数；
            三条为(三条点数, 踢脚, 踢脚)；两对为(大对, 小对, 踢脚)；
            一对为(对子点数, 三张踢脚)

    Examples:
        >>> result = HandResult(HandCategory.ONE_PAIR, (14, 13, 12, 11))
        >>> result.category
        <HandCategory.ONE_PAIR: 1>
        >>> str(result)
        '一对(A)'
    """

    category: HandCategory
    kickers: Tuple[int, ...] = ()

    def __post_init__(self) -> None:
        """
        验证评估结果的有效性.

        Raises:
            TypeError: 当牌型类别类型无效时
            ValueError: 当踢脚牌点数越界时
        """
        if not isinstance(self.category, HandCategory):
            raise TypeError(f"牌型类别必须是HandCategory类型，实际: {type(self.category)}")
        for kicker in self.kickers:
            if kicker < 2 or kicker > 14:
                raise ValueError(f"无效的踢脚牌值: {kicker}")

    def compare_to(self, other: 'HandResult') -> int:
        """
        比较两个牌型的强弱：先比类别，再按字典序比较踢脚牌.

        Args:
            other: 另一个牌型评估结果

        Returns:
            int: 1表示当前牌型更强，-1表示更弱，0表示相等

        Raises:
            TypeError: 当other不是HandResult类型时
        """
        if not isinstance(other, HandResult):
            raise TypeError(f"比较对象必须是HandResult类型，实际: {type(other)}")
        if self.category != other.category:
            return 1 if self.category > other.category else -1
        return compare_kickers(self.kickers, other.kickers)

    def __lt__(self, other: 'HandResult') -> bool:
        if not isinstance(other, HandResult):
            return NotImplemented
        return self.compare_to(other) < 0

    @property
    def high_value(self) -> int:
        """类别内最重要的点数（没有踢脚牌时为0）."""
        return self.kickers[0] if self.kickers else 0

    def __str__(self) -> str:
        name = _CATEGORY_NAMES[self.category]
        if not self.kickers:
            return name

        def short(value: int) -> str:
            return Rank(value).short_name

        if self.category == HandCategory.STRAIGHT_FLUSH and self.kickers[0] == 14:
            return "皇家同花顺"
        if self.category == HandCategory.TWO_PAIR:
            return f"{name}({short(self.kickers[0])}和{short(self.kickers[1])})"
        if self.category == HandCategory.FULL_HOUSE:
            return f"{name}({short(self.kickers[0])}带{short(self.kickers[1])})"
        if self.category in (HandCategory.STRAIGHT, HandCategory.STRAIGHT_FLUSH,
                             HandCategory.FLUSH, HandCategory.HIGH_CARD):
            return f"{name}({short(self.kickers[0])}高)"
        return f"{name}({short(self.kickers[0])})"
