"""
德州扑克牌型评估器.

从2张手牌和0-5张公共牌中找出最佳的5张组合.
"""

from collections import Counter
from itertools import combinations
from typing import List, Optional, Sequence

from ..deck.card import Card, ensure_unique
from .types import HandCategory, HandResult


class HandEvaluator:
    """
    德州扑克牌型评估器.

    纯函数式、无状态：7张牌时穷举全部21种5张组合并取最大值.
    不足5张牌时（例如翻牌前）按"部分牌型"评估，只识别对子类牌型.

    Examples:
        >>> evaluator = HandEvaluator()
        >>> result = evaluator.evaluate(parse_cards("AH AS"), parse_cards("KH 7D 2C"))
        >>> result.category
        <HandCategory.ONE_PAIR: 1>
    """

    def evaluate(self, hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> HandResult:
        """
        评估给定牌的最佳牌型.

        Args:
            hole_cards: 玩家手牌（必须是2张）
            community_cards: 公共牌（0-5张）

        Returns:
            HandResult: 最佳牌型的评估结果

        Raises:
            TypeError: 当牌不是Card类型时
            ValueError: 当牌数不符合要求或存在重复牌时
        """
        if len(hole_cards) != 2:
            raise ValueError(f"手牌必须是2张，实际: {len(hole_cards)}")
        if len(community_cards) > 5:
            raise ValueError(f"公共牌不能超过5张，实际: {len(community_cards)}")

        all_cards = list(hole_cards) + list(community_cards)
        for i, card in enumerate(all_cards):
            if not isinstance(card, Card):
                raise TypeError(f"第{i}张牌必须是Card类型，实际: {type(card)}")
        ensure_unique(all_cards)

        return self.best_of(all_cards)

    def best_of(self, cards: Sequence[Card]) -> HandResult:
        """
        从任意张数（1-7）的牌中求最佳牌型，不做手牌数量检查.

        蒙特卡洛模拟直接调用此方法以省去重复校验.
        """
        if len(cards) < 5:
            return self._evaluate_partial(cards)
        if len(cards) == 5:
            return self._evaluate_five_cards(cards)

        best: Optional[HandResult] = None
        for five_cards in combinations(cards, 5):
            result = self._evaluate_five_cards(five_cards)
            if best is None or result.compare_to(best) > 0:
                best = result
        return best

    def compare_hands(self, hand1: HandResult, hand2: HandResult) -> int:
        """
        比较两个牌型的强弱.

        Returns:
            int: 1表示hand1更强，-1表示hand2更强，0表示相等
        """
        return hand1.compare_to(hand2)

    def _evaluate_five_cards(self, cards: Sequence[Card]) -> HandResult:
        """评估恰好5张牌的牌型."""
        ranks = sorted((card.rank.value for card in cards), reverse=True)
        rank_counts = Counter(ranks)
        # (次数, 点数) 降序：四条/三条/对子排在前面
        groups = sorted(((count, rank) for rank, count in rank_counts.items()), reverse=True)

        is_flush = len({card.suit for card in cards}) == 1
        straight_high = self._straight_high(ranks)

        if straight_high and is_flush:
            return HandResult(HandCategory.STRAIGHT_FLUSH, (straight_high,))

        if groups[0][0] == 4:
            return HandResult(HandCategory.FOUR_OF_A_KIND, (groups[0][1], groups[1][1]))

        if groups[0][0] == 3 and groups[1][0] == 2:
            return HandResult(HandCategory.FULL_HOUSE, (groups[0][1], groups[1][1]))

        if is_flush:
            return HandResult(HandCategory.FLUSH, tuple(ranks))

        if straight_high:
            return HandResult(HandCategory.STRAIGHT, (straight_high,))

        return self._grouped_result(groups)

    def _evaluate_partial(self, cards: Sequence[Card]) -> HandResult:
        """不足5张牌时只识别对子类牌型（无顺子、同花）."""
        rank_counts = Counter(card.rank.value for card in cards)
        groups = sorted(((count, rank) for rank, count in rank_counts.items()), reverse=True)
        if groups[0][0] == 4:
            return HandResult(HandCategory.FOUR_OF_A_KIND, (groups[0][1],))
        return self._grouped_result(groups)

    @staticmethod
    def _grouped_result(groups: List[tuple]) -> HandResult:
        top_count, top_rank = groups[0]
        singles = [rank for count, rank in groups if count == 1]

        if top_count == 3:
            if len(groups) > 1 and groups[1][0] >= 2:
                return HandResult(HandCategory.FULL_HOUSE, (top_rank, groups[1][1]))
            return HandResult(HandCategory.THREE_OF_A_KIND, (top_rank,) + tuple(singles[:2]))

        if top_count == 2:
            if len(groups) > 1 and groups[1][0] == 2:
                return HandResult(HandCategory.TWO_PAIR,
                                  (top_rank, groups[1][1]) + tuple(singles[:1]))
            return HandResult(HandCategory.ONE_PAIR, (top_rank,) + tuple(singles[:3]))

        return HandResult(HandCategory.HIGH_CARD, tuple(singles[:5]))

    @staticmethod
    def _straight_high(ranks: List[int]) -> int:
        """
        检查是否为顺子.

        Args:
            ranks: 5张牌的点数（降序）

        Returns:
            int: 顺子的最高牌，A-2-3-4-5返回5；不是顺子返回0
        """
        unique_ranks = sorted(set(ranks), reverse=True)
        if len(unique_ranks) != 5:
            return 0
        if unique_ranks[0] - unique_ranks[4] == 4:
            return unique_ranks[0]
        if unique_ranks == [14, 5, 4, 3, 2]:
            return 5
        return 0
