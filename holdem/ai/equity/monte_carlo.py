"""
蒙特卡洛胜率估算

每次模拟从排除已知牌的新牌组中随机发出对手手牌并补齐公共牌，
统计胜、平、负。平局按同时获胜人数分摊收益。
"""

import logging
import random
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ...core.deck.card import Card, ensure_unique
from ...core.deck.deck import full_deck
from ...core.eval.evaluator import HandEvaluator
from ..analysis.draws import analyze_draws
from ..types import EquityConfig
from .cache import EquityCache, make_key

__all__ = ['EquityResult', 'EquityCalculator']

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EquityResult:
    """
    模拟统计结果

    Attributes:
        wins: 独赢次数
        tie_credit: 平局累计收益（每次平局得 1/同时获胜人数）
        ties: 平局次数
        losses: 落败次数
        iterations: 模拟次数
    """
    wins: int = 0
    tie_credit: float = 0.0
    ties: int = 0
    losses: int = 0
    iterations: int = 0

    @property
    def equity(self) -> float:
        if self.iterations == 0:
            return 0.0
        return (self.wins + self.tie_credit) / self.iterations

    def merge(self, other: 'EquityResult') -> 'EquityResult':
        return EquityResult(
            self.wins + other.wins,
            self.tie_credit + other.tie_credit,
            self.ties + other.ties,
            self.losses + other.losses,
            self.iterations + other.iterations,
        )


class EquityCalculator:
    """
    胜率计算器

    随机性全部来自注入的 ``random.Random``；并行时每个分块使用
    在分发前从主生成器抽取的种子，因此结果可复现。

    Examples:
        >>> calc = EquityCalculator(rng=random.Random(1))
        >>> calc.calculate_equity(parse_cards("AH AS"), [], 1, iterations=1000) > 0.8
        True
    """

    def __init__(self, config: Optional[EquityConfig] = None, rng: Optional[random.Random] = None,
                 evaluator: Optional[HandEvaluator] = None, cache: Optional[EquityCache] = None):
        self.config = config or EquityConfig()
        self._rng = rng or random.Random()
        self._evaluator = evaluator or HandEvaluator()
        self.cache = cache

    def calculate_equity(self, hole_cards: Sequence[Card], community: Sequence[Card],
                         opponent_count: int, iterations: Optional[int] = None) -> float:
        """
        估算胜率

        Args:
            hole_cards: 两张手牌
            community: 0-5张公共牌
            opponent_count: 仍在牌局中的对手数
            iterations: 模拟次数；None时按动态策略选择

        Returns:
            float: [0, 1]之间的胜率；没有对手时为1.0

        Raises:
            ValueError: 手牌/公共牌数量不对、牌重复、次数非正或剩余牌不足时
        """
        self._validate(hole_cards, community, opponent_count, iterations)
        if opponent_count == 0:
            return 1.0

        key = make_key(hole_cards, community, opponent_count)
        if self.cache is not None:
            cached = self.cache.get(key)
            if cached is not None:
                return cached

        if iterations is None:
            iterations = self.choose_iterations(hole_cards, community, opponent_count)

        result = self.simulate(hole_cards, community, opponent_count, iterations)
        equity = result.equity
        logger.debug(
            f"胜率 {' '.join(map(str, hole_cards))} | {' '.join(map(str, community)) or '-'} "
            f"vs {opponent_count}: {equity:.3f} ({iterations}次)"
        )

        if self.cache is not None:
            self.cache.put(key, equity)
        return equity

    def choose_iterations(self, hole_cards: Sequence[Card], community: Sequence[Card],
                          opponent_count: int) -> int:
        """
        动态选择模拟次数

        河牌减少次数；有听牌或试算胜率落在模糊区间时增加次数。
        """
        config = self.config
        if len(community) == 5:
            return config.clamp(config.river_iterations)
        if not community:
            return config.clamp(config.preflop_iterations)

        if analyze_draws(hole_cards, community).has_any_draw:
            return config.clamp(config.draw_iterations)

        pilot = self.simulate(hole_cards, community, opponent_count, config.min_iterations)
        if config.ambiguity_low <= pilot.equity <= config.ambiguity_high:
            return config.clamp(config.draw_iterations)
        return config.clamp(config.default_iterations)

    def simulate(self, hole_cards: Sequence[Card], community: Sequence[Card],
                 opponent_count: int, iterations: int) -> EquityResult:
        """运行模拟并返回原始统计；较大的次数按配置拆分到线程池"""
        self._validate(hole_cards, community, opponent_count, iterations)
        known = list(hole_cards) + list(community)
        remaining = [card for card in full_deck() if card not in known]

        workers = self.config.workers
        if workers <= 1 or iterations < self.config.parallel_threshold:
            return self._run_trials(hole_cards, community, opponent_count, iterations,
                                    remaining, self._rng)

        chunk_sizes = [iterations // workers] * workers
        for i in range(iterations % workers):
            chunk_sizes[i] += 1
        seeds = [self._rng.getrandbits(64) for _ in chunk_sizes]

        total = EquityResult()
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(self._run_trials, hole_cards, community, opponent_count, size,
                                remaining, random.Random(seed))
                for size, seed in zip(chunk_sizes, seeds) if size > 0
            ]
            for future in futures:
                total = total.merge(future.result())
        return total

    def _run_trials(self, hole_cards: Sequence[Card], community: Sequence[Card],
                    opponent_count: int, iterations: int, remaining: List[Card],
                    rng: random.Random) -> EquityResult:
        board_needed = 5 - len(community)
        cards_needed = opponent_count * 2 + board_needed
        wins = ties = losses = 0
        tie_credit = 0.0

        for _ in range(iterations):
            drawn = rng.sample(remaining, cards_needed)
            board = list(community) + drawn[opponent_count * 2:]
            mine = self._evaluator.best_of(list(hole_cards) + board)

            beaten = False
            tied = 0
            for i in range(opponent_count):
                theirs = self._evaluator.best_of(drawn[i * 2:i * 2 + 2] + board)
                comparison = mine.compare_to(theirs)
                if comparison < 0:
                    beaten = True
                    break
                if comparison == 0:
                    tied += 1

            if beaten:
                losses += 1
            elif tied:
                ties += 1
                tie_credit += 1.0 / (tied + 1)
            else:
                wins += 1

        return EquityResult(wins, tie_credit, ties, losses, iterations)

    @staticmethod
    def _validate(hole_cards: Sequence[Card], community: Sequence[Card],
                  opponent_count: int, iterations: Optional[int]) -> None:
        if len(hole_cards) != 2:
            raise ValueError(f"手牌必须是2张，实际: {len(hole_cards)}")
        if len(community) > 5:
            raise ValueError(f"公共牌不能超过5张，实际: {len(community)}")
        if opponent_count < 0:
            raise ValueError(f"对手数不能为负数: {opponent_count}")
        if iterations is not None and iterations <= 0:
            raise ValueError(f"模拟次数必须为正数: {iterations}")
        ensure_unique(list(hole_cards) + list(community))

        needed = opponent_count * 2 + (5 - len(community))
        available = 52 - len(hole_cards) - len(community)
        if needed > available:
            raise ValueError(f"剩余牌不足：需要{needed}张，只有{available}张")
