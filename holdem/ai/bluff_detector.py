"""
诈唬检测

根据下注者本手的行动序列、牌面结构与历史进攻性，估算其正在诈唬的概率。
每个信号贡献固定增量，总概率上限0.85；置信度随样本手数增长。
"""

import logging
import statistics
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..core.betting.betting_types import Street
from ..core.engine.types import TableSnapshot
from .analysis.board import BoardTexture
from .opponent.model import OpponentModel

__all__ = ['BluffEstimate', 'BluffDetector', 'MAX_BLUFF_PROBABILITY']

logger = logging.getLogger(__name__)

MAX_BLUFF_PROBABILITY = 0.85


@dataclass(frozen=True)
class BluffEstimate:
    """
    诈唬概率估计

    Attributes:
        probability: 诈唬概率[0, 0.85]
        confidence: 样本置信度[0, 1]
        signals: 触发的信号名称
    """
    probability: float = 0.0
    confidence: float = 0.0
    signals: Tuple[str, ...] = ()

    def is_usable(self, gate: float) -> bool:
        return self.confidence > gate


class BluffDetector:
    """
    诈唬信号：

    - 对手进攻因子 > 3：+0.20
    - 本手连续三次以上主动下注（三枪）：+0.25
    - 干燥牌面上下注：+0.15
    - 湿润牌面上两次以上下注：+0.10
    - 河牌超池下注（≥底池）：+0.20
    - 下注尺寸忽大忽小（变异系数 > 0.3）：+0.10
    """

    def __init__(self, full_confidence_hands: int = 30):
        if full_confidence_hands <= 0:
            raise ValueError("full_confidence_hands必须为正数")
        self._full_confidence_hands = full_confidence_hands

    def estimate(self, snapshot: TableSnapshot, bettor_id: str, board: BoardTexture,
                 model: Optional[OpponentModel] = None) -> BluffEstimate:
        """
        估计下注者的诈唬概率

        Args:
            snapshot: 牌桌快照
            bettor_id: 最后下注的对手
            board: 当前牌面结构
            model: 对手模型；没有模型时置信度为0
        """
        aggressive = [record for record in snapshot.history
                      if record.player_id == bettor_id and record.is_aggressive]
        if not aggressive:
            return BluffEstimate(confidence=self._confidence(model))

        barrel_streets = {record.street for record in aggressive}
        probability = 0.0
        signals: List[str] = []

        if model is not None and model.aggression_factor > 3.0:
            probability += 0.20
            signals.append("high_aggression")

        if len(barrel_streets) >= 3:
            probability += 0.25
            signals.append("triple_barrel")

        if board.is_dry:
            probability += 0.15
            signals.append("dry_board_bet")
        elif board.is_wet and len(barrel_streets) >= 2:
            probability += 0.10
            signals.append("wet_board_barrels")

        river_bets = [record for record in aggressive if record.street == Street.RIVER]
        if river_bets and river_bets[-1].pot_before > 0 and river_bets[-1].amount >= river_bets[-1].pot_before:
            probability += 0.20
            signals.append("river_overbet")

        ratios = [record.amount / record.pot_before for record in aggressive if record.pot_before > 0]
        if len(ratios) >= 2:
            mean = statistics.mean(ratios)
            if mean > 0 and statistics.pstdev(ratios) / mean > 0.3:
                probability += 0.10
                signals.append("inconsistent_sizing")

        estimate = BluffEstimate(
            probability=min(MAX_BLUFF_PROBABILITY, probability),
            confidence=self._confidence(model),
            signals=tuple(signals),
        )
        if signals:
            logger.debug(f"{bettor_id} 诈唬概率 {estimate.probability:.2f} "
                         f"(置信度 {estimate.confidence:.2f}): {', '.join(signals)}")
        return estimate

    def _confidence(self, model: Optional[OpponentModel]) -> float:
        if model is None:
            return 0.0
        return min(1.0, model.stats.hands / self._full_confidence_hands)
