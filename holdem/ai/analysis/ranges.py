"""
对手手牌范围估计

范围用宽度表示：0.0 为空范围，1.0 为全部起手牌。翻牌前按位置给出开池、
3-bet 与跟注3-bet范围，翻牌后按对手的行动逐步收窄。
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict

from .board import BoardTexture

__all__ = [
    'RangeAction', 'HandRange',
    'opening_range', 'three_bet_range', 'call_three_bet_range',
    'estimate_range', 'narrow_range',
    'open_chen_threshold', 'three_bet_chen_threshold',
    'OPEN_CHEN_SCALE', 'THREE_BET_CHEN_SCALE', 'WIDE_RANGE',
]

OPEN_CHEN_SCALE = 20.0
THREE_BET_CHEN_SCALE = 15.0

# 宽度不低于该值时，范围里仍有足够多的诈唬和边缘牌
WIDE_RANGE = 0.25


class RangeAction(Enum):
    """用于估计范围的行动"""
    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    BET = "bet"
    RAISE = "raise"
    THREE_BET = "3bet"
    FOUR_BET = "4bet"


@dataclass(frozen=True)
class HandRange:
    """
    估计的手牌范围

    Attributes:
        position: 位置名称，见 ``position_name``
        action: 得出该范围的行动
        width: 范围宽度[0, 1]
        description: 范围描述，收窄时追加
    """
    position: str
    action: RangeAction
    width: float
    description: str = ""

    @property
    def is_empty(self) -> bool:
        return self.width <= 0.0

    @property
    def is_wide(self) -> bool:
        return self.width >= WIDE_RANGE


# 8人桌开池范围宽度
_OPENING_WIDTHS: Dict[str, float] = {
    "UTG": 0.14,
    "MP": 0.20,
    "HJ": 0.25,
    "CO": 0.30,
    "BTN": 0.42,
    "SB": 0.30,
    "BB": 0.45,
    "BTN/SB": 0.42,
}

_OPENING_DESCRIPTIONS: Dict[str, str] = {
    "UTG": "88+,ATs+,KQs,AJo+",
    "MP": "66+,A8s+,K9s+,Q9s+,J9s+,T9s,ATo,KTo+",
    "HJ": "55+,A7s+,K8s+,Q8s+,J8s+,T8s+,97s+,ATo,KTo+,QJo",
    "CO": "44+,A5s+,K7s+,Q7s+,J7s+,T7s+,87s,ATo,KTo+,QJo,JTo",
    "BTN": "22+,A2s+,K2s+,Q2s+,J2s+,T2s+,82s+,72s+,A2o+,K2o+,Q2o+,J2o+,T2o+",
    "SB": "55+,A2s+,K6s+,Q6s+,J7s+,T7s+,87s,ATo,KTo+,QJo",
    "BB": "大盲防守范围",
    "BTN/SB": "22+,A2s+,K2s+,Q2s+,J2s+,T2s+,A2o+,K5o+,Q8o+,J8o+,T8o+",
}

# 估计对手开池范围时使用的Chen门槛
_OPEN_CHEN_BY_POSITION: Dict[str, float] = {
    "UTG": 7.0,
    "MP": 6.0,
    "HJ": 5.0,
    "CO": 4.0,
    "BTN": 3.0,
    "SB": 4.5,
    "BB": 2.0,
    "BTN/SB": 3.0,
}


def opening_range(position: str) -> HandRange:
    """
    某位置的开池加注范围

    未知位置按中间位置处理。

    Examples:
        >>> opening_range("UTG").width
        0.14
    """
    width = _OPENING_WIDTHS.get(position, _OPENING_WIDTHS["MP"])
    description = _OPENING_DESCRIPTIONS.get(position, _OPENING_DESCRIPTIONS["MP"])
    return HandRange(position, RangeAction.RAISE, width, description)


def three_bet_range(position: str, in_position: bool) -> HandRange:
    """面对开池时的3-bet范围，有位置时更宽"""
    if in_position:
        return HandRange(position, RangeAction.THREE_BET, 0.12, "88+,A9s+,KQs,QJs,JTs,T9s,ATo,KJo+,QJo")
    return HandRange(position, RangeAction.THREE_BET, 0.08, "TT+,AQs+,KQs,QJs,ATo,KJo+")


def call_three_bet_range(position: str, in_position: bool) -> HandRange:
    """面对开池时的跟注范围"""
    if in_position:
        return HandRange(position, RangeAction.CALL, 0.15, "77+,A9s+,K9s+,Q9s+,J9s+,T9s,ATo,KJo+")
    return HandRange(position, RangeAction.CALL, 0.10, "88+,A9s+,KQs,ATo,KJo+")


def open_chen_threshold(hand_range: HandRange) -> float:
    """
    把开池范围宽度换算为Chen门槛

    门槛随宽度减小：UTG(0.14) -> 7.2，BTN(0.42) -> 1.6。
    """
    return max(0.0, (0.5 - hand_range.width) * OPEN_CHEN_SCALE)


def three_bet_chen_threshold(hand_range: HandRange) -> float:
    """把3-bet或跟注3-bet范围宽度换算为Chen门槛，0.12 -> 7.2"""
    return max(0.0, (0.6 - hand_range.width) * THREE_BET_CHEN_SCALE)


def estimate_range(position: str, action: RangeAction, facing_raise: bool = False) -> HandRange:
    """
    根据位置和翻牌前行动估计对手范围

    Args:
        position: 对手位置名称
        action: 对手的翻牌前行动
        facing_raise: 对手行动时是否面对加注

    Returns:
        HandRange: 估计的范围；开池加注的宽度为 1 - Chen门槛/10
    """
    if action == RangeAction.FOLD:
        return HandRange(position, action, 0.0, "已弃牌")
    if action == RangeAction.CALL:
        if facing_raise:
            return HandRange(position, action, 0.15, "跟注加注：22-99，同花连牌")
        return HandRange(position, action, 0.25, "平跟：小对子，同花牌，连牌")
    if action == RangeAction.THREE_BET:
        return HandRange(position, action, 0.15, "3-bet：QQ+，AK，AQs，少量诈唬")
    if action == RangeAction.FOUR_BET:
        return HandRange(position, action, 0.05, "4-bet：QQ+，AKs")
    if action in (RangeAction.RAISE, RangeAction.BET):
        threshold = _OPEN_CHEN_BY_POSITION.get(position)
        if threshold is None:
            return HandRange(position, RangeAction.RAISE, 0.20, "加注：未知位置")
        width = 1.0 - threshold / 10.0
        return HandRange(position, RangeAction.RAISE, width,
                         f"{position} 开池加注：Chen >= {threshold:.1f} (~{width:.0%})")
    return HandRange(position, action, 1.0, "过牌：任意两张")


def narrow_range(hand_range: HandRange, action: RangeAction, board: BoardTexture) -> HandRange:
    """
    按翻牌后的行动收窄范围

    湿润牌面上下注 x0.85，干燥牌面 x0.95，过牌 x0.70，加注 x0.50，跟注 x0.75，弃牌清空。
    """
    if action == RangeAction.FOLD:
        return replace(hand_range, action=action, width=0.0, description="已弃牌")
    if action == RangeAction.BET:
        if board.wetness > 0.6:
            factor, note = 0.85, "湿润牌面下注"
        else:
            factor, note = 0.95, "干燥牌面下注（可能诈唬）"
    elif action == RangeAction.CHECK:
        factor, note = 0.70, "过牌"
    elif action in (RangeAction.RAISE, RangeAction.THREE_BET, RangeAction.FOUR_BET):
        factor, note = 0.50, "加注（强牌或听牌）"
    else:
        factor, note = 0.75, "跟注（中等牌力）"
    return replace(hand_range, action=action, width=hand_range.width * factor,
                   description=f"{hand_range.description} -> {note}")
