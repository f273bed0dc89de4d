"""
对手倾向剧本

在风格分类之外识别更细的倾向，每个倾向对应一个额外的策略调整。
"""

from enum import Enum
from typing import List

from ..types import StrategyAdjustment
from .model import OpponentModel

__all__ = ['Playbook', 'infer_playbooks', 'playbook_adjustment']


class Playbook(Enum):
    AGGRESSIVE = "aggressive"            # AF>3 且 VPIP>35：多做价值下注
    CALLING_STATION = "calling_station"  # AF<1.5 且 VPIP>40：放宽跟注
    TIGHT = "tight"                      # VPIP<20 且 AF>2.5：少诈唬
    LOOSE = "loose"                      # VPIP>45
    BLUFFY = "bluffy"                    # 3-bet>10 且 AF>2.5：多诈唬
    STANDARD = "standard"


_PLAYBOOK_ADJUSTMENTS = {
    Playbook.AGGRESSIVE: StrategyAdjustment(value_size_adjust=0.2),
    Playbook.CALLING_STATION: StrategyAdjustment(call_down_adjust=0.2),
    Playbook.TIGHT: StrategyAdjustment(bluff_freq_adjust=-0.2),
    Playbook.LOOSE: StrategyAdjustment.balanced(),
    Playbook.BLUFFY: StrategyAdjustment(bluff_freq_adjust=0.3),
    Playbook.STANDARD: StrategyAdjustment.balanced(),
}


def infer_playbooks(model: OpponentModel) -> List[Playbook]:
    """识别对手的全部倾向；一个都不满足时为 [STANDARD]"""
    vpip = model.vpip
    af = model.aggression_factor
    found = []
    if af > 3 and vpip > 35:
        found.append(Playbook.AGGRESSIVE)
    if af < 1.5 and vpip > 40:
        found.append(Playbook.CALLING_STATION)
    if vpip < 20 and af > 2.5:
        found.append(Playbook.TIGHT)
    if vpip > 45:
        found.append(Playbook.LOOSE)
    if model.three_bet > 10 and af > 2.5:
        found.append(Playbook.BLUFFY)
    return found or [Playbook.STANDARD]


def playbook_adjustment(model: OpponentModel) -> StrategyAdjustment:
    """所有倾向调整的合计"""
    total = StrategyAdjustment.balanced()
    for playbook in infer_playbooks(model):
        total = total.combine(_PLAYBOOK_ADJUSTMENTS[playbook])
    return total
