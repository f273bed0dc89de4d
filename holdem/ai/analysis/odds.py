"""
底池赔率与期望值计算
"""

from ...core.betting.betting_types import Street

__all__ = ['pot_odds', 'call_ev', 'raise_ev', 'implied_odds', 'is_positive_ev', 'stack_to_pot_ratio']


def pot_odds(call_amount: int, pot: int) -> float:
    """
    跟注所需的胜率

    Returns:
        float: call / (pot + call)；无需跟注时为0
    """
    if call_amount <= 0:
        return 0.0
    return call_amount / (pot + call_amount)


def call_ev(equity: float, pot: int, call_amount: int) -> float:
    """跟注的期望值：eq·pot − (1−eq)·call"""
    return equity * pot - (1.0 - equity) * call_amount


def raise_ev(equity: float, pot: int, raise_amount: int, call_probability: float = 0.5) -> float:
    """
    加注的期望值（包含弃牌收益）

    Args:
        equity: 被跟注时的胜率
        pot: 当前底池
        raise_amount: 加注投入
        call_probability: 对手跟注的概率
    """
    fold_part = (1.0 - call_probability) * pot
    called_part = call_probability * (
        equity * (pot + 2 * raise_amount) - (1.0 - equity) * raise_amount
    )
    return fold_part + called_part


def stack_to_pot_ratio(stack: int, pot: int) -> float:
    if pot <= 0:
        return float('inf')
    return stack / pot


def implied_odds(street: Street, spr: float) -> float:
    """
    隐含赔率加成

    翻牌: SPR>10 → 0.15，>5 → 0.08；转牌: SPR>8 → 0.10，>4 → 0.05；河牌没有隐含赔率。
    """
    if street == Street.FLOP:
        if spr > 10:
            return 0.15
        if spr > 5:
            return 0.08
    elif street == Street.TURN:
        if spr > 8:
            return 0.10
        if spr > 4:
            return 0.05
    return 0.0


def is_positive_ev(equity: float, call_amount: int, pot: int, implied: float = 0.0) -> bool:
    return equity + implied > pot_odds(call_amount, pot)
