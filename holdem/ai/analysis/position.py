"""
座位位置
"""

__all__ = ['position_name', 'is_late_position']


def position_name(seat_offset: int, active_count: int) -> str:
    """
    根据相对庄家的偏移得到位置名称

    Args:
        seat_offset: 0=庄家，1=小盲，2=大盲，...
        active_count: 本手参与的玩家数

    Examples:
        >>> position_name(0, 2)
        'BTN/SB'
        >>> position_name(5, 8)
        'MP'
    """
    if active_count == 2:
        return "BTN/SB" if seat_offset == 0 else "BB"
    if seat_offset in (0, 1, 2):
        return ("BTN", "SB", "BB")[seat_offset]
    if seat_offset == active_count - 1:
        return "CO"
    if seat_offset == active_count - 2 and active_count >= 6:
        return "HJ"
    return "UTG" if seat_offset == 3 else "MP"


def is_late_position(seat_offset: int, active_count: int) -> bool:
    """庄家或最后两个行动位（CO/HJ）"""
    if active_count <= 2:
        return seat_offset == 0
    return seat_offset == 0 or seat_offset >= active_count - 2
