"""
牌桌事件

引擎在一手牌的关键节点发布事件，订阅方（统计、日志、界面）只读不写。
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from enum import Enum, auto
import time
import uuid


class EventType(Enum):
    """事件类型"""
    HAND_STARTED = auto()
    BLINDS_POSTED = auto()
    STREET_CHANGED = auto()
    HAND_ENDED = auto()

    PLAYER_ACTION_EXECUTED = auto()
    INVALID_ACTION_ATTEMPTED = auto()

    UNCALLED_BET_RETURNED = auto()

    PLAYER_ELIMINATED = auto()
    BLIND_LEVEL_CHANGED = auto()
    GAME_OVER = auto()

    INVARIANT_VIOLATED = auto()


def _new_event_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class DomainEvent:
    """
    一条牌桌事件

    Attributes:
        event_type: 事件类型
        aggregate_id: 发布事件的牌桌ID
        data: 只含基本类型的载荷（字符串、数字、列表、字典）
        hand_number: 所属手牌编号，0表示牌局开始前
        correlation_id: 可选的追踪ID，由调用方自行约定
    """
    event_type: EventType
    aggregate_id: str
    data: Dict[str, Any] = field(default_factory=dict)
    hand_number: int = 0
    correlation_id: Optional[str] = None
    event_id: str = field(default_factory=_new_event_id)
    timestamp: float = field(default_factory=time.time)

    @classmethod
    def create(cls, event_type: EventType, aggregate_id: str, data: Dict[str, Any],
               hand_number: int = 0, correlation_id: Optional[str] = None) -> DomainEvent:
        return cls(event_type, aggregate_id, dict(data), hand_number, correlation_id)

    @property
    def player_id(self) -> Optional[str]:
        """行动、淘汰类事件涉及的玩家"""
        return self.data.get('player_id')

    def to_dict(self) -> Dict[str, Any]:
        """转换为可JSON序列化的字典，事件类型以名称表示"""
        return {
            'event_id': self.event_id,
            'event_type': self.event_type.name,
            'aggregate_id': self.aggregate_id,
            'hand_number': self.hand_number,
            'timestamp': self.timestamp,
            'correlation_id': self.correlation_id,
            'data': self.data,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> DomainEvent:
        return cls(
            event_type=EventType[payload['event_type']],
            aggregate_id=payload['aggregate_id'],
            data=payload.get('data', {}),
            hand_number=payload.get('hand_number', 0),
            correlation_id=payload.get('correlation_id'),
            event_id=payload['event_id'],
            timestamp=payload['timestamp'],
        )
