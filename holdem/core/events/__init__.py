"""
牌桌事件与同步事件总线
"""

from .domain_events import EventType, DomainEvent
from .event_bus import EventHandler, EventBus, create_function_handler

__all__ = [
    "EventType",
    "DomainEvent",
    "EventHandler",
    "EventBus",
    "create_function_handler",
]
