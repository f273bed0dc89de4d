"""
事件总线

每个引擎持有自己的总线实例（由调用方注入或自动创建），不同牌桌之间互不可见。
分发是同步的：``publish`` 返回时所有订阅者都已处理完毕。
"""

from __future__ import annotations
from typing import Protocol, Dict, List, Callable, Optional, Deque, Iterable
from collections import defaultdict, deque
import logging
import threading

from .domain_events import DomainEvent, EventType

logger = logging.getLogger(__name__)


class EventHandler(Protocol):
    """订阅者需要实现的接口"""

    def handle(self, event: DomainEvent) -> None:
        ...

    def can_handle(self, event_type: EventType) -> bool:
        ...


def _handler_name(handler: EventHandler) -> str:
    return getattr(handler, 'name', None) or type(handler).__name__


class EventBus:
    """
    同步事件总线

    订阅者抛出的异常只记录日志，不会传播给发布者，也不会阻止后续订阅者。
    历史记录为定长环形缓冲，超出上限时丢弃最早的事件。
    """

    def __init__(self, max_history_size: int = 1000):
        if max_history_size <= 0:
            raise ValueError(f"历史容量必须为正数: {max_history_size}")
        self._typed: Dict[EventType, List[EventHandler]] = defaultdict(list)
        self._wildcard: List[EventHandler] = []
        self._history: Deque[DomainEvent] = deque(maxlen=max_history_size)
        self._lock = threading.RLock()

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        with self._lock:
            self._typed[event_type].append(handler)
        logger.debug(f"{_handler_name(handler)} 订阅 {event_type.name}")

    def subscribe_all(self, handler: EventHandler) -> None:
        """订阅全部事件，实际接收范围仍由 ``can_handle`` 过滤"""
        with self._lock:
            self._wildcard.append(handler)
        logger.debug(f"{_handler_name(handler)} 订阅全部事件")

    def unsubscribe(self, event_type: EventType, handler: EventHandler) -> bool:
        """返回是否确实移除了该订阅"""
        with self._lock:
            handlers = self._typed.get(event_type, [])
            if handler not in handlers:
                return False
            handlers.remove(handler)
            return True

    def publish(self, event: DomainEvent) -> None:
        # 先复制订阅列表，处理器内部再订阅/退订不影响本次分发
        with self._lock:
            self._history.append(event)
            recipients = list(self._typed.get(event.event_type, ())) + list(self._wildcard)

        logger.debug(f"发布 {event.event_type.name} (手牌#{event.hand_number}) -> {len(recipients)}个订阅者")
        for handler in recipients:
            self._deliver(handler, event)

    @staticmethod
    def _deliver(handler: EventHandler, event: DomainEvent) -> None:
        try:
            accepts = getattr(handler, 'can_handle', None)
            if accepts is not None and not accepts(event.event_type):
                return
            handler.handle(event)
        except Exception as e:
            logger.error(f"订阅者 {_handler_name(handler)} 处理 {event.event_type.name} 失败: {e}")

    def get_event_history(self, event_type: Optional[EventType] = None,
                          aggregate_id: Optional[str] = None,
                          limit: Optional[int] = None) -> List[DomainEvent]:
        """按类型、牌桌过滤历史事件，``limit`` 取最近的若干条"""
        with self._lock:
            events: Iterable[DomainEvent] = list(self._history)
        if event_type is not None:
            events = [e for e in events if e.event_type == event_type]
        if aggregate_id is not None:
            events = [e for e in events if e.aggregate_id == aggregate_id]
        events = list(events)
        return events[-limit:] if limit else events

    def clear_history(self) -> None:
        with self._lock:
            self._history.clear()

    def get_handler_count(self, event_type: Optional[EventType] = None) -> int:
        """``event_type`` 为None时返回全局订阅者数量"""
        with self._lock:
            if event_type is None:
                return len(self._wildcard)
            return len(self._typed.get(event_type, ()))


class _CallbackHandler:
    """把普通函数包装成订阅者"""

    def __init__(self, func: Callable[[DomainEvent], None],
                 event_types: Optional[Iterable[EventType]]):
        self._func = func
        self._accepted = frozenset(event_types) if event_types is not None else None
        self.name = getattr(func, '__name__', type(func).__name__)

    def handle(self, event: DomainEvent) -> None:
        self._func(event)

    def can_handle(self, event_type: EventType) -> bool:
        return self._accepted is None or event_type in self._accepted


def create_function_handler(func: Callable[[DomainEvent], None],
                            event_types: Optional[List[EventType]] = None) -> EventHandler:
    """
    用函数创建订阅者

    Args:
        func: 接收事件的回调
        event_types: 只接收这些类型，None表示不过滤
    """
    return _CallbackHandler(func, event_types)
