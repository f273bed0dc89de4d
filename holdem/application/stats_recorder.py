"""
StatsRecorder - 对手统计记录器

订阅引擎事件，累计每个玩家的VPIP/PFR/3-bet/进攻次数，
在每手牌结束时把最新计数写入对手模型表。引擎与AI本身从不写统计。
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Set

from ..ai.opponent.model import OpponentStats
from ..ai.opponent.store import OpponentModelStore
from ..core.events.domain_events import DomainEvent, EventType
from ..core.events.event_bus import EventBus

__all__ = ['StatsRecorder']

_PASSIVE = {'CALL'}
_AGGRESSIVE = {'RAISE', 'ALL_IN'}


@dataclass
class _HandFlags:
    """一手牌内每个统计项只计一次"""
    vpip: Set[str] = field(default_factory=set)
    pfr: Set[str] = field(default_factory=set)
    three_bet: Set[str] = field(default_factory=set)
    preflop_raises: int = 0
    touched: Set[str] = field(default_factory=set)


class StatsRecorder:
    """
    基于事件的统计记录器

    实现 ``EventHandler`` 协议，可直接订阅到 ``EventBus``。

    Examples:
        >>> recorder = StatsRecorder(store)
        >>> recorder.attach(event_bus)
    """

    EVENT_TYPES = (EventType.HAND_STARTED, EventType.PLAYER_ACTION_EXECUTED, EventType.HAND_ENDED)

    def __init__(self, model_store: OpponentModelStore):
        self.logger = logging.getLogger(__name__)
        self._store = model_store
        self._stats: Dict[str, OpponentStats] = {}
        self._hand = _HandFlags()

    def attach(self, event_bus: EventBus) -> None:
        for event_type in self.EVENT_TYPES:
            event_bus.subscribe(event_type, self)

    def detach(self, event_bus: EventBus) -> None:
        for event_type in self.EVENT_TYPES:
            event_bus.unsubscribe(event_type, self)

    def can_handle(self, event_type: EventType) -> bool:
        return event_type in self.EVENT_TYPES

    def handle(self, event: DomainEvent) -> None:
        if event.event_type == EventType.HAND_STARTED:
            self._on_hand_started(event)
        elif event.event_type == EventType.PLAYER_ACTION_EXECUTED:
            self._on_action(event)
        elif event.event_type == EventType.HAND_ENDED:
            self._on_hand_ended()

    def stats_for(self, player_id: str) -> OpponentStats:
        """当前累计计数的副本"""
        return OpponentStats(**vars(self._stats.get(player_id, OpponentStats())))

    def reset(self) -> None:
        self._stats.clear()
        self._hand = _HandFlags()

    def _on_hand_started(self, event: DomainEvent) -> None:
        self._hand = _HandFlags()
        for player_id in event.data.get('players', []):
            self._stats.setdefault(player_id, OpponentStats()).hands += 1
            self._hand.touched.add(player_id)

    def _on_action(self, event: DomainEvent) -> None:
        data = event.data
        player_id = event.player_id
        action_type = data['action_type']
        stats = self._stats.setdefault(player_id, OpponentStats())
        self._hand.touched.add(player_id)
        is_raise = data.get('is_raise', False)

        if data.get('street') == 'PRE_FLOP':
            if data.get('is_voluntary') and player_id not in self._hand.vpip:
                self._hand.vpip.add(player_id)
                stats.vpip_count += 1
            if is_raise:
                if player_id not in self._hand.pfr:
                    self._hand.pfr.add(player_id)
                    stats.pfr_count += 1
                if self._hand.preflop_raises >= 1 and player_id not in self._hand.three_bet:
                    self._hand.three_bet.add(player_id)
                    stats.three_bet_count += 1
                self._hand.preflop_raises += 1

        if action_type in _AGGRESSIVE and is_raise:
            stats.aggressive_actions += 1
        elif action_type in _PASSIVE or action_type == 'ALL_IN':
            stats.passive_calls += 1

    def _on_hand_ended(self) -> None:
        for player_id in self._hand.touched:
            self._store.update(player_id, self._stats[player_id])
        self.logger.debug(f"已更新{len(self._hand.touched)}名玩家的统计")
        self._hand.touched = set()
