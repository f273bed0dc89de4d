"""
事件总线单元测试
"""

import pytest

from holdem.core.events import DomainEvent, EventBus, EventType, create_function_handler


def event(event_type=EventType.HAND_STARTED, aggregate_id="table-1", **data):
    return DomainEvent.create(event_type, aggregate_id, data)


@pytest.mark.unit
class TestDomainEvent:

    def test_create_assigns_id_and_timestamp(self):
        created = event(pot_total=30)
        assert created.event_id
        assert created.timestamp > 0
        assert created.data == {'pot_total': 30}

    def test_dict_round_trip(self):
        original = DomainEvent.create(EventType.HAND_ENDED, "t", {'winners': ['p0']},
                                      hand_number=4, correlation_id="c-1")
        restored = DomainEvent.from_dict(original.to_dict())
        assert restored == original
        assert original.to_dict()['event_type'] == "HAND_ENDED"

    def test_player_id_from_payload(self):
        action = event(EventType.PLAYER_ACTION_EXECUTED, player_id="p1")
        assert action.player_id == "p1"
        assert event().player_id is None

    def test_payload_is_copied(self):
        payload = {'pot_total': 30}
        created = DomainEvent.create(EventType.HAND_ENDED, "t", payload)
        payload['pot_total'] = 0
        assert created.data['pot_total'] == 30


@pytest.mark.unit
class TestEventBus:

    def test_typed_subscription(self):
        bus = EventBus()
        received = []
        bus.subscribe(EventType.HAND_ENDED, create_function_handler(received.append))
        bus.publish(event(EventType.HAND_STARTED))
        bus.publish(event(EventType.HAND_ENDED))
        assert [e.event_type for e in received] == [EventType.HAND_ENDED]
        assert bus.get_handler_count(EventType.HAND_ENDED) == 1

    def test_global_handler_respects_can_handle(self):
        bus = EventBus()
        received = []
        bus.subscribe_all(create_function_handler(received.append, [EventType.GAME_OVER]))
        bus.publish(event(EventType.HAND_STARTED))
        bus.publish(event(EventType.GAME_OVER))
        assert len(received) == 1
        assert bus.get_handler_count() == 1

    def test_failing_handler_does_not_block_others(self, caplog):
        bus = EventBus()
        received = []

        def broken(_):
            raise RuntimeError("处理失败")

        bus.subscribe(EventType.HAND_STARTED, create_function_handler(broken))
        bus.subscribe(EventType.HAND_STARTED, create_function_handler(received.append))
        bus.publish(event())
        assert len(received) == 1
        assert "处理失败" in caplog.text

    def test_unsubscribe(self):
        bus = EventBus()
        handler = create_function_handler(lambda e: None)
        bus.subscribe(EventType.HAND_STARTED, handler)
        assert bus.unsubscribe(EventType.HAND_STARTED, handler)
        assert not bus.unsubscribe(EventType.HAND_STARTED, handler)

    def test_history_filters_and_limit(self):
        bus = EventBus(max_history_size=3)
        for index in range(4):
            bus.publish(event(EventType.HAND_STARTED, aggregate_id=f"t{index % 2}"))
        bus.publish(event(EventType.GAME_OVER, aggregate_id="t0"))
        assert len(bus.get_event_history()) == 3
        assert len(bus.get_event_history(aggregate_id="t0")) == 2
        assert len(bus.get_event_history(EventType.GAME_OVER)) == 1
        assert len(bus.get_event_history(limit=1)) == 1
        bus.clear_history()
        assert bus.get_event_history() == []

    def test_buses_are_independent(self):
        first, second = EventBus(), EventBus()
        first.publish(event())
        assert second.get_event_history() == []

    def test_history_size_must_be_positive(self):
        with pytest.raises(ValueError):
            EventBus(max_history_size=0)
