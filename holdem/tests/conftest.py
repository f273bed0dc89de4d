"""
Test Configuration - pytest配置文件

提供测试的基础设施：
- 固定种子的随机数生成器
- 按发牌顺序叠好的牌组
- 引擎与玩家工厂
- 记录所有事件的事件总线

所有测试都会自动加载这些配置。
"""

import random
from typing import List, Optional, Sequence

import pytest

from holdem.core.deck import Deck, full_deck, parse_cards
from holdem.core.engine import PokerEngine
from holdem.core.events import DomainEvent, EventBus, EventType
from holdem.core.player import AIProfile, Player
from holdem.core.rules import TableRules
from holdem.tests.anti_cheat.core_usage_checker import CoreUsageChecker


class EventRecorder:
    """记录收到的全部事件"""

    def __init__(self):
        self.events: List[DomainEvent] = []

    def handle(self, event: DomainEvent) -> None:
        self.events.append(event)

    def can_handle(self, event_type: EventType) -> bool:
        return True

    def of_type(self, event_type: EventType) -> List[DomainEvent]:
        return [event for event in self.events if event.event_type == event_type]

    @property
    def types(self) -> List[EventType]:
        return [event.event_type for event in self.events]


def build_stacked_deck(holes: Sequence[str], board: str = "", dealer_seat: int = 0,
                       seed: int = 0) -> Deck:
    """
    按引擎的发牌顺序叠牌

    引擎从庄家左手开始每人发一张、共两轮，每条街前烧一张牌。
    烧牌从未使用的牌中按固定顺序选取。

    Args:
        holes: 按座位顺序的手牌，如 ["AH AS", "KD KC"]
        board: 公共牌，如 "2C 7D 9H JS 3S"；可以只给出前几张
        dealer_seat: 本手的庄家座位
        seed: 其余牌的洗牌种子
    """
    count = len(holes)
    hole_cards = [parse_cards(text) for text in holes]
    order = [(dealer_seat + 1 + i) % count for i in range(count)]
    top = [hole_cards[seat][0] for seat in order] + [hole_cards[seat][1] for seat in order]

    board_cards = parse_cards(board)
    used = set(top) | set(board_cards)
    burns = iter(card for card in full_deck() if card not in used)
    for chunk in (board_cards[:3], board_cards[3:4], board_cards[4:5]):
        if not chunk:
            break
        top.append(next(burns))
        top.extend(chunk)
    return Deck.stacked(top, random.Random(seed))


@pytest.fixture
def rng():
    """固定种子的随机数生成器"""
    return random.Random(20240607)


@pytest.fixture
def core_usage_checker():
    """核心使用检查器fixture"""
    return CoreUsageChecker()


@pytest.fixture
def event_recorder():
    return EventRecorder()


@pytest.fixture
def event_bus(event_recorder):
    """订阅了记录器的事件总线"""
    bus = EventBus()
    bus.subscribe_all(event_recorder)
    return bus


@pytest.fixture
def stacked_deck():
    """叠牌工厂fixture"""
    return build_stacked_deck


@pytest.fixture
def make_players():
    """按筹码列表创建玩家；profiles给出时对应座位为AI"""
    def _make(chips: Sequence[int], profiles: Optional[Sequence[Optional[AIProfile]]] = None) -> List[Player]:
        profiles = list(profiles) if profiles is not None else [None] * len(chips)
        return [
            Player(f"p{i}", f"玩家{i}", amount, ai_profile=profile)
            for i, (amount, profile) in enumerate(zip(chips, profiles))
        ]
    return _make


@pytest.fixture
def make_engine(make_players, event_bus):
    """引擎工厂fixture：默认两名各1000筹码的玩家、盲注10/20"""
    def _make(chips: Sequence[int] = (1000, 1000), rules: Optional[TableRules] = None,
              tournament=None, seed: int = 7, players: Optional[List[Player]] = None) -> PokerEngine:
        seated = players if players is not None else make_players(chips)
        return PokerEngine(seated, rules or TableRules(), tournament,
                           rng=random.Random(seed), event_bus=event_bus)
    return _make


def total_chips(engine: PokerEngine) -> int:
    """玩家筹码加未分配底池"""
    return sum(player.chips for player in engine.players) + engine.pot.total


pytest.total_chips = total_chips


def pytest_configure(config):
    """pytest配置"""
    config.addinivalue_line("markers", "unit: 标记单元测试")
    config.addinivalue_line("markers", "property_test: 标记基于属性的测试")
    config.addinivalue_line("markers", "integration: 标记集成测试")
    config.addinivalue_line("markers", "slow: 标记较慢的测试")
