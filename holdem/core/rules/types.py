"""
核心规则类型定义

定义牌桌规则、盲注级别与锦标赛配置。使用Pydantic dataclass确保数值在构造时即被校验。
"""

from typing import List, Optional

from pydantic import Field, ValidationInfo, field_validator
from pydantic.dataclasses import dataclass as pydantic_dataclass

__all__ = [
    'TableRules',
    'BlindLevel',
    'TournamentConfig',
    'TURBO',
    'STANDARD',
    'DEEP_STACK',
    'TOURNAMENT_PRESETS',
]


@pydantic_dataclass(frozen=True)
class TableRules:
    """牌桌规则.

    ``big_blind`` 为0表示不设盲注（测试和自由练习场景）。
    """
    small_blind: int = Field(10, ge=0, description="小盲金额")
    big_blind: int = Field(20, ge=0, description="大盲金额")
    ante: int = Field(0, ge=0, description="前注金额")
    starting_chips: int = Field(1000, gt=0, description="初始筹码")
    min_players: int = Field(2, ge=2, description="最少玩家数")
    max_players: int = Field(8, ge=2, le=10, description="最多玩家数")
    strict_invariants: bool = Field(True, description="不变量被破坏时是否直接抛出异常")

    @field_validator('big_blind')
    @classmethod
    def validate_blind_relationship(cls, v, info: ValidationInfo):
        """验证大盲不小于小盲."""
        small_blind = info.data.get('small_blind')
        if small_blind is not None and v < small_blind:
            raise ValueError("大盲不能小于小盲")
        return v

    @field_validator('max_players')
    @classmethod
    def validate_player_range(cls, v, info: ValidationInfo):
        """验证最多玩家数不小于最少玩家数."""
        min_players = info.data.get('min_players')
        if min_players is not None and v < min_players:
            raise ValueError("max_players不能小于min_players")
        return v


@pydantic_dataclass(frozen=True)
class BlindLevel:
    """盲注级别."""
    level: int = Field(..., ge=1, description="级别序号")
    small_blind: int = Field(..., ge=0, description="小盲金额")
    big_blind: int = Field(..., ge=0, description="大盲金额")
    ante: int = Field(0, ge=0, description="前注金额")

    @field_validator('big_blind')
    @classmethod
    def validate_blind_relationship(cls, v, info: ValidationInfo):
        """验证大盲不小于小盲."""
        small_blind = info.data.get('small_blind')
        if small_blind is not None and v < small_blind:
            raise ValueError("大盲不能小于小盲")
        return v

    def __str__(self) -> str:
        text = f"Level {self.level}: {self.small_blind}/{self.big_blind}"
        return f"{text} ante {self.ante}" if self.ante else text


@pydantic_dataclass(frozen=True)
class TournamentConfig:
    """锦标赛配置.

    每打满 ``hands_per_level`` 手升一级盲注；``payout_structure`` 为各名次的奖金比例。
    """
    name: str = Field(..., min_length=1, description="名称")
    starting_chips: int = Field(..., gt=0, description="初始筹码")
    blind_schedule: List[BlindLevel] = Field(..., min_length=1, description="盲注结构")
    hands_per_level: int = Field(..., gt=0, description="每级手数")
    payout_structure: List[float] = Field(default_factory=lambda: [0.5, 0.3, 0.2],
                                          description="奖金比例")

    @field_validator('payout_structure')
    @classmethod
    def validate_payouts(cls, v):
        """验证奖金比例为正且总和不超过1."""
        if any(share <= 0 for share in v):
            raise ValueError("奖金比例必须为正数")
        if sum(v) > 1.0 + 1e-9:
            raise ValueError("奖金比例之和不能超过1")
        return v

    @property
    def paid_places(self) -> int:
        return len(self.payout_structure)

    def level_at(self, index: int) -> BlindLevel:
        """按下标取级别，超过最高级时停留在最高级."""
        return self.blind_schedule[min(index, len(self.blind_schedule) - 1)]

    def to_table_rules(self, base: Optional[TableRules] = None) -> TableRules:
        """用第一个盲注级别生成牌桌规则."""
        first = self.blind_schedule[0]
        base = base or TableRules()
        return TableRules(
            small_blind=first.small_blind,
            big_blind=first.big_blind,
            ante=first.ante,
            starting_chips=self.starting_chips,
            min_players=base.min_players,
            max_players=base.max_players,
            strict_invariants=base.strict_invariants,
        )


def _schedule(*levels) -> List[BlindLevel]:
    return [BlindLevel(level=i + 1, small_blind=sb, big_blind=bb, ante=ante)
            for i, (sb, bb, ante) in enumerate(levels)]


TURBO = TournamentConfig(
    name="Turbo",
    starting_chips=1000,
    blind_schedule=_schedule(
        (10, 20, 0), (15, 30, 0), (25, 50, 5), (50, 100, 10), (75, 150, 15),
        (100, 200, 25), (150, 300, 50), (200, 400, 75), (300, 600, 100), (500, 1000, 150),
    ),
    hands_per_level=5,
)

STANDARD = TournamentConfig(
    name="Standard",
    starting_chips=1000,
    blind_schedule=_schedule(
        (10, 20, 0), (15, 30, 0), (20, 40, 0), (25, 50, 5), (50, 100, 10),
        (75, 150, 15), (100, 200, 25), (150, 300, 50), (200, 400, 75), (300, 600, 100),
    ),
    hands_per_level=10,
)

DEEP_STACK = TournamentConfig(
    name="Deep Stack",
    starting_chips=2000,
    blind_schedule=_schedule(
        (10, 20, 0), (15, 30, 0), (20, 40, 0), (25, 50, 0), (30, 60, 5),
        (50, 100, 10), (75, 150, 15), (100, 200, 25), (150, 300, 50), (200, 400, 75),
    ),
    hands_per_level=15,
)

TOURNAMENT_PRESETS = {
    'turbo': TURBO,
    'standard': STANDARD,
    'deep_stack': DEEP_STACK,
}
