"""
不变量检查的结果类型
"""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Tuple, Dict, Any, List
import time
import uuid

__all__ = [
    'InvariantType',
    'Severity',
    'InvariantViolation',
    'InvariantCheckResult',
    'InvariantError'
]


class InvariantType(Enum):
    CHIP_CONSERVATION = auto()      # 筹码总量不变
    POT_INTEGRITY = auto()          # 分池之和与投入一致
    CARD_DISTRIBUTION = auto()      # 同一张牌只发一次


class Severity(str, Enum):
    """违反的严重程度，可直接与字符串比较"""
    CRITICAL = 'CRITICAL'
    WARNING = 'WARNING'
    INFO = 'INFO'


@dataclass(frozen=True)
class InvariantViolation:
    """一条不变量违反记录，``context`` 保存定位问题所需的数值"""
    invariant_type: InvariantType
    description: str
    severity: Severity = Severity.CRITICAL
    context: Dict[str, Any] = field(default_factory=dict)
    violation_id: str = ''
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self):
        if not self.description:
            raise ValueError("违反描述不能为空")
        # 接受字符串，非法取值由枚举抛出ValueError
        object.__setattr__(self, 'severity', Severity(self.severity))
        if not self.violation_id:
            object.__setattr__(self, 'violation_id',
                               f"{self.invariant_type.name.lower()}_{uuid.uuid4().hex[:8]}")

    @classmethod
    def create(cls, invariant_type: InvariantType, description: str,
               severity: str = 'CRITICAL', **context: Any) -> 'InvariantViolation':
        return cls(invariant_type, description, Severity(severity), dict(context))

    @property
    def is_critical(self) -> bool:
        return self.severity is Severity.CRITICAL


@dataclass(frozen=True)
class InvariantCheckResult:
    """
    一次检查的结果

    没有违反记录即为通过，``bool(result)`` 表示是否通过。
    """
    invariant_type: InvariantType
    violations: Tuple[InvariantViolation, ...] = ()
    check_duration: float = 0.0

    @property
    def is_valid(self) -> bool:
        return not self.violations

    def __bool__(self) -> bool:
        return self.is_valid

    def describe(self) -> str:
        return "; ".join(v.description for v in self.violations)


class InvariantError(Exception):
    """严格模式下不变量被破坏时抛出"""

    def __init__(self, message: str, violations: List[InvariantViolation]):
        super().__init__(message)
        self.violations = violations

    @classmethod
    def from_result(cls, result: InvariantCheckResult) -> 'InvariantError':
        return cls(f"{result.invariant_type.name}不变量被破坏: {result.describe()}", list(result.violations))

    def get_critical_violations(self) -> List[InvariantViolation]:
        return [v for v in self.violations if v.is_critical]
