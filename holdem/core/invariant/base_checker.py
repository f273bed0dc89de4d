"""
不变量检查器基类
"""

from abc import ABC, abstractmethod
from typing import Any, List
import time

from .types import InvariantType, InvariantViolation, InvariantCheckResult, InvariantError

__all__ = ['BaseInvariantChecker']


class BaseInvariantChecker(ABC):
    """
    检查器基类

    子类在 ``_perform_check`` 中调用 ``_create_violation`` 记录问题；
    返回False但没有记录任何问题时，自动补一条通用的严重违反。
    """

    def __init__(self, invariant_type: InvariantType):
        self.invariant_type = invariant_type
        self._violations: List[InvariantViolation] = []

    @abstractmethod
    def _perform_check(self, *args: Any, **kwargs: Any) -> bool:
        """返回是否通过"""

    def check(self, *args: Any, **kwargs: Any) -> InvariantCheckResult:
        self._violations = []
        started = time.perf_counter()
        passed = self._perform_check(*args, **kwargs)
        if not passed and not self._violations:
            self._create_violation(f"{self.invariant_type.name}检查未通过")
        return InvariantCheckResult(
            invariant_type=self.invariant_type,
            violations=tuple(self._violations),
            check_duration=time.perf_counter() - started,
        )

    def enforce(self, *args: Any, **kwargs: Any) -> InvariantCheckResult:
        """
        检查，失败时抛出异常

        Raises:
            InvariantError: 存在任何违反记录
        """
        result = self.check(*args, **kwargs)
        if not result:
            raise InvariantError.from_result(result)
        return result

    def _create_violation(self, description: str, severity: str = 'CRITICAL',
                          **context: Any) -> InvariantViolation:
        violation = InvariantViolation.create(self.invariant_type, description, severity, **context)
        self._violations.append(violation)
        return violation
