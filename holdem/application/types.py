"""
应用层结果类型

服务方法不向调用方抛出业务错误，而是返回带状态码的结果对象，
``bool(result)`` 即是否成功。
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar('T')


class ResultStatus(Enum):
    SUCCESS = auto()
    FAILURE = auto()                    # 执行失败，例如引擎拒绝了行动
    VALIDATION_ERROR = auto()           # 参数不合法
    BUSINESS_RULE_VIOLATION = auto()    # 参数合法但当前状态不允许


@dataclass(frozen=True)
class _ServiceResult(Generic[T]):
    status: ResultStatus
    data: Optional[T] = None
    message: str = ""
    error_code: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status is ResultStatus.SUCCESS

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def failure_result(cls, message: str, error_code: Optional[str] = None,
                       status: ResultStatus = ResultStatus.FAILURE):
        if status is ResultStatus.SUCCESS:
            raise ValueError("失败结果不能使用SUCCESS状态")
        return cls(status=status, message=message, error_code=error_code)

    @classmethod
    def validation_error(cls, message: str, error_code: Optional[str] = None):
        return cls.failure_result(message, error_code, ResultStatus.VALIDATION_ERROR)

    @classmethod
    def business_rule_violation(cls, message: str, error_code: Optional[str] = None):
        return cls.failure_result(message, error_code, ResultStatus.BUSINESS_RULE_VIOLATION)


@dataclass(frozen=True)
class CommandResult(_ServiceResult[Dict[str, Any]]):
    """改变牌局状态的操作结果，``data`` 为简要摘要"""

    @classmethod
    def success_result(cls, message: str = "操作成功",
                       data: Optional[Dict[str, Any]] = None) -> 'CommandResult':
        return cls(status=ResultStatus.SUCCESS, data=data, message=message)


@dataclass(frozen=True)
class QueryResult(_ServiceResult[T]):
    """只读查询结果"""

    @classmethod
    def success_result(cls, data: T, message: str = "") -> 'QueryResult[T]':
        return cls(status=ResultStatus.SUCCESS, data=data, message=message)
