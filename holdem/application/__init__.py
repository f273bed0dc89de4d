"""
Application Layer - 应用服务层

组装核心层与AI层。应用层可以访问核心层和AI层，但不能被它们访问。

Services:
    ConfigService: 配置方案管理
    StatsRecorder: 订阅引擎事件，维护对手统计
    GameSession: 组装引擎与AI并驱动AI座位

Types:
    CommandResult: 命令执行结果
    QueryResult: 查询结果
"""

from .config_service import ConfigService, ConfigType, LoggingConfig, configure_logging
from .game_session import GameSession
from .stats_recorder import StatsRecorder
from .types import CommandResult, QueryResult, ResultStatus

__all__ = [
    "ResultStatus",
    "CommandResult",
    "QueryResult",
    "ConfigService",
    "ConfigType",
    "LoggingConfig",
    "configure_logging",
    "StatsRecorder",
    "GameSession",
]
