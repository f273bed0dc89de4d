"""
ConfigService - 配置管理服务

集中管理牌桌规则、锦标赛、胜率估算、AI决策与日志配置。
每种配置按名称保存多套方案（default、tournament、debug...），
所有查询都返回 ``QueryResult``。
"""

import logging
import logging.handlers
import os
from dataclasses import asdict, replace
from enum import Enum
from typing import Any, Dict, List

from pydantic import Field, field_validator
from pydantic.dataclasses import dataclass as pydantic_dataclass

from ..ai.types import DecisionConfig, EquityConfig
from ..core.rules.types import TOURNAMENT_PRESETS, TableRules
from .types import QueryResult

__all__ = ['ConfigType', 'LoggingConfig', 'ConfigService', 'configure_logging']

_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigType(Enum):
    """配置类型枚举"""
    TABLE_RULES = "table_rules"
    TOURNAMENT = "tournament"
    EQUITY = "equity"
    AI_DECISION = "ai_decision"
    LOGGING = "logging"


@pydantic_dataclass(frozen=True)
class LoggingConfig:
    """日志配置"""
    log_level: str = Field('INFO', description="日志级别")
    enable_console_logging: bool = True
    enable_file_logging: bool = False
    log_file_path: str = "logs/holdem.log"
    log_format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    max_log_file_size_mb: int = Field(10, gt=0)
    backup_count: int = Field(5, ge=0)

    @field_validator('log_level')
    @classmethod
    def validate_level(cls, v):
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"无效的日志级别: {v}")
        return level


def configure_logging(config: LoggingConfig) -> logging.Logger:
    """
    为 ``holdem`` 日志器安装处理器

    重复调用会替换上一次安装的处理器，不会重复输出。

    Args:
        config: 日志配置

    Returns:
        logging.Logger: ``holdem`` 根日志器
    """
    root = logging.getLogger("holdem")
    for handler in [h for h in root.handlers if getattr(h, '_holdem_managed', False)]:
        root.removeHandler(handler)
        handler.close()

    root.setLevel(config.log_level)
    formatter = logging.Formatter(config.log_format)

    handlers: List[logging.Handler] = []
    if config.enable_console_logging:
        handlers.append(logging.StreamHandler())
    if config.enable_file_logging:
        directory = os.path.dirname(config.log_file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            config.log_file_path,
            maxBytes=config.max_log_file_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
            encoding='utf-8',
        ))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler._holdem_managed = True
        root.addHandler(handler)
    return root


class ConfigService:
    """配置管理服务"""

    def __init__(self):
        """初始化配置服务"""
        self.logger = logging.getLogger(__name__)
        self._configs: Dict[ConfigType, Dict[str, Any]] = {}
        self._load_default_configs()

    def _load_default_configs(self):
        """加载默认配置"""
        self._configs[ConfigType.TABLE_RULES] = {
            'default': TableRules(),
            'tournament': TableRules(small_blind=10, big_blind=20, starting_chips=2000),
            'lenient': TableRules(strict_invariants=False),
        }
        self._configs[ConfigType.TOURNAMENT] = dict(TOURNAMENT_PRESETS)
        self._configs[ConfigType.EQUITY] = {
            'default': EquityConfig(),
            'fast': EquityConfig(default_iterations=200, preflop_iterations=200,
                                 river_iterations=100, draw_iterations=400),
            'accurate': EquityConfig(default_iterations=2000, preflop_iterations=2000,
                                     river_iterations=500, draw_iterations=4000, workers=4),
        }
        self._configs[ConfigType.AI_DECISION] = {
            'default': DecisionConfig(),
            'basic': DecisionConfig(use_opponent_modeling=False, use_bluff_detection=False,
                                    use_stack_pressure=False),
        }
        self._configs[ConfigType.LOGGING] = {
            'default': LoggingConfig(),
            'debug': LoggingConfig(log_level='DEBUG', enable_file_logging=True),
            'production': LoggingConfig(log_level='WARNING', enable_console_logging=False,
                                        enable_file_logging=True),
        }
        self.logger.info("默认配置加载完成")

    def get_config(self, config_type: ConfigType, profile: str = "default") -> QueryResult[Any]:
        """
        获取配置

        未知方案名回退到 ``default``（锦标赛回退到 ``standard``）。

        Args:
            config_type: 配置类型
            profile: 方案名

        Returns:
            查询结果，包含配置对象
        """
        profiles = self._configs.get(config_type)
        if profiles is None:
            return QueryResult.failure_result(f"配置类型 {config_type} 不存在",
                                              error_code="CONFIG_TYPE_NOT_FOUND")
        if profile not in profiles:
            fallback = 'standard' if config_type == ConfigType.TOURNAMENT else 'default'
            self.logger.warning(f"未找到{config_type.value}配置 '{profile}'，使用 {fallback}")
            profile = fallback
        return QueryResult.success_result(profiles[profile])

    def get_table_rules(self, profile: str = "default") -> QueryResult[TableRules]:
        return self.get_config(ConfigType.TABLE_RULES, profile)

    def get_tournament_config(self, profile: str = "standard") -> QueryResult[Any]:
        return self.get_config(ConfigType.TOURNAMENT, profile)

    def get_equity_config(self, profile: str = "default") -> QueryResult[EquityConfig]:
        return self.get_config(ConfigType.EQUITY, profile)

    def get_decision_config(self, profile: str = "default") -> QueryResult[DecisionConfig]:
        return self.get_config(ConfigType.AI_DECISION, profile)

    def get_logging_config(self, profile: str = "default") -> QueryResult[LoggingConfig]:
        return self.get_config(ConfigType.LOGGING, profile)

    def get_merged_config(self, config_type: ConfigType, profile: str = "default") -> QueryResult[Dict[str, Any]]:
        """获取配置的字典形式"""
        result = self.get_config(config_type, profile)
        if not result:
            return result
        return QueryResult.success_result(asdict(result.data))

    def update_config(self, config_type: ConfigType, profile: str, updates: Dict[str, Any]) -> QueryResult[Any]:
        """
        更新配置

        配置对象不可变，更新会生成新对象并重新校验；校验失败时原配置保持不变。

        Args:
            config_type: 配置类型
            profile: 方案名
            updates: 更新的配置项

        Returns:
            查询结果，包含更新后的配置
        """
        profiles = self._configs.get(config_type)
        if profiles is None:
            return QueryResult.failure_result(f"配置类型 {config_type} 不存在",
                                              error_code="CONFIG_TYPE_NOT_FOUND")
        if profile not in profiles:
            return QueryResult.failure_result(f"配置方案 {profile} 不存在",
                                              error_code="CONFIG_PROFILE_NOT_FOUND")

        current = profiles[profile]
        unknown = [key for key in updates if not hasattr(current, key)]
        if unknown:
            return QueryResult.validation_error(f"未知配置项: {', '.join(unknown)}",
                                                error_code="UNKNOWN_CONFIG_KEY")
        try:
            updated = replace(current, **updates)
        except (ValueError, TypeError) as e:
            self.logger.warning(f"配置 {config_type.value}.{profile} 校验失败: {e}")
            return QueryResult.validation_error(f"配置校验失败: {e}", error_code="INVALID_CONFIG_VALUE")

        profiles[profile] = updated
        self.logger.info(f"配置 {config_type.value}.{profile} 更新成功")
        return QueryResult.success_result(updated)

    def list_available_profiles(self, config_type: ConfigType) -> QueryResult[List[str]]:
        """列出可用的配置方案"""
        if config_type not in self._configs:
            return QueryResult.failure_result(f"配置类型 {config_type} 不存在",
                                              error_code="CONFIG_TYPE_NOT_FOUND")
        return QueryResult.success_result(list(self._configs[config_type].keys()))
