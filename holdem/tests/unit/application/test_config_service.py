"""
ConfigService单元测试
"""

import logging

import pytest

from holdem.application.config_service import ConfigService, ConfigType, LoggingConfig, configure_logging
from holdem.application.types import ResultStatus
from holdem.core.rules import STANDARD, TableRules


@pytest.fixture
def config_service():
    return ConfigService()


@pytest.mark.unit
class TestConfigQueries:

    def test_default_profiles(self, config_service):
        result = config_service.get_table_rules()
        assert result
        assert result.data == TableRules()
        assert config_service.get_table_rules("tournament").data.starting_chips == 2000
        assert not config_service.get_table_rules("lenient").data.strict_invariants

    def test_unknown_profile_falls_back(self, config_service, caplog):
        with caplog.at_level(logging.WARNING):
            result = config_service.get_table_rules("nope")
        assert result.data == TableRules()
        assert "nope" in caplog.text
        assert config_service.get_tournament_config("nope").data is STANDARD

    def test_decision_profiles(self, config_service):
        basic = config_service.get_decision_config("basic").data
        assert not basic.use_opponent_modeling
        assert not basic.use_bluff_detection
        assert config_service.get_equity_config("accurate").data.workers == 4

    def test_list_profiles(self, config_service):
        result = config_service.list_available_profiles(ConfigType.LOGGING)
        assert result.data == ['default', 'debug', 'production']

    def test_merged_config_is_dict(self, config_service):
        merged = config_service.get_merged_config(ConfigType.TABLE_RULES).data
        assert merged['big_blind'] == 20
        assert merged['strict_invariants'] is True


@pytest.mark.unit
class TestConfigUpdates:

    def test_update_replaces_profile(self, config_service):
        result = config_service.update_config(ConfigType.EQUITY, "default", {"workers": 2})
        assert result
        assert result.data.workers == 2
        assert config_service.get_equity_config().data.workers == 2

    def test_invalid_value_keeps_original(self, config_service):
        result = config_service.update_config(ConfigType.TABLE_RULES, "default", {"big_blind": 5})
        assert result.status == ResultStatus.VALIDATION_ERROR
        assert result.error_code == "INVALID_CONFIG_VALUE"
        assert config_service.get_table_rules().data.big_blind == 20

    def test_unknown_key(self, config_service):
        result = config_service.update_config(ConfigType.TABLE_RULES, "default", {"rake": 5})
        assert result.error_code == "UNKNOWN_CONFIG_KEY"

    def test_unknown_profile(self, config_service):
        result = config_service.update_config(ConfigType.AI_DECISION, "expert", {"raise_war_limit": 3})
        assert not result
        assert result.error_code == "CONFIG_PROFILE_NOT_FOUND"


@pytest.mark.unit
class TestLogging:

    def test_level_is_normalized(self):
        assert LoggingConfig(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ValueError):
            LoggingConfig(log_level="LOUD")

    def test_configure_logging_replaces_handlers(self, tmp_path):
        log_file = tmp_path / "logs" / "holdem.log"
        config = LoggingConfig(log_level="DEBUG", enable_file_logging=True, log_file_path=str(log_file))
        try:
            root = configure_logging(config)
            root = configure_logging(config)
            managed = [h for h in root.handlers if getattr(h, '_holdem_managed', False)]
            assert len(managed) == 2
            assert root.level == logging.DEBUG

            logging.getLogger("holdem.core").info("日志写入测试")
            for handler in managed:
                handler.flush()
            assert "日志写入测试" in log_file.read_text(encoding='utf-8')
        finally:
            root = configure_logging(LoggingConfig(enable_console_logging=False))
            root.setLevel(logging.NOTSET)
        assert not [h for h in root.handlers if getattr(h, '_holdem_managed', False)]
