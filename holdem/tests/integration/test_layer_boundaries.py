"""
分层依赖集成测试: core不依赖ai/application，ai只依赖core
"""

import pytest

from holdem.tests.anti_cheat.core_usage_checker import CoreUsageChecker


@pytest.mark.integration
@pytest.mark.parametrize("layer", ["core", "ai", "application"])
def test_no_layer_violations(layer):
    violations = CoreUsageChecker.find_layer_violations(layer)
    assert not violations, "\n".join(str(v) for v in violations)
