"""
不变量检查器单元测试
"""

import pytest

from holdem.core.deck import parse_cards
from holdem.core.invariant import (
    BaseInvariantChecker, CardDistributionChecker, ChipConservationChecker, InvariantError, InvariantType,
    InvariantViolation, PotIntegrityChecker, Severity,
)
from holdem.core.player import Player


@pytest.mark.unit
class TestChipConservationChecker:

    def test_conserved_chips_pass(self):
        players = [Player("a", "a", 900), Player("b", "b", 1000)]
        result = ChipConservationChecker().check(players, 100, 2000)
        assert result
        assert result.invariant_type == InvariantType.CHIP_CONSERVATION

    def test_missing_chips_fail_with_context(self):
        players = [Player("a", "a", 900), Player("b", "b", 1000)]
        result = ChipConservationChecker().check(players, 50, 2000)
        assert not result
        violation = result.violations[0]
        assert violation.context['difference'] == -50
        assert "不守恒" in result.describe()

    def test_enforce_raises(self):
        players = [Player("a", "a", 10)]
        with pytest.raises(InvariantError) as info:
            ChipConservationChecker().enforce(players, 0, 20)
        assert info.value.get_critical_violations()


@pytest.mark.unit
class TestPotIntegrityChecker:

    def test_valid_portions(self):
        portions = [(120, frozenset("abc")), (60, frozenset("bc"))]
        assert PotIntegrityChecker().check(portions, 180, 180)

    def test_unmerged_portions_are_reported(self):
        portions = [(120, frozenset("ab")), (60, frozenset("ab"))]
        result = PotIntegrityChecker().check(portions, 180, 180)
        assert not result
        assert result.violations[0].severity == 'WARNING'

    def test_total_mismatch(self):
        result = PotIntegrityChecker().check([(100, frozenset("a"))], 100, 120)
        assert not result


@pytest.mark.unit
class TestCardDistributionChecker:

    def test_unique_cards(self):
        assert CardDistributionChecker().check(parse_cards("AH KH QH"))

    def test_duplicate_card(self):
        result = CardDistributionChecker().check(parse_cards("AH KH AH"))
        assert not result
        assert "AH" in result.describe()


@pytest.mark.unit
class TestViolationRecords:

    def test_create_generates_id(self):
        violation = InvariantViolation.create(InvariantType.POT_INTEGRITY, "坏了")
        assert violation.violation_id.startswith("pot_integrity_")
        assert violation.severity == 'CRITICAL'

    def test_invalid_severity(self):
        with pytest.raises(ValueError):
            InvariantViolation.create(InvariantType.POT_INTEGRITY, "坏了", severity='FATAL')

    def test_severity_accepts_strings(self):
        violation = InvariantViolation(InvariantType.CARD_DISTRIBUTION, "重复", 'WARNING')
        assert violation.severity is Severity.WARNING
        assert not violation.is_critical
        assert violation.violation_id.startswith("card_distribution_")


class _AlwaysFails(BaseInvariantChecker):

    def __init__(self):
        super().__init__(InvariantType.POT_INTEGRITY)

    def _perform_check(self) -> bool:
        return False


@pytest.mark.unit
def test_failed_check_without_details_gets_generic_violation():
    result = _AlwaysFails().check()
    assert not result.is_valid
    assert len(result.violations) == 1
    assert result.violations[0].is_critical
