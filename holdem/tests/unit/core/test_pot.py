"""
分层奖池单元测试
"""

import pytest

from holdem.core.invariant import InvariantError
from holdem.core.player import Player, PlayerStatus
from holdem.core.pot import Pot, PotPortion
from holdem.tests.anti_cheat.core_usage_checker import CoreUsageChecker


def contributor(pid, invested, status=PlayerStatus.ACTIVE, chips=0):
    return Player(pid, pid, chips, total_bet_this_hand=invested, current_bet=invested, status=status)


def filled_pot(players, strict=True):
    pot = Pot(strict_invariants=strict)
    for player in players:
        pot.add(player.total_bet_this_hand)
    return pot


@pytest.mark.unit
class TestPotPortions:
    """分池切分"""

    def test_three_all_in_levels(self):
        players = [
            contributor("a", 30, PlayerStatus.ALL_IN),
            contributor("b", 50, PlayerStatus.ALL_IN),
            contributor("c", 100, chips=900),
            contributor("d", 100, chips=900),
        ]
        pot = filled_pot(players)
        CoreUsageChecker.verify_real_objects(pot, "Pot")
        portions = pot.recalculate(players)

        assert [p.amount for p in portions] == [120, 60, 100]
        assert portions[0].eligible_player_ids == frozenset("abcd")
        assert portions[1].eligible_player_ids == frozenset("bcd")
        assert portions[2].eligible_player_ids == frozenset("cd")
        assert pot.main_pot == 120
        assert [p.amount for p in pot.side_pots] == [60, 100]
        assert sum(p.amount for p in portions) == pot.running_total == 280

    def test_folded_money_stays_in_pot_without_eligibility(self):
        players = [
            contributor("a", 40, PlayerStatus.FOLDED),
            contributor("b", 100),
            contributor("c", 100),
        ]
        portions = filled_pot(players).recalculate(players)
        assert len(portions) == 1
        assert portions[0].amount == 240
        assert portions[0].eligible_player_ids == frozenset("bc")

    def test_folded_top_contributor_merges_into_previous_portion(self):
        players = [
            contributor("a", 50, PlayerStatus.ALL_IN),
            contributor("b", 80),
            contributor("c", 120, PlayerStatus.FOLDED),
        ]
        portions = filled_pot(players).recalculate(players)
        assert [p.amount for p in portions] == [150, 100]
        assert portions[1].eligible_player_ids == frozenset("b")

    def test_empty_pot(self):
        pot = Pot()
        assert pot.recalculate([Player("a", "a", 100)]) == []
        assert pot.main_pot == 0
        assert pot.side_pots == ()

    def test_mismatched_total_raises_in_strict_mode(self):
        players = [contributor("a", 50), contributor("b", 50)]
        pot = Pot()
        pot.add(90)
        with pytest.raises(InvariantError):
            pot.recalculate(players)

    def test_lenient_mode_repairs_main_pot(self):
        players = [contributor("a", 50), contributor("b", 50)]
        pot = Pot(strict_invariants=False)
        pot.add(110)
        portions = pot.recalculate(players)
        assert portions[0].amount == 110


@pytest.mark.unit
class TestPotBookkeeping:

    def test_add_rejects_negative(self):
        with pytest.raises(ValueError):
            Pot().add(-5)

    def test_clear_returns_total(self):
        pot = Pot()
        pot.add(70)
        assert pot.clear() == 70
        assert pot.total == 0

    def test_portion_validation(self):
        with pytest.raises(ValueError):
            PotPortion(-1, frozenset("a"))
        with pytest.raises(ValueError):
            PotPortion(10, frozenset())


@pytest.mark.unit
class TestUncalledBet:
    """未被跟注部分的退还"""

    def test_excess_over_second_highest_is_returned(self):
        players = [contributor("a", 300, PlayerStatus.ALL_IN), contributor("b", 120, chips=50)]
        pot = filled_pot(players)
        returned = pot.return_uncalled_bet(players)

        assert returned.player_id == "a"
        assert returned.amount == 180
        assert players[0].chips == 180
        assert players[0].total_bet_this_hand == 120
        assert players[0].status == PlayerStatus.ACTIVE
        assert pot.running_total == 240

    def test_folded_money_is_not_a_call(self):
        players = [contributor("a", 300, PlayerStatus.ALL_IN), contributor("b", 1000),
                   contributor("c", 800, PlayerStatus.FOLDED)]
        pot = filled_pot(players)
        returned = pot.return_uncalled_bet(players)

        assert returned.player_id == "b"
        assert returned.amount == 700
        assert players[1].total_bet_this_hand == 300
        assert players[2].total_bet_this_hand == 800
        assert pot.running_total == 1400
        portions = pot.recalculate(players)
        assert [p.amount for p in portions] == [1400]
        assert portions[0].eligible_player_ids == frozenset("ab")

    def test_everyone_folds_to_a_raise(self):
        players = [contributor("sb", 10, PlayerStatus.FOLDED), contributor("bb", 20, PlayerStatus.FOLDED),
                   contributor("btn", 60, chips=940)]
        pot = filled_pot(players)
        returned = pot.return_uncalled_bet(players)
        assert returned.amount == 60
        assert players[2].chips == 1000
        assert pot.running_total == 30

    def test_equal_top_contenders_return_nothing(self):
        players = [contributor("a", 100), contributor("b", 100),
                   contributor("c", 400, PlayerStatus.FOLDED)]
        assert filled_pot(players).return_uncalled_bet(players) is None

    def test_single_contributor_gets_everything_back(self):
        players = [contributor("a", 20), Player("b", "b", 100)]
        pot = filled_pot(players)
        returned = pot.return_uncalled_bet(players)
        assert returned.amount == 20
        assert pot.running_total == 0
