"""
下注验证器

提供下注操作的合法性验证功能，验证不修改任何状态。
"""

from typing import Iterable

from ..player.player import Player
from ..player.types import PlayerStatus
from .betting_types import ActionType, BettingRoundState, LegalActions, PlayerAction

__all__ = ['BettingValidator', 'BetValidationResult']


class BetValidationResult:
    """下注验证结果"""

    def __init__(self, is_valid: bool, error_message: str = ""):
        self.is_valid = is_valid
        self.error_message = error_message

    def __bool__(self) -> bool:
        return self.is_valid

    def __str__(self) -> str:
        return f"BetValidationResult(valid={self.is_valid}, error='{self.error_message}')"


class BettingValidator:
    """
    下注验证器

    所有方法都是静态的纯函数：输入当前轮次状态与玩家，输出验证结果。
    """

    @staticmethod
    def validate(state: BettingRoundState, player: Player, action: PlayerAction) -> BetValidationResult:
        """
        验证一次玩家行动.

        Args:
            state: 本轮下注状态
            player: 行动玩家
            action: 行动

        Returns:
            验证结果
        """
        if player.status != PlayerStatus.ACTIVE:
            return BetValidationResult(False, f"玩家{player.player_id}当前状态{player.status.name}不能行动")
        if action.action_type.is_forced:
            return BetValidationResult(False, "强制下注不能作为玩家行动提交")

        handlers = {
            ActionType.FOLD: BettingValidator.validate_fold_action,
            ActionType.CHECK: BettingValidator.validate_check_action,
            ActionType.CALL: BettingValidator.validate_call_action,
            ActionType.RAISE: BettingValidator.validate_raise_action,
            ActionType.ALL_IN: BettingValidator.validate_all_in_action,
        }
        return handlers[action.action_type](state, player, action)

    @staticmethod
    def validate_fold_action(state: BettingRoundState, player: Player,
                             action: PlayerAction) -> BetValidationResult:
        """弃牌总是合法的"""
        return BetValidationResult(True)

    @staticmethod
    def validate_check_action(state: BettingRoundState, player: Player,
                              action: PlayerAction) -> BetValidationResult:
        """
        验证过牌操作的合法性

        只有玩家本轮下注已等于当前最高下注时才能过牌。
        """
        if state.current_bet != player.current_bet:
            owed = state.current_bet - player.current_bet
            return BetValidationResult(False, f"需要跟注{owed}，不能过牌")
        return BetValidationResult(True)

    @staticmethod
    def validate_call_action(state: BettingRoundState, player: Player,
                             action: PlayerAction) -> BetValidationResult:
        """验证跟注操作的合法性"""
        if state.current_bet <= player.current_bet:
            return BetValidationResult(False, "没有需要跟注的下注，请过牌")
        return BetValidationResult(True)

    @staticmethod
    def validate_raise_action(state: BettingRoundState, player: Player,
                              action: PlayerAction) -> BetValidationResult:
        """
        验证加注操作的合法性

        ``action.amount`` 是加注到的本轮总下注额。
        """
        raise_to = action.amount
        if raise_to <= state.current_bet:
            return BetValidationResult(False, f"加注金额{raise_to}必须大于当前下注额{state.current_bet}")

        if state.is_locked and state.has_acted.get(player.player_id, False):
            return BetValidationResult(False, "不足额全押未重新开放行动，只能跟注或弃牌")

        raise_increment = raise_to - state.current_bet
        if raise_increment < state.effective_min_raise:
            return BetValidationResult(
                False, f"加注幅度{raise_increment}不能小于最小加注额{state.effective_min_raise}"
            )

        needed = raise_to - player.current_bet
        if needed > player.chips:
            return BetValidationResult(
                False, f"玩家{player.player_id}筹码不足: 需要{needed}, 可用{player.chips}"
            )
        return BetValidationResult(True)

    @staticmethod
    def validate_all_in_action(state: BettingRoundState, player: Player,
                               action: PlayerAction) -> BetValidationResult:
        """
        验证全押操作的合法性

        全押超过当前下注即构成加注，被锁定的已行动玩家不能这样做。
        """
        if player.chips <= 0:
            return BetValidationResult(False, f"玩家{player.player_id}没有可用筹码")
        new_total = player.current_bet + player.chips
        if (new_total > state.current_bet and state.is_locked
                and state.has_acted.get(player.player_id, False)):
            return BetValidationResult(False, "不足额全押未重新开放行动，全押会构成加注")
        return BetValidationResult(True)

    @staticmethod
    def legal_actions(state: BettingRoundState, player: Player,
                      players: Iterable[Player] = ()) -> LegalActions:
        """
        计算玩家当前的合法行动集合.

        Args:
            state: 本轮下注状态
            player: 行动玩家
            players: 全部玩家；没有其他可行动对手时不允许加注

        Returns:
            LegalActions: 合法行动集合；玩家不能行动时全部为False
        """
        if player.status != PlayerStatus.ACTIVE:
            return LegalActions(player_id=player.player_id, can_fold=False)

        owed = state.current_bet - player.current_bet
        can_check = owed <= 0
        can_call = owed > 0
        call_amount = min(owed, player.chips) if can_call else 0

        max_raise_to = player.current_bet + player.chips
        min_raise_to = state.current_bet + max(state.effective_min_raise, 1)
        others_can_respond = any(
            other.player_id != player.player_id and other.status == PlayerStatus.ACTIVE
            for other in players
        )
        locked_out = state.is_locked and state.has_acted.get(player.player_id, False)
        can_raise = (others_can_respond and not locked_out and min_raise_to <= max_raise_to)
        can_all_in = player.chips > 0 and not (locked_out and max_raise_to > state.current_bet)

        return LegalActions(
            player_id=player.player_id,
            can_fold=True,
            can_check=can_check,
            can_call=can_call,
            call_amount=call_amount,
            can_raise=can_raise,
            min_raise_to=min_raise_to if can_raise else 0,
            max_raise_to=max_raise_to if can_raise else 0,
            can_all_in=can_all_in,
        )
