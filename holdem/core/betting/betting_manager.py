"""
下注管理器

处理一条街内的下注逻辑：验证并执行单次行动，维护本轮状态，判断本轮是否结束。
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..player.player import Player
from ..player.types import PlayerStatus
from .betting_types import ActionType, BettingRoundState, LegalActions, PlayerAction, Street
from .betting_validator import BettingValidator, BetValidationResult

__all__ = ['BettingManager', 'BetResult']

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BetResult:
    """
    下注结果

    Attributes:
        success: 是否成功执行
        action: 提交的行动
        error_message: 失败原因
        chips_moved: 从玩家筹码移入下注的金额
        reopened: 是否重新开放了其他玩家的行动
        is_raise: 是否抬高了本轮最高下注
    """
    success: bool
    action: Optional[PlayerAction]
    error_message: str = ""
    chips_moved: int = 0
    reopened: bool = False
    is_raise: bool = False

    def __bool__(self) -> bool:
        return self.success


class BettingManager:
    """
    下注管理器

    持有本街的 ``BettingRoundState``，对玩家对象直接记账。
    失败的行动不修改任何状态。

    Examples:
        >>> manager = BettingManager(big_blind=20)
        >>> manager.start_round(players, Street.FLOP)
        >>> manager.apply(players[0], PlayerAction.check())
    """

    def __init__(self, big_blind: int = 20):
        """
        初始化下注管理器

        Args:
            big_blind: 大盲注金额，也是每条街开始时的最小加注额
        """
        if big_blind < 0:
            raise ValueError("big_blind不能为负数")
        self._big_blind = big_blind
        self._players: List[Player] = []
        self._state = BettingRoundState(min_raise=big_blind, last_full_raise=big_blind)

    @property
    def state(self) -> BettingRoundState:
        return self._state

    @property
    def big_blind(self) -> int:
        return self._big_blind

    @big_blind.setter
    def big_blind(self, value: int) -> None:
        if value < 0:
            raise ValueError("big_blind不能为负数")
        self._big_blind = value

    def start_round(self, players: Sequence[Player], street: Street) -> None:
        """
        开始新的一条街

        清零每个玩家的本轮下注；仍可行动的玩家标记为未行动，全押者视为已行动。

        Args:
            players: 牌桌上全部玩家
            street: 新的街道
        """
        self._players = list(players)
        self._state = BettingRoundState(
            street=street,
            current_bet=0,
            min_raise=self._big_blind,
            last_full_raise=self._big_blind,
        )
        for player in self._players:
            player.current_bet = 0
            if player.status == PlayerStatus.ACTIVE:
                self._state.has_acted[player.player_id] = False
            elif player.status == PlayerStatus.ALL_IN:
                self._state.has_acted[player.player_id] = True

    def post_forced_bet(self, player: Player, amount: int, action_type: ActionType) -> int:
        """
        投入强制下注（盲注/前注）

        筹码不足时投入全部筹码并全押，而不是拒绝。前注计入本手总投入和底池，
        但不计入本轮下注。

        Args:
            player: 玩家
            amount: 应投入金额
            action_type: SMALL_BLIND / BIG_BLIND / ANTE

        Returns:
            int: 实际投入金额
        """
        if not action_type.is_forced:
            raise ValueError(f"{action_type.name}不是强制下注")
        pay = min(max(amount, 0), player.chips)
        if action_type == ActionType.ANTE:
            player.chips -= pay
            player.total_bet_this_hand += pay
            if player.chips == 0 and player.status == PlayerStatus.ACTIVE:
                player.status = PlayerStatus.ALL_IN
        else:
            player.commit(pay)
            self._state.current_bet = max(self._state.current_bet, player.current_bet)

        if player.status == PlayerStatus.ALL_IN:
            self._state.has_acted[player.player_id] = True
        if pay < amount:
            logger.debug(f"玩家{player.player_id}{action_type.name}不足，全押{pay}")
        return pay

    def open_preflop(self) -> None:
        """盲注之后，本轮最高下注固定为完整大盲（即使大盲是短码全押）"""
        self._state.current_bet = max(self._state.current_bet, self._big_blind)
        self._state.min_raise = self._big_blind
        self._state.last_full_raise = self._big_blind

    def validate(self, player: Player, action: PlayerAction) -> BetValidationResult:
        return BettingValidator.validate(self._state, player, action)

    def legal_actions(self, player: Player) -> LegalActions:
        return BettingValidator.legal_actions(self._state, player, self._players)

    def apply(self, player: Player, action: PlayerAction) -> BetResult:
        """
        验证并执行玩家行动

        Args:
            player: 行动玩家
            action: 行动

        Returns:
            BetResult: 执行结果；验证失败时不修改任何状态
        """
        validation = self.validate(player, action)
        if not validation:
            return BetResult(False, action, validation.error_message)

        handlers = {
            ActionType.FOLD: self._execute_fold,
            ActionType.CHECK: self._execute_check,
            ActionType.CALL: self._execute_call,
            ActionType.RAISE: self._execute_raise,
            ActionType.ALL_IN: self._execute_all_in,
        }
        result = handlers[action.action_type](player, action)
        logger.debug(
            f"{player.player_id} {action} -> 投入{result.chips_moved}, "
            f"current_bet={self._state.current_bet}, min_raise={self._state.min_raise}"
        )
        return result

    def _execute_fold(self, player: Player, action: PlayerAction) -> BetResult:
        player.status = PlayerStatus.FOLDED
        self._state.has_acted[player.player_id] = True
        return BetResult(True, action)

    def _execute_check(self, player: Player, action: PlayerAction) -> BetResult:
        self._state.has_acted[player.player_id] = True
        return BetResult(True, action)

    def _execute_call(self, player: Player, action: PlayerAction) -> BetResult:
        owed = self._state.current_bet - player.current_bet
        moved = player.commit(min(owed, player.chips))
        self._state.has_acted[player.player_id] = True
        return BetResult(True, action, chips_moved=moved)

    def _execute_raise(self, player: Player, action: PlayerAction) -> BetResult:
        increment = action.amount - self._state.current_bet
        moved = player.commit(action.amount - player.current_bet)
        self._record_full_raise(player, action.amount, increment)
        return BetResult(True, action, chips_moved=moved, reopened=True, is_raise=True)

    def _execute_all_in(self, player: Player, action: PlayerAction) -> BetResult:
        new_total = player.current_bet + player.chips
        moved = player.commit(player.chips)
        self._state.has_acted[player.player_id] = True

        if new_total <= self._state.current_bet:
            return BetResult(True, action, chips_moved=moved)

        increment = new_total - self._state.current_bet
        if increment >= self._state.effective_min_raise:
            self._record_full_raise(player, new_total, increment)
            return BetResult(True, action, chips_moved=moved, reopened=True, is_raise=True)

        # 不足额全押：抬高下注但不重新开放行动
        self._state.current_bet = new_total
        self._state.min_raise = 0
        self._state.raise_count += 1
        self._state.last_aggressor_id = player.player_id
        return BetResult(True, action, chips_moved=moved, is_raise=True)

    def _record_full_raise(self, player: Player, raise_to: int, increment: int) -> None:
        self._state.current_bet = raise_to
        self._state.min_raise = increment
        self._state.last_full_raise = increment
        self._state.raise_count += 1
        self._state.last_aggressor_id = player.player_id
        for other in self._players:
            if other.player_id != player.player_id and other.status == PlayerStatus.ACTIVE:
                self._state.has_acted[other.player_id] = False
        self._state.has_acted[player.player_id] = True

    def needs_to_act(self, player: Player) -> bool:
        """玩家本轮是否还需要行动"""
        if player.status != PlayerStatus.ACTIVE:
            return False
        if not self._state.has_acted.get(player.player_id, False):
            return True
        return player.current_bet != self._state.current_bet

    def is_round_complete(self) -> bool:
        """
        本轮是否结束

        每个未弃牌的玩家要么已全押，要么已行动且本轮下注等于当前最高下注。
        """
        return not any(self.needs_to_act(player) for player in self._players)

    def players_able_to_act(self) -> List[Player]:
        """仍可自主行动（未弃牌、未全押）的玩家"""
        return [player for player in self._players if player.status == PlayerStatus.ACTIVE]
