"""
德州扑克引擎

编排一手牌的完整生命周期：移动庄家、前注与盲注、发手牌、逐街下注、
全押后跑完公共牌、摊牌分池、淘汰与盲注升级。

引擎是回合制的：同一时刻只处理一个行动，所有状态修改在 ``process_action``
返回前同步完成。
"""

import logging
import random
import threading
from typing import Dict, List, Optional, Sequence

from ..betting.betting_manager import BettingManager
from ..betting.betting_types import ActionType, BetRecord, LegalActions, PlayerAction, Street
from ..deck.card import Card
from ..deck.deck import Deck
from ..events.domain_events import DomainEvent, EventType
from ..events.event_bus import EventBus
from ..invariant.card_distribution_checker import CardDistributionChecker
from ..invariant.chip_conservation_checker import ChipConservationChecker
from ..invariant.types import InvariantCheckResult, InvariantError
from ..player.player import Player
from ..player.types import PlayerStatus
from ..pot.pot import Pot
from ..rules.types import TableRules, TournamentConfig
from ..showdown.showdown_manager import ShowdownManager, ShowdownResult
from .tournament import FinalStanding, TournamentState
from .types import ActionOutcome, PlayerView, TableSnapshot

__all__ = ['PokerEngine']

logger = logging.getLogger(__name__)


class PokerEngine:
    """
    德州扑克手牌生命周期引擎

    玩家列表的下标即座位号。引擎独占玩家对象的修改权，
    外部通过 ``process_action`` 提交行动、通过 ``snapshot`` 读取状态。

    Examples:
        >>> engine = PokerEngine(players, TableRules(small_blind=5, big_blind=10))
        >>> engine.start_hand()
        True
        >>> outcome = engine.process_action(PlayerAction.call())
    """

    def __init__(self, players: Sequence[Player], rules: Optional[TableRules] = None,
                 tournament: Optional[TournamentConfig] = None,
                 rng: Optional[random.Random] = None,
                 event_bus: Optional[EventBus] = None,
                 table_id: str = "table-1"):
        """
        初始化引擎

        Args:
            players: 按座位顺序排列的玩家
            rules: 牌桌规则；提供锦标赛配置时盲注取自第一级
            tournament: 锦标赛配置，None表示现金局（盲注不升级）
            rng: 洗牌用随机数生成器
            event_bus: 事件总线，None时创建独立的总线
            table_id: 牌桌ID，作为事件的聚合根ID

        Raises:
            ValueError: 玩家数不在规则允许范围内或玩家ID重复时
        """
        base_rules = rules or TableRules()
        self._rules = tournament.to_table_rules(base_rules) if tournament else base_rules
        self._players: List[Player] = list(players)
        if not self._rules.min_players <= len(self._players) <= self._rules.max_players:
            raise ValueError(
                f"玩家数{len(self._players)}不在允许范围"
                f"[{self._rules.min_players}, {self._rules.max_players}]内"
            )
        ids = [p.player_id for p in self._players]
        if len(set(ids)) != len(ids):
            raise ValueError("玩家ID不能重复")
        for seat, player in enumerate(self._players):
            player.seat = seat

        self._table_id = table_id
        self._rng = rng or random.Random()
        self._event_bus = event_bus or EventBus()
        self._tournament = TournamentState(tournament)

        self._small_blind = self._rules.small_blind
        self._big_blind = self._rules.big_blind
        self._ante = self._rules.ante

        self._deck = Deck(self._rng)
        self._pot = Pot(strict_invariants=self._rules.strict_invariants)
        self._betting = BettingManager(self._big_blind)
        self._showdown = ShowdownManager()
        self._chip_checker = ChipConservationChecker()
        self._card_checker = CardDistributionChecker()

        self._hand_number = 0
        self._street = Street.PRE_FLOP
        self._community_cards: List[Card] = []
        self._dealer_seat: Optional[int] = None
        self._small_blind_seat: Optional[int] = None
        self._big_blind_seat: Optional[int] = None
        self._active_player_index: Optional[int] = None
        self._is_hand_over = True
        self._is_game_over = False
        self._history: List[BetRecord] = []
        self._preflop_aggressor_id: Optional[str] = None
        self._hand_start_chips: Dict[str, int] = {}
        self._last_result: Optional[ShowdownResult] = None
        self._violations: List[InvariantCheckResult] = []

        self._action_lock = threading.Lock()

    # ------------------------------------------------------------------
    # 只读属性
    # ------------------------------------------------------------------

    @property
    def table_id(self) -> str:
        return self._table_id

    @property
    def players(self) -> List[Player]:
        return list(self._players)

    @property
    def rules(self) -> TableRules:
        return self._rules

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    @property
    def hand_number(self) -> int:
        return self._hand_number

    @property
    def street(self) -> Street:
        return self._street

    @property
    def community_cards(self) -> List[Card]:
        return list(self._community_cards)

    @property
    def pot(self) -> Pot:
        return self._pot

    @property
    def current_bet(self) -> int:
        return self._betting.state.current_bet

    @property
    def min_raise(self) -> int:
        return self._betting.state.min_raise

    @property
    def dealer_seat(self) -> Optional[int]:
        return self._dealer_seat

    @property
    def small_blind_seat(self) -> Optional[int]:
        return self._small_blind_seat

    @property
    def big_blind_seat(self) -> Optional[int]:
        return self._big_blind_seat

    @property
    def blinds(self) -> tuple:
        """(小盲, 大盲, 前注)"""
        return self._small_blind, self._big_blind, self._ante

    @property
    def active_player_index(self) -> Optional[int]:
        """当前需要行动的座位；None表示本街没有人需要行动"""
        return self._active_player_index

    @property
    def current_player(self) -> Optional[Player]:
        if self._active_player_index is None:
            return None
        return self._players[self._active_player_index]

    @property
    def is_hand_over(self) -> bool:
        return self._is_hand_over

    @property
    def is_game_over(self) -> bool:
        return self._is_game_over

    @property
    def history(self) -> List[BetRecord]:
        return list(self._history)

    @property
    def preflop_aggressor_id(self) -> Optional[str]:
        return self._preflop_aggressor_id

    @property
    def last_result(self) -> Optional[ShowdownResult]:
        return self._last_result

    @property
    def winners(self) -> tuple:
        return self._last_result.winners if self._last_result else ()

    @property
    def tournament(self) -> TournamentState:
        return self._tournament

    @property
    def invariant_failures(self) -> List[InvariantCheckResult]:
        """非严格模式下记录的不变量失败"""
        return list(self._violations)

    # ------------------------------------------------------------------
    # 位置
    # ------------------------------------------------------------------

    def next_active_player_index(self, after: int) -> Optional[int]:
        """
        ``after`` 之后（顺时针）第一个仍可行动的座位

        Returns:
            Optional[int]: 座位号；没有可行动玩家时为None
        """
        return self._next_seat(after, lambda p: p.status == PlayerStatus.ACTIVE)

    def seat_offset_from_dealer(self, seat: int) -> int:
        """相对庄家的座位偏移（0=庄家，1=小盲，2=大盲，3=枪口，...）"""
        dealer = self._dealer_seat if self._dealer_seat is not None else 0
        return (seat - dealer) % len(self._players)

    def is_late_position(self, seat: int) -> bool:
        """庄家、关煞位、劫持位"""
        offset = self.seat_offset_from_dealer(seat)
        return offset == 0 or offset >= len(self._players) - 2

    def _next_seat(self, after: int, predicate) -> Optional[int]:
        count = len(self._players)
        for step in range(1, count + 1):
            seat = (after + step) % count
            if predicate(self._players[seat]):
                return seat
        return None

    def _next_to_act(self, after: int) -> Optional[int]:
        return self._next_seat(after, self._betting.needs_to_act)

    # ------------------------------------------------------------------
    # 手牌开始
    # ------------------------------------------------------------------

    def start_hand(self, deck: Optional[Deck] = None) -> bool:
        """
        开始新的一手牌

        Args:
            deck: 预先叠好的牌组（测试用）；None时重置并洗牌

        Returns:
            bool: 是否成功开始；有筹码的玩家不足两人时返回False

        Raises:
            RuntimeError: 上一手牌尚未结束时
        """
        if not self._is_hand_over:
            raise RuntimeError("上一手牌尚未结束")
        if self._is_game_over:
            logger.info("比赛已结束，不再开始新的一手")
            return False

        for player in self._players:
            player.reset_for_new_hand()
        seated = [p for p in self._players if p.status == PlayerStatus.ACTIVE]
        if len(seated) < 2:
            logger.warning(f"有筹码的玩家不足两人({len(seated)})，无法开始新的一手")
            return False

        self._hand_number += 1
        if deck is None:
            self._deck.reset()
            self._deck.shuffle()
        else:
            self._deck = deck
        self._community_cards = []
        self._pot.reset()
        self._street = Street.PRE_FLOP
        self._history = []
        self._preflop_aggressor_id = None
        self._last_result = None
        self._is_hand_over = False
        self._active_player_index = None
        self._hand_start_chips = {p.player_id: p.chips for p in self._players}

        start_from = self._dealer_seat if self._dealer_seat is not None else -1
        self._dealer_seat = self._next_seat(start_from, lambda p: p.status == PlayerStatus.ACTIVE)
        if len(seated) == 2:
            self._small_blind_seat = self._dealer_seat
        else:
            self._small_blind_seat = self.next_active_player_index(self._dealer_seat)
        self._big_blind_seat = self.next_active_player_index(self._small_blind_seat)

        self._betting.big_blind = self._big_blind
        self._betting.start_round(self._players, Street.PRE_FLOP)
        self._post_forced_bets()
        self._betting.open_preflop()
        self._deal_hole_cards()

        logger.info(
            f"第{self._hand_number}手开始: 庄家={self._players[self._dealer_seat].name}, "
            f"小盲={self._players[self._small_blind_seat].name}, "
            f"大盲={self._players[self._big_blind_seat].name}"
        )
        self._publish(EventType.HAND_STARTED, {
            'dealer_seat': self._dealer_seat,
            'small_blind_seat': self._small_blind_seat,
            'big_blind_seat': self._big_blind_seat,
            'small_blind': self._small_blind,
            'big_blind': self._big_blind,
            'ante': self._ante,
            'players': [p.player_id for p in self._players if p.in_hand],
            'starting_chips': dict(self._hand_start_chips),
        })
        self._publish(EventType.BLINDS_POSTED, {
            'posts': [
                {'player_id': r.player_id, 'action_type': r.action_type.name, 'amount': r.amount}
                for r in self._history
            ],
            'pot_total': self._pot.total,
        })

        self._active_player_index = self._next_to_act(self._big_blind_seat)
        if self._active_player_index is None:
            self._close_betting_round()
        return True

    def _post_forced_bets(self) -> None:
        if self._ante > 0:
            for seat in range(len(self._players)):
                player = self._players[(self._dealer_seat + 1 + seat) % len(self._players)]
                if player.status == PlayerStatus.ACTIVE:
                    self._post(player, self._ante, ActionType.ANTE)
        if self._small_blind > 0:
            self._post(self._players[self._small_blind_seat], self._small_blind,
                       ActionType.SMALL_BLIND)
        if self._big_blind > 0:
            self._post(self._players[self._big_blind_seat], self._big_blind,
                       ActionType.BIG_BLIND)

    def _post(self, player: Player, amount: int, action_type: ActionType) -> None:
        if player.status != PlayerStatus.ACTIVE:
            return
        pot_before = self._pot.total
        paid = self._betting.post_forced_bet(player, amount, action_type)
        self._pot.add(paid)
        self._history.append(BetRecord(
            player_id=player.player_id,
            street=Street.PRE_FLOP,
            action_type=action_type,
            amount=paid,
            total_bet=player.current_bet,
            pot_before=pot_before,
        ))

    def _deal_hole_cards(self) -> None:
        """从庄家左手开始每人依次发一张，共两轮"""
        count = len(self._players)
        order = [self._players[(self._dealer_seat + 1 + i) % count] for i in range(count)]
        receivers = [p for p in order if p.in_hand]
        for _ in range(2):
            for player in receivers:
                player.hole_cards.append(self._deck.deal_card())
        self._check_cards()

    # ------------------------------------------------------------------
    # 行动处理
    # ------------------------------------------------------------------

    def legal_actions(self) -> Optional[LegalActions]:
        """当前行动玩家的合法行动；没有人需要行动时为None"""
        player = self.current_player
        if player is None or self._is_hand_over:
            return None
        return self._betting.legal_actions(player)

    def process_action(self, action: PlayerAction, player_id: Optional[str] = None) -> ActionOutcome:
        """
        处理当前行动玩家的一个行动

        同一时刻只接受一个行动：处理期间（包括事件回调中的重入调用）的其他调用会被拒绝。
        非法行动不修改任何状态。

        Args:
            action: 玩家行动
            player_id: 提交者ID；提供时必须是当前行动玩家

        Returns:
            ActionOutcome: 处理结果
        """
        if not self._action_lock.acquire(blocking=False):
            return self._reject(action, player_id, "另一个行动正在处理中")
        try:
            return self._process_action(action, player_id)
        finally:
            self._action_lock.release()

    def _process_action(self, action: PlayerAction, player_id: Optional[str]) -> ActionOutcome:
        if self._is_hand_over:
            return self._reject(action, player_id, "本手牌已结束")
        player = self.current_player
        if player is None:
            return self._reject(action, player_id, "当前没有需要行动的玩家")
        if player_id is not None and player_id != player.player_id:
            return self._reject(action, player_id, f"还没轮到该玩家行动，当前行动者: {player.player_id}")

        pot_before = self._pot.total
        result = self._betting.apply(player, action)
        if not result:
            return self._reject(action, player.player_id, result.error_message)

        self._pot.add(result.chips_moved)
        record = BetRecord(
            player_id=player.player_id,
            street=self._street,
            action_type=action.action_type,
            amount=result.chips_moved,
            total_bet=player.current_bet,
            pot_before=pot_before,
            is_raise=result.is_raise,
        )
        self._history.append(record)
        if result.is_raise and self._street == Street.PRE_FLOP:
            self._preflop_aggressor_id = player.player_id

        logger.debug(
            f"{player.name}: {action} | chips={player.chips} bet={player.current_bet} "
            f"pot={self._pot.total}"
        )
        self._publish(EventType.PLAYER_ACTION_EXECUTED, {
            'player_id': player.player_id,
            'seat': player.seat,
            'street': self._street.name,
            'action_type': action.action_type.name,
            'amount': result.chips_moved,
            'total_bet': player.current_bet,
            'pot_before': pot_before,
            'pot_total': self._pot.total,
            'is_raise': result.is_raise,
            'is_voluntary': record.is_voluntary,
            'reopened': result.reopened,
            'seat_offset': self.seat_offset_from_dealer(player.seat),
        })

        self._advance(player.seat)
        return ActionOutcome(
            success=True,
            action=action,
            player_id=player.player_id,
            chips_moved=result.chips_moved,
            street=self._street,
            current_bet=self._betting.state.current_bet,
            pot_total=self._pot.total,
            active_player_index=self._active_player_index,
            is_hand_over=self._is_hand_over,
            winners=self.winners,
        )

    def _reject(self, action: PlayerAction, player_id: Optional[str], reason: str) -> ActionOutcome:
        logger.warning(f"拒绝行动 {action} (玩家{player_id}): {reason}")
        self._publish(EventType.INVALID_ACTION_ATTEMPTED, {
            'player_id': player_id,
            'action_type': action.action_type.name if action else None,
            'amount': action.amount if action else 0,
            'reason': reason,
        })
        return ActionOutcome(
            success=False,
            error_message=reason,
            action=action,
            player_id=player_id,
            street=self._street,
            current_bet=self._betting.state.current_bet,
            pot_total=self._pot.total,
            active_player_index=self._active_player_index,
            is_hand_over=self._is_hand_over,
            winners=self.winners,
        )

    def _advance(self, last_seat: int) -> None:
        in_hand = [p for p in self._players if p.in_hand]
        if len(in_hand) == 1:
            self._end_hand()
            return
        if self._betting.is_round_complete():
            self._close_betting_round()
            return
        self._active_player_index = self._next_to_act(last_seat)

    # ------------------------------------------------------------------
    # 街道推进
    # ------------------------------------------------------------------

    def _close_betting_round(self) -> None:
        """本轮下注结束：进入下一条街、跑完公共牌或摊牌"""
        self._active_player_index = None
        if self._street == Street.RIVER:
            self._end_hand()
            return
        if len(self._betting.players_able_to_act()) < 2:
            self._run_out_board()
            return

        self._deal_street(self._street.next_street)
        self._betting.start_round(self._players, self._street)
        self._active_player_index = self._next_to_act(self._dealer_seat)
        if self._active_player_index is None:
            self._close_betting_round()

    def _deal_street(self, street: Street) -> None:
        self._deck.burn()
        self._community_cards.extend(self._deck.deal_cards(street.cards_to_deal))
        self._street = street
        self._check_cards()
        board = ' '.join(str(card) for card in self._community_cards)
        logger.info(f"--- {street.name} | 公共牌: {board} ---")
        self._publish(EventType.STREET_CHANGED, {
            'street': street.name,
            'community_cards': [str(card) for card in self._community_cards],
            'pot_total': self._pot.total,
        })

    def _run_out_board(self) -> None:
        """可以行动的玩家不足两人：一次性发完剩余公共牌后摊牌"""
        logger.debug(f"可行动玩家不足两人，从{self._street.name}直接发完公共牌")
        while self._street != Street.RIVER:
            self._deal_street(self._street.next_street)
        self._end_hand()

    # ------------------------------------------------------------------
    # 手牌结束
    # ------------------------------------------------------------------

    def _end_hand(self) -> None:
        if self._is_hand_over:
            return
        self._active_player_index = None

        in_hand = [p for p in self._players if p.in_hand]
        if len(in_hand) == 1:
            # 无人争夺：整个底池直接判给最后一名玩家，不计算分池
            pot_size = self._pot.total
            result = self._showdown.award_uncontested(in_hand[0], pot_size)
            self._pot.clear()
        else:
            uncalled = self._pot.return_uncalled_bet(self._players)
            if uncalled is not None:
                self._publish(EventType.UNCALLED_BET_RETURNED, {
                    'player_id': uncalled.player_id,
                    'amount': uncalled.amount,
                })
            pot_size = self._pot.total
            portions = self._pot.recalculate(self._players)
            self._street = Street.SHOWDOWN
            result = self._showdown.resolve(self._players, portions, self._community_cards,
                                            self._dealer_seat)
            self._pot.clear()

        self._last_result = result
        self._is_hand_over = True
        self._check_chip_conservation()

        names = ', '.join(self._players_by_id(result.winners))
        logger.info(f"第{self._hand_number}手结束: 赢家 {names}, 底池 {pot_size}")
        self._publish(EventType.HAND_ENDED, {
            'winners': list(result.winners),
            'awards': dict(result.awards),
            'pot_total': pot_size,
            'showdown': result.evaluated,
            'portions': [
                {'amount': award.amount, 'winners': list(award.winner_ids),
                 'shares': dict(award.shares),
                 'hand': str(award.winning_hand) if award.winning_hand else None}
                for award in result.portion_awards
            ],
            'hands': {pid: str(hand) for pid, hand in result.hand_results.items()},
            'community_cards': [str(card) for card in self._community_cards],
        })

        self._update_tilt(pot_size)
        self._record_eliminations()
        self._check_blind_level()
        self._check_game_over()

    def _players_by_id(self, player_ids) -> List[str]:
        by_id = {p.player_id: p for p in self._players}
        return [by_id[pid].name for pid in player_ids]

    def _update_tilt(self, pot_size: int) -> None:
        for player in self._players:
            if player.player_id not in self._hand_start_chips:
                continue
            lost = player.chips < self._hand_start_chips[player.player_id]
            player.update_tilt(lost, pot_size)

    def _record_eliminations(self) -> None:
        busted = [
            p for p in self._players
            if p.chips == 0 and self._hand_start_chips.get(p.player_id, 0) > 0
        ]
        for player in busted:
            player.status = PlayerStatus.ELIMINATED
        records = self._tournament.record_eliminations(
            busted, self._hand_number, self._hand_start_chips
        )
        for record in records:
            logger.info(f"{record.name}在第{record.hand_number}手被淘汰")
            self._publish(EventType.PLAYER_ELIMINATED, {
                'player_id': record.player_id,
                'hand_number': record.hand_number,
                'starting_stack': record.starting_stack,
            })

    def _check_blind_level(self) -> None:
        level = self._tournament.record_hand()
        if level is None:
            return
        self._small_blind = level.small_blind
        self._big_blind = level.big_blind
        self._ante = level.ante
        self._publish(EventType.BLIND_LEVEL_CHANGED, {
            'level': level.level,
            'small_blind': level.small_blind,
            'big_blind': level.big_blind,
            'ante': level.ante,
        })

    def _check_game_over(self) -> None:
        alive = [p for p in self._players if p.chips > 0]
        if len(alive) > 1:
            return
        self._is_game_over = True
        standings = self.final_standings()
        logger.info(f"比赛结束: 冠军 {standings[0].name if standings else '无'}")
        self._publish(EventType.GAME_OVER, {
            'standings': [
                {'rank': s.rank, 'player_id': s.player_id, 'chips': s.final_chips,
                 'payout_share': s.payout_share}
                for s in standings
            ],
        })

    def final_standings(self) -> List[FinalStanding]:
        """按名次排列的最终结果"""
        return self._tournament.final_standings(self._players, self._hand_number)

    # ------------------------------------------------------------------
    # 不变量
    # ------------------------------------------------------------------

    def _check_chip_conservation(self) -> None:
        expected = sum(self._hand_start_chips.values())
        self._handle_invariant(self._chip_checker.check(self._players, self._pot.total, expected))

    def _check_cards(self) -> None:
        self._handle_invariant(self._card_checker.check(self._deck.dealt_cards))

    def _handle_invariant(self, result: InvariantCheckResult) -> None:
        if result:
            return
        self._publish(EventType.INVARIANT_VIOLATED, {
            'invariant_type': result.invariant_type.name,
            'description': result.describe(),
        })
        if self._rules.strict_invariants:
            raise InvariantError.from_result(result)
        logger.error(f"不变量被破坏: {result.describe()}")
        self._violations.append(result)

    # ------------------------------------------------------------------
    # 快照与事件
    # ------------------------------------------------------------------

    def snapshot(self, viewer_id: Optional[str] = None) -> TableSnapshot:
        """
        生成牌桌快照

        Args:
            viewer_id: 查看者ID；只有该玩家的手牌可见（摊牌后在手玩家的手牌全部可见）
        """
        revealed = self._is_hand_over and self._last_result is not None and self._last_result.evaluated
        views = tuple(
            PlayerView(
                player_id=p.player_id,
                name=p.name,
                seat=p.seat,
                chips=p.chips,
                current_bet=p.current_bet,
                total_bet_this_hand=p.total_bet_this_hand,
                status=p.status,
                hole_cards=tuple(p.hole_cards)
                if p.player_id == viewer_id or (revealed and p.in_hand) else (),
                is_human=p.is_human,
                ai_profile=p.ai_profile,
                tilt=p.tilt,
            )
            for p in self._players
        )
        state = self._betting.state
        return TableSnapshot(
            table_id=self._table_id,
            hand_number=self._hand_number,
            street=self._street,
            community_cards=tuple(self._community_cards),
            players=views,
            pot_total=self._pot.total,
            portions=self._pot.portions,
            current_bet=state.current_bet,
            min_raise=state.effective_min_raise,
            raise_count=state.raise_count,
            dealer_seat=self._dealer_seat,
            small_blind_seat=self._small_blind_seat,
            big_blind_seat=self._big_blind_seat,
            active_player_index=self._active_player_index,
            small_blind=self._small_blind,
            big_blind=self._big_blind,
            ante=self._ante,
            history=tuple(self._history),
            preflop_aggressor_id=self._preflop_aggressor_id,
            legal_actions=self.legal_actions(),
            payout_structure=tuple(self._tournament.payout_structure),
            is_hand_over=self._is_hand_over,
            viewer_id=viewer_id,
            winners=self.winners,
        )

    def _publish(self, event_type: EventType, data: dict) -> None:
        self._event_bus.publish(
            DomainEvent.create(event_type, self._table_id, data, hand_number=self._hand_number)
        )
