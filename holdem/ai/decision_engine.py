"""
AI决策引擎

决策只依赖牌桌快照与注入的依赖（胜率计算器、对手模型表、随机数生成器），
不访问引擎的可变状态。流程：

1. 叠加倾斜得到有效参数，再叠加对手风格与筹码压力调整
2. 翻牌前用Chen公式与位置门槛决策，平衡策略改用按位置的开池/3-bet范围
3. 翻牌后用蒙特卡洛胜率、底池赔率、听牌与牌面结构决策，面对下注时参考诈唬检测
4. 把意向收敛为合法行动
"""

import logging
import random
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from ..core.betting.betting_types import ActionType, LegalActions, PlayerAction, Street
from ..core.deck.card import Card
from ..core.engine.types import PlayerView, TableSnapshot
from ..core.eval.evaluator import HandEvaluator
from ..core.eval.types import HandCategory
from ..core.player.profile import AIProfile
from ..core.player.types import PlayerStatus
from .analysis.board import BoardTexture, analyze_board_texture
from .analysis.draws import DrawInfo, analyze_draws
from .analysis.odds import implied_odds, is_positive_ev, pot_odds, stack_to_pot_ratio
from .analysis.position import is_late_position, position_name
from .analysis.preflop import PREMIUM_CHEN, STRONG_CHEN, chen_formula, chen_to_normalized
from .analysis.ranges import (HandRange, RangeAction, call_three_bet_range, estimate_range, narrow_range,
                              open_chen_threshold, opening_range, three_bet_chen_threshold, three_bet_range)
from .bluff_detector import BluffDetector
from .equity.monte_carlo import EquityCalculator
from .opponent.classifier import strategy_adjustment
from .opponent.playbook import playbook_adjustment
from .opponent.store import OpponentModelStore
from .stack_pressure import (StackPressureAdjustment, analyze_stack_situation,
                             stack_pressure_adjustment)
from .types import AIDecision, AIDecisionType, DecisionConfig, StrategyAdjustment

__all__ = ['DecisionEngine']

logger = logging.getLogger(__name__)

_DEALT_IN = (PlayerStatus.ACTIVE, PlayerStatus.ALL_IN, PlayerStatus.FOLDED)


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class _DecisionContext:
    """一次决策所需的全部输入"""
    snapshot: TableSnapshot
    player: PlayerView
    profile: AIProfile
    legal: LegalActions
    hole: Tuple[Card, ...]
    community: Tuple[Card, ...]
    call_amount: int
    pot: int
    big_blind: int
    current_bet: int
    min_raise: int
    seat_offset: int
    active_count: int
    spr: float
    is_pfr: bool
    raise_war: bool
    adjustment: StrategyAdjustment
    pressure: Optional[StackPressureAdjustment]

    @property
    def is_late(self) -> bool:
        return is_late_position(self.seat_offset, self.active_count)

    @property
    def position(self) -> str:
        return position_name(self.seat_offset, self.active_count)

    def raise_by(self, size: int) -> int:
        """在当前最高下注基础上再加 ``size``"""
        return self.current_bet + max(size, self.min_raise, 1)


def _decision(decision_type: AIDecisionType, reasoning: str, amount: int = 0,
              confidence: float = 0.7, equity: Optional[float] = None,
              pot_odds_value: float = 0.0) -> AIDecision:
    return AIDecision(decision_type, amount, confidence, reasoning, equity, pot_odds_value)


class DecisionEngine:
    """
    基于参数的AI决策引擎

    难度 >= 3 的角色使用对手建模，难度 4 的角色额外使用诈唬检测与范围估计；
    ``DecisionConfig`` 中的开关可以整体关闭这些功能。

    Args:
        equity_calculator: 胜率计算器（可带单手牌缓存）
        model_store: 对手模型表；None时不做对手建模
        config: 决策配置
        rng: 随机数生成器
        bluff_detector: 诈唬检测器
    """

    def __init__(self, equity_calculator: Optional[EquityCalculator] = None,
                 model_store: Optional[OpponentModelStore] = None,
                 config: Optional[DecisionConfig] = None,
                 rng: Optional[random.Random] = None,
                 bluff_detector: Optional[BluffDetector] = None):
        self._rng = rng or random.Random()
        self.config = config or DecisionConfig()
        self.equity_calculator = equity_calculator or EquityCalculator(rng=self._rng)
        self.model_store = model_store
        self.bluff_detector = bluff_detector or BluffDetector(self.config.bluff_full_confidence_hands)
        self._evaluator = HandEvaluator()

    def get_strategy_name(self) -> str:
        return "DecisionEngine"

    def make_decision(self, snapshot: TableSnapshot, player_id: str) -> PlayerAction:
        """决策并直接返回可提交给引擎的行动"""
        return self.decide_action(snapshot, player_id).to_action()

    def decide_action(self, snapshot: TableSnapshot, player_id: str) -> AIDecision:
        """
        为指定玩家做出决策

        Args:
            snapshot: 以该玩家视角生成的快照
            player_id: 行动玩家

        Returns:
            AIDecision: 已收敛为合法行动的决策

        Raises:
            ValueError: 快照中没有该玩家的合法行动或看不到其手牌时
        """
        legal = snapshot.legal_actions
        if legal is None or legal.player_id != player_id:
            raise ValueError(f"快照中没有 {player_id} 的合法行动")
        view = snapshot.player(player_id)
        if len(view.hole_cards) != 2:
            raise ValueError(f"快照中看不到 {player_id} 的手牌")

        cache = self.equity_calculator.cache
        if cache is not None:
            cache.begin_hand(f"{snapshot.table_id}#{snapshot.hand_number}")

        context = self._build_context(snapshot, view, legal)
        if snapshot.street == Street.PRE_FLOP:
            intent = self._preflop(context)
        else:
            intent = self._postflop(context)

        decision = self._finalize(intent, context)
        logger.debug(
            f"{view.name}[{context.profile.profile_id}] {snapshot.street.name}: "
            f"{decision.decision_type.name}"
            f"{f'({decision.amount})' if decision.amount else ''} - {decision.reasoning}"
        )
        return decision

    # ------------------------------------------------------------------
    # 上下文
    # ------------------------------------------------------------------

    def _build_context(self, snapshot: TableSnapshot, view: PlayerView,
                       legal: LegalActions) -> _DecisionContext:
        base = (view.ai_profile or AIProfile()).apply_tilt(view.tilt)
        adjustment = self._opponent_adjustment(snapshot, view.player_id, base)
        pressure = self._stack_pressure(snapshot, view)
        profile = self._adjust_profile(base, adjustment, pressure)

        call_amount = max(0, snapshot.current_bet - view.current_bet)
        dealt_in = [p for p in snapshot.players if p.status in _DEALT_IN]
        spr = stack_to_pot_ratio(view.chips, snapshot.pot_total)

        return _DecisionContext(
            snapshot=snapshot,
            player=view,
            profile=profile,
            legal=legal,
            hole=tuple(view.hole_cards),
            community=tuple(snapshot.community_cards),
            call_amount=call_amount,
            pot=snapshot.pot_total,
            big_blind=max(snapshot.big_blind, 1),
            current_bet=snapshot.current_bet,
            min_raise=snapshot.min_raise or snapshot.big_blind,
            seat_offset=self._seat_offset(snapshot, view.seat),
            active_count=len(dealt_in),
            spr=spr,
            is_pfr=snapshot.preflop_aggressor_id == view.player_id,
            raise_war=snapshot.raise_count >= self.config.raise_war_limit,
            adjustment=adjustment,
            pressure=pressure,
        )

    @staticmethod
    def _seat_offset(snapshot: TableSnapshot, seat: int) -> int:
        """只计算本手发到牌的座位，得到相对庄家的偏移"""
        if snapshot.dealer_seat is None:
            return 0
        count = len(snapshot.players)
        offset = 0
        index = snapshot.dealer_seat
        while index != seat:
            index = (index + 1) % count
            if snapshot.players[index].status in _DEALT_IN:
                offset += 1
        return offset

    def _uses_opponent_modeling(self, profile: AIProfile) -> bool:
        return (self.model_store is not None and self.config.use_opponent_modeling
                and profile.difficulty >= 3)

    def _uses_bluff_detection(self, profile: AIProfile) -> bool:
        return (self.model_store is not None and self.config.use_bluff_detection
                and profile.difficulty == 4)

    def _uses_range_analysis(self, profile: AIProfile) -> bool:
        return self.config.use_range_analysis and profile.difficulty == 4

    def _opponent_range(self, ctx: _DecisionContext, board: BoardTexture) -> Optional[HandRange]:
        """
        估计本街最后下注者的范围

        以对手位置的开池范围为起点，再按其本街最后一次行动收窄。
        """
        if not self._uses_range_analysis(ctx.profile):
            return None
        bettor = self._last_bettor(ctx.snapshot, ctx.player.player_id)
        if bettor is None:
            return None
        position = position_name(self._seat_offset(ctx.snapshot, bettor.seat), ctx.active_count)
        hand_range = estimate_range(position, RangeAction.RAISE)
        hand_range = narrow_range(hand_range, self._last_range_action(ctx.snapshot, bettor.player_id), board)
        logger.debug(f"{bettor.player_id} 翻后范围: {hand_range.description} ({hand_range.width:.0%})")
        return hand_range

    @staticmethod
    def _last_range_action(snapshot: TableSnapshot, player_id: str) -> RangeAction:
        """玩家本街最后一次行动；本街第一次加大下注算下注，之后的算加注"""
        last = RangeAction.CHECK
        raised = False
        for record in snapshot.history_for(snapshot.street):
            if record.is_aggressive:
                action = RangeAction.RAISE if raised else RangeAction.BET
                raised = True
            elif record.action_type == ActionType.FOLD:
                action = RangeAction.FOLD
            elif record.action_type in (ActionType.CALL, ActionType.ALL_IN):
                action = RangeAction.CALL
            elif record.action_type == ActionType.CHECK:
                action = RangeAction.CHECK
            else:
                continue
            if record.player_id == player_id:
                last = action
        return last

    @staticmethod
    def _last_bettor(snapshot: TableSnapshot, player_id: str) -> Optional[PlayerView]:
        """本街最后一个主动下注的对手；没有时取本轮下注最高的对手"""
        for record in reversed(snapshot.history_for(snapshot.street)):
            if record.player_id != player_id and record.is_aggressive:
                return snapshot.player(record.player_id)
        opponents = [p for p in snapshot.opponents_in_hand(player_id) if p.current_bet > 0]
        if opponents:
            return max(opponents, key=lambda p: p.current_bet)
        return None

    def _opponent_adjustment(self, snapshot: TableSnapshot, player_id: str,
                             profile: AIProfile) -> StrategyAdjustment:
        if not self._uses_opponent_modeling(profile):
            return StrategyAdjustment.balanced()

        target = self._last_bettor(snapshot, player_id)
        if target is None:
            opponents = snapshot.opponents_in_hand(player_id)
            if len(opponents) != 1:
                return StrategyAdjustment.balanced()
            target = opponents[0]

        model = self.model_store.get(target.player_id)
        if model is None or not model.is_reliable:
            return StrategyAdjustment.balanced()

        adjustment = strategy_adjustment(model.style).combine(playbook_adjustment(model))
        if not adjustment.is_neutral:
            logger.debug(f"针对 {target.player_id} ({model.style.value}) 调整: {adjustment}")
        return adjustment

    def _stack_pressure(self, snapshot: TableSnapshot,
                        view: PlayerView) -> Optional[StackPressureAdjustment]:
        if not self.config.use_stack_pressure or not snapshot.payout_structure:
            return None
        stacks = [p.chips + p.total_bet_this_hand for p in snapshot.players
                  if p.status != PlayerStatus.ELIMINATED]
        situation = analyze_stack_situation(view.chips + view.total_bet_this_hand, stacks,
                                            snapshot.payout_structure)
        return stack_pressure_adjustment(situation)

    @staticmethod
    def _adjust_profile(profile: AIProfile, adjustment: StrategyAdjustment,
                        pressure: Optional[StackPressureAdjustment]) -> AIProfile:
        tightness = profile.tightness
        aggression = profile.aggression
        if pressure is not None:
            tightness -= pressure.vpip_adjust
            aggression += pressure.aggression_adjust
        return replace(
            profile,
            tightness=_clamp(tightness),
            aggression=_clamp(aggression),
            bluff_freq=_clamp(profile.bluff_freq + adjustment.bluff_freq_adjust, 0.01, 0.80),
            call_down_tendency=_clamp(profile.call_down_tendency + adjustment.call_down_adjust,
                                      0.05, 0.95),
        )

    # ------------------------------------------------------------------
    # 翻牌前
    # ------------------------------------------------------------------

    def _preflop(self, ctx: _DecisionContext) -> AIDecision:
        profile = ctx.profile
        chen = chen_formula(ctx.hole)
        strength = chen_to_normalized(chen)
        threshold = profile.preflop_threshold(ctx.seat_offset)
        is_premium = chen >= PREMIUM_CHEN
        is_strong = chen >= STRONG_CHEN
        is_playable = strength > threshold
        bb = ctx.big_blind
        facing_raise = ctx.call_amount > bb
        facing_3bet = ctx.call_amount > bb * 3
        confidence = _clamp(0.5 + abs(strength - threshold))

        if ctx.pressure is not None and ctx.pressure.push_or_fold:
            stack_in_bb = (ctx.player.chips + ctx.player.current_bet) / bb
            if stack_in_bb <= self.config.push_fold_big_blinds:
                if is_playable or is_strong:
                    return _decision(AIDecisionType.ALL_IN, f"短筹码全押 (Chen {chen:.1f})", confidence=0.8)
                if ctx.call_amount == 0:
                    return _decision(AIDecisionType.CHECK, "短筹码过牌")
                return _decision(AIDecisionType.FOLD, f"短筹码弃牌 (Chen {chen:.1f})")

        if profile.use_gto_strategy:
            return self._gto_preflop(ctx, chen)

        if facing_3bet:
            if is_premium:
                if ctx.spr < 4 or ctx.player.chips < ctx.call_amount * 3:
                    return _decision(AIDecisionType.ALL_IN, "顶级牌面对3-bet全押", confidence=0.9)
                return _decision(AIDecisionType.RAISE, "顶级牌4-bet", ctx.current_bet * 3, 0.85)
            if (1.0 - strength) < profile.fold_to_3bet and not is_strong:
                return _decision(AIDecisionType.FOLD, "面对3-bet弃牌", confidence=confidence)
            if is_strong:
                return _decision(AIDecisionType.CALL, "强牌跟注3-bet", confidence=confidence)
            return _decision(AIDecisionType.FOLD, "牌力不足以跟注3-bet", confidence=confidence)

        if facing_raise:
            if is_premium:
                if profile.aggression > 0.6 or (profile.aggression > 0.3 and chen >= 12):
                    return _decision(AIDecisionType.RAISE, "顶级牌3-bet", ctx.current_bet * 3, 0.85)
                return _decision(AIDecisionType.CALL, "顶级牌平跟", confidence=0.8)
            if is_strong:
                if profile.aggression > 0.5:
                    return _decision(AIDecisionType.RAISE, "强牌3-bet", ctx.current_bet * 3, confidence)
                return _decision(AIDecisionType.CALL, "强牌跟注加注", confidence=confidence)
            if is_playable:
                return _decision(AIDecisionType.CALL, "可玩牌跟注加注", confidence=confidence)
            if strength > 0.15 and profile.bluff_freq > 0.2 and self._rng.random() < profile.bluff_freq:
                return _decision(AIDecisionType.RAISE, "诈唬3-bet", ctx.current_bet * 3, 0.4)
            return _decision(AIDecisionType.FOLD, f"Chen {chen:.1f} 低于门槛", confidence=confidence)

        if ctx.call_amount == 0:
            if is_strong and profile.aggression > 0.5:
                return _decision(AIDecisionType.RAISE, "大盲位强牌加注", bb * 3, confidence)
            return _decision(AIDecisionType.CHECK, "大盲位过牌", confidence=confidence)

        if is_playable:
            steal_bonus = ctx.adjustment.steal_freq_bonus
            if ctx.pressure is not None:
                steal_bonus += ctx.pressure.steal_bonus
            adjusted_aggression = profile.aggression + (steal_bonus if ctx.seat_offset <= 1 else 0.0)
            if adjusted_aggression > 0.55:
                open_size = bb * 3 + bb * max(0, ctx.active_count - 4) // 2
                return _decision(AIDecisionType.RAISE, f"开池加注 (Chen {chen:.1f})", open_size, confidence)
            return _decision(AIDecisionType.CALL, f"平跟入池 (Chen {chen:.1f})", confidence=confidence)

        if ctx.is_late and profile.bluff_freq > 0.15:
            return _decision(AIDecisionType.RAISE, "后位偷盲", bb * 3, 0.4)
        return _decision(AIDecisionType.FOLD, f"Chen {chen:.1f} 低于门槛 {threshold:.2f}", confidence=confidence)

    def _gto_preflop(self, ctx: _DecisionContext, chen: float) -> AIDecision:
        bb = ctx.big_blind
        roll = self._rng.random()

        if ctx.call_amount > bb * 3:
            if chen >= PREMIUM_CHEN:
                if ctx.spr < 4 or ctx.player.chips < ctx.call_amount * 3:
                    return _decision(AIDecisionType.ALL_IN, "平衡策略：顶级牌全押", confidence=0.9)
                return _decision(AIDecisionType.RAISE, "平衡策略：4-bet", ctx.current_bet * 3, 0.85)
            if chen >= STRONG_CHEN:
                return _decision(AIDecisionType.CALL, "平衡策略：跟注3-bet")
            return _decision(AIDecisionType.FOLD, "平衡策略：弃牌")

        if ctx.call_amount > bb:
            if chen >= PREMIUM_CHEN:
                return _decision(AIDecisionType.RAISE, "平衡策略：价值3-bet", ctx.current_bet * 3, 0.85)
            three_bet = three_bet_range(ctx.position, ctx.is_late)
            if chen >= three_bet_chen_threshold(three_bet) or chen >= STRONG_CHEN:
                if roll < 0.35:
                    return _decision(AIDecisionType.RAISE, "平衡策略：混合3-bet", ctx.current_bet * 3)
                return _decision(AIDecisionType.CALL, "平衡策略：混合跟注")
            call_range = call_three_bet_range(ctx.position, ctx.is_late)
            if chen >= three_bet_chen_threshold(call_range):
                if roll < 0.60:
                    return _decision(AIDecisionType.CALL, "平衡策略：防守跟注", confidence=0.5)
                return _decision(AIDecisionType.FOLD, "平衡策略：混合弃牌", confidence=0.5)
            if roll < 0.08:
                return _decision(AIDecisionType.RAISE, "平衡策略：诈唬3-bet", ctx.current_bet * 3, 0.3)
            return _decision(AIDecisionType.FOLD, "平衡策略：弃牌")

        if ctx.call_amount == 0:
            if chen >= 8 and roll < 0.5:
                return _decision(AIDecisionType.RAISE, "平衡策略：大盲位加注", bb * 3)
            return _decision(AIDecisionType.CHECK, "平衡策略：大盲位过牌")

        open_threshold = open_chen_threshold(opening_range(ctx.position))
        if chen >= open_threshold:
            return _decision(AIDecisionType.RAISE,
                             f"平衡策略：{ctx.position} 开池加注 (Chen {chen:.1f} >= {open_threshold:.1f})", bb * 3)
        return _decision(AIDecisionType.FOLD, f"平衡策略：{ctx.position} 不平跟")

    # ------------------------------------------------------------------
    # 翻牌后
    # ------------------------------------------------------------------

    def _postflop(self, ctx: _DecisionContext) -> AIDecision:
        opponents = max(1, len(ctx.snapshot.opponents_in_hand(ctx.player.player_id)))
        equity = self.equity_calculator.calculate_equity(ctx.hole, ctx.community, opponents)
        odds = pot_odds(ctx.call_amount, ctx.pot)
        category = self._evaluator.evaluate(ctx.hole, ctx.community).category
        draws = analyze_draws(ctx.hole, ctx.community)
        board = analyze_board_texture(ctx.community)

        if ctx.profile.use_gto_strategy:
            intent = self._gto_postflop(ctx, equity, odds, category, draws, board)
        elif ctx.call_amount == 0:
            intent = self._no_bet(ctx, equity, category, draws, board)
        else:
            intent = self._facing_bet(ctx, equity, odds, category, draws, board)
        return replace(intent, equity=equity, pot_odds=odds)

    def _no_bet(self, ctx: _DecisionContext, equity: float, category: HandCategory,
                draws: DrawInfo, board: BoardTexture) -> AIDecision:
        profile = ctx.profile
        street = ctx.snapshot.street
        bb = ctx.big_blind
        has_strong = category >= HandCategory.THREE_OF_A_KIND
        has_decent = category >= HandCategory.ONE_PAIR

        if has_strong:
            if profile.aggression > 0.5:
                factor = (0.75 if board.wetness > 0.6 else 0.50) * (1.0 + ctx.adjustment.value_size_adjust)
                size = max(bb, int(ctx.pot * factor))
                return _decision(AIDecisionType.RAISE, f"{category.display_name}价值下注",
                                 ctx.raise_by(size), 0.85)
            return _decision(AIDecisionType.CHECK, "强牌慢打", confidence=0.7)

        if ctx.is_pfr and street in (Street.FLOP, Street.TURN):
            cbet = profile.cbet_freq if street == Street.FLOP else profile.cbet_turn_freq
            cbet += 0.10 if board.wetness < 0.4 else -0.10
            if (has_decent or equity > 0.5 or draws.has_any_draw) and cbet > 0.5:
                size = max(bb, int(ctx.pot * (0.60 if board.wetness > 0.5 else 0.33)))
                return _decision(AIDecisionType.RAISE, "持续下注", ctx.raise_by(size), 0.6)

        if draws.has_any_draw and street != Street.RIVER:
            if draws.is_combo_draw and profile.aggression > 0.5:
                size = max(bb, ctx.pot * 2 // 3)
                return _decision(AIDecisionType.RAISE, f"组合听牌半诈唬 ({draws.outs} outs)",
                                 ctx.raise_by(size), 0.6)
            if (draws.has_flush_draw or draws.has_oesd) and profile.aggression > 0.4:
                size = max(bb, ctx.pot // 2)
                return _decision(AIDecisionType.RAISE, f"听牌半诈唬 ({draws.outs} outs)",
                                 ctx.raise_by(size), 0.5)

        if ctx.is_late and profile.bluff_freq > 0.2 and equity < 0.35:
            size = max(bb, ctx.pot // 3)
            return _decision(AIDecisionType.RAISE, "后位诈唬下注", ctx.raise_by(size), 0.3)

        return _decision(AIDecisionType.CHECK, f"胜率{equity:.0%}，过牌", confidence=0.6)

    def _facing_bet(self, ctx: _DecisionContext, equity: float, odds: float,
                    category: HandCategory, draws: DrawInfo, board: BoardTexture) -> AIDecision:
        profile = ctx.profile
        street = ctx.snapshot.street
        call = ctx.call_amount
        chips = ctx.player.chips
        has_strong = category >= HandCategory.THREE_OF_A_KIND
        has_decent = category >= HandCategory.ONE_PAIR
        bet_to_pot = call / ctx.pot if ctx.pot > 0 else 1.0

        if self._uses_bluff_detection(profile):
            bettor = self._last_bettor(ctx.snapshot, ctx.player.player_id)
            if bettor is not None:
                estimate = self.bluff_detector.estimate(
                    ctx.snapshot, bettor.player_id, board, self.model_store.get(bettor.player_id))
                if estimate.is_usable(self.config.bluff_detection_gate):
                    if estimate.probability > 0.6 and (has_decent or equity > odds * 0.7):
                        return _decision(AIDecisionType.CALL,
                                         f"识破诈唬 ({estimate.probability:.0%})", confidence=0.6)
                    if estimate.probability < 0.3 and not has_strong:
                        return _decision(AIDecisionType.FOLD,
                                         f"对手多半不是诈唬 ({estimate.probability:.0%})", confidence=0.6)

        if category >= HandCategory.FLUSH:
            if ctx.spr < 3 or chips <= call * 2 or (ctx.raise_war and chips > call * 3):
                return _decision(AIDecisionType.ALL_IN, f"{category.display_name}全押", confidence=0.9)
            return _decision(AIDecisionType.RAISE, f"{category.display_name}加注",
                             ctx.raise_by(ctx.pot * 2 // 3), 0.9)

        if has_strong:
            if ctx.raise_war:
                return _decision(AIDecisionType.CALL, "加注战中只跟注", confidence=0.7)
            if profile.aggression > 0.5:
                return _decision(AIDecisionType.RAISE, "强牌加注", ctx.raise_by(ctx.pot // 2), 0.8)
            return _decision(AIDecisionType.CALL, "强牌跟注", confidence=0.75)

        if profile.call_down_tendency > 0.6:
            if has_decent or draws.has_any_draw or bet_to_pot < 0.5:
                return _decision(AIDecisionType.CALL, "跟注倾向", confidence=0.5)

        implied = implied_odds(street, ctx.spr)
        if is_positive_ev(equity, call, ctx.pot, implied):
            if equity > 0.65 and profile.aggression > 0.6 and not ctx.raise_war:
                return _decision(AIDecisionType.RAISE, f"胜率{equity:.0%}加注",
                                 ctx.raise_by(ctx.min_raise), 0.7)
            return _decision(AIDecisionType.CALL, f"胜率{equity:.0%} > 赔率{odds:.0%}", confidence=0.65)

        if draws.has_any_draw and street != Street.RIVER:
            if draws.is_combo_draw:
                if profile.aggression > 0.5 and not ctx.raise_war:
                    return _decision(AIDecisionType.RAISE, "组合听牌加注",
                                     ctx.raise_by(ctx.min_raise), 0.5)
                return _decision(AIDecisionType.CALL, "组合听牌跟注", confidence=0.55)
            draw_equity = draws.outs * (0.04 if street == Street.FLOP else 0.02)
            if draw_equity + (0.08 if ctx.spr > 5 else 0.0) > odds:
                return _decision(AIDecisionType.CALL, f"听牌赔率合适 ({draws.outs} outs)", confidence=0.5)

        if has_decent and profile.call_down_tendency > 0.5:
            return _decision(AIDecisionType.CALL, "有对子跟注", confidence=0.45)
        if bet_to_pot < 0.25 and profile.tightness < 0.5:
            return _decision(AIDecisionType.CALL, "小额下注跟注", confidence=0.4)

        if board.is_dry and not ctx.raise_war and self._rng.random() < profile.bluff_freq * 0.25:
            return _decision(AIDecisionType.RAISE, "干燥牌面诈唬加注",
                             ctx.raise_by(ctx.pot * 2 // 3), 0.25)

        return _decision(AIDecisionType.FOLD, f"胜率{equity:.0%} < 赔率{odds:.0%}", confidence=0.6)

    def _gto_postflop(self, ctx: _DecisionContext, equity: float, odds: float,
                      category: HandCategory, draws: DrawInfo, board: BoardTexture) -> AIDecision:
        street = ctx.snapshot.street
        bb = ctx.big_blind
        roll = self._rng.random()

        if ctx.call_amount == 0:
            is_value = category >= HandCategory.TWO_PAIR or (category >= HandCategory.ONE_PAIR and equity > 0.6)
            is_semi_bluff = draws.has_any_draw and equity > 0.35
            if ctx.is_pfr:
                if board.wetness < 0.3:
                    cbet = 0.70
                elif board.wetness < 0.6:
                    cbet = 0.50
                else:
                    cbet = 0.30
                size = max(bb, int(ctx.pot * (0.66 if board.wetness >= 0.5 else 0.33)))
                if (is_value or is_semi_bluff) and roll < cbet:
                    return _decision(AIDecisionType.RAISE, "平衡策略：持续下注", ctx.raise_by(size), 0.6)
                if not is_value and not is_semi_bluff and equity < 0.30:
                    if roll < (0.15 if board.wetness < 0.4 else 0.10):
                        return _decision(AIDecisionType.RAISE, "平衡策略：诈唬下注",
                                         ctx.raise_by(max(bb, ctx.pot // 3)), 0.3)
            return _decision(AIDecisionType.CHECK, "平衡策略：过牌")

        if category >= HandCategory.STRAIGHT or (category >= HandCategory.THREE_OF_A_KIND and equity > 0.75):
            if ctx.spr < 3 or ctx.player.chips <= ctx.call_amount * 2:
                return _decision(AIDecisionType.ALL_IN, "平衡策略：强牌全押", confidence=0.9)
            return _decision(AIDecisionType.RAISE, "平衡策略：价值加注",
                             ctx.raise_by(ctx.pot * 2 // 3), 0.85)

        if draws.is_combo_draw and roll < 0.25:
            return _decision(AIDecisionType.RAISE, "平衡策略：组合听牌加注",
                             ctx.raise_by(ctx.min_raise), 0.5)

        if equity > odds:
            return _decision(AIDecisionType.CALL, "平衡策略：胜率高于赔率", confidence=0.6)

        if draws.has_any_draw and street != Street.RIVER:
            draw_equity = draws.outs * (0.04 if street == Street.FLOP else 0.02)
            if draw_equity + (0.06 if ctx.spr > 5 else 0.0) > odds:
                return _decision(AIDecisionType.CALL, "平衡策略：听牌跟注", confidence=0.5)

        opponent_range = self._opponent_range(ctx, board)
        if opponent_range is not None and opponent_range.is_wide and equity > odds * 0.9:
            return _decision(AIDecisionType.CALL,
                             f"平衡策略：对手范围较宽 ({opponent_range.width:.0%})，抓诈跟注", confidence=0.45)

        # 最小防守频率
        mdf = ctx.pot / (ctx.pot + ctx.call_amount) if ctx.pot + ctx.call_amount > 0 else 0.0
        if equity > odds * 0.8 and roll < mdf * 0.5:
            return _decision(AIDecisionType.CALL, "平衡策略：防守跟注", confidence=0.4)
        return _decision(AIDecisionType.FOLD, "平衡策略：弃牌")

    # ------------------------------------------------------------------
    # 合法化
    # ------------------------------------------------------------------

    @staticmethod
    def _finalize(intent: AIDecision, ctx: _DecisionContext) -> AIDecision:
        """把决策意向收敛为当前合法的行动"""
        legal = ctx.legal
        kind = intent.decision_type

        if kind == AIDecisionType.RAISE:
            if legal.can_raise:
                return replace(intent, amount=legal.clamp_raise(intent.amount))
            if legal.can_all_in and intent.amount >= ctx.player.current_bet + ctx.player.chips:
                return replace(intent, decision_type=AIDecisionType.ALL_IN, amount=0)
            kind = AIDecisionType.CALL
        elif kind == AIDecisionType.ALL_IN and not legal.can_all_in:
            kind = AIDecisionType.CALL

        if kind == AIDecisionType.CALL and not legal.can_call:
            kind = AIDecisionType.CHECK
        if kind == AIDecisionType.CHECK and not legal.can_check:
            kind = AIDecisionType.FOLD
        if kind == AIDecisionType.FOLD and legal.can_check:
            kind = AIDecisionType.CHECK

        if kind == intent.decision_type:
            return intent
        return replace(intent, decision_type=kind, amount=0)
