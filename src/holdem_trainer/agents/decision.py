"""Decision engine for AI players.

Two regimes split on the Chip Stack Index. Short stacks (CSI <= 7) play
push/fold from the range charts, nudged by personality. Deeper stacks score
the spot from hand strength, draws, position, personality and an occasional
bluff, then threshold that score into fold/check/call/bet/raise.
"""

import logging
import random
from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Sequence

from holdem_trainer.agents.personality import AIPersonality
from holdem_trainer.calculators.csi import (
    calculate_csi, hand_notation, should_call_push, should_push,
)
from holdem_trainer.engine.evaluator import HandRank, evaluate_hand
from holdem_trainer.models.action import ActionType, Stage
from holdem_trainer.models.card import Card
from holdem_trainer.models.game import GameState, PlayerState
from holdem_trainer.models.position import PositionGroup, position_group

logger = logging.getLogger(__name__)

# Stacks at or below this CSI play push/fold
SHORT_STACK_CSI = 7.0

MIN_BET = 10


@dataclass
class Decision:
    """A decision made by an AI player.

    ``amount`` is only meaningful for bets and raises, where it is the
    increment over the table's current maximum bet.
    """
    action: ActionType
    amount: int = 0
    rationale: str = ""


@dataclass(frozen=True)
class HandStrength:
    """Hand strength estimates, all in [0, 1].

    Attributes:
        raw_strength: Category rank / 10 postflop, chart value preflop.
        relative_strength: raw_strength discounted for a dangerous board.
        draw_potential: Chance-weighted value of flush and straight draws.
        nut_potential: How close the made hand is to unbeatable.
    """
    raw_strength: float
    relative_strength: float
    draw_potential: float
    nut_potential: float


class DecisionEngine:
    """Maps (hand, position, stack depth, pot odds) to an action for one AI seat."""

    def __init__(self, personality: AIPersonality, rng: Optional[random.Random] = None):
        """Initialize the decision engine.

        Args:
            personality: The seat's traits.
            rng: Random source for bluff decisions.
        """
        self.personality = personality
        self.rng = rng or random.Random()

    def decide(self, player: PlayerState, state: GameState,
               legal_actions: Sequence[ActionType]) -> Decision:
        """Choose an action for ``player``.

        Args:
            player: The acting player.
            state: A snapshot of the table.
            legal_actions: Actions the engine will accept right now.

        Returns:
            The chosen Decision. The engine validates it before applying.
        """
        csi = calculate_csi(player.chips, state.small_blind, state.big_blind)
        position = position_group(player.seat, len(state.players), state.dealer_index)
        strength = self.evaluate_hand_strength(player.hole_cards, state.community_cards,
                                               state.stage)
        max_bet = state.max_bet
        to_call = state.amount_to_call(player)

        if csi <= SHORT_STACK_CSI:
            decision = self._short_stack_decision(
                player, state, legal_actions, csi, position, to_call, max_bet)
        else:
            decision = self._deep_stack_decision(
                player, state, legal_actions, position, strength, to_call, max_bet)

        logger.debug("%s (%s, CSI %.1f): %s %s - %s", player.name, position.value, csi,
                     decision.action.value, decision.amount or "", decision.rationale)
        return decision

    # Short stack

    def _short_stack_decision(self, player: PlayerState, state: GameState,
                              legal: Sequence[ActionType], csi: float,
                              position: PositionGroup, to_call: int,
                              max_bet: int) -> Decision:
        hand = hand_notation(player.hole_cards)
        opponents = len(state.players_in_hand) - 1

        if to_call > 0 and max_bet > state.big_blind:
            pusher_csi = self._largest_opponent_csi(player, state)
            in_range = should_call_push(player.hole_cards, csi, position, pusher_csi)
            score = self.short_stack_score(in_range)
            if score > 0 and ActionType.CALL in legal:
                return Decision(ActionType.CALL,
                                rationale=f"Short stack call with {hand} (CSI: {csi:.1f})")
            if score > 0 and ActionType.ALL_IN in legal:
                return Decision(ActionType.ALL_IN,
                                rationale=f"Short stack call all-in with {hand} (CSI: {csi:.1f})")
            return self._conservative(legal, f"Short stack fold with {hand} (CSI: {csi:.1f})")

        in_range = should_push(player.hole_cards, csi, position, max(1, opponents))
        score = self.short_stack_score(in_range)
        if score > 0 and ActionType.ALL_IN in legal:
            return Decision(ActionType.ALL_IN,
                            rationale=f"Short stack push with {hand} (CSI: {csi:.1f})")
        return self._conservative(legal, f"Short stack passes with {hand} (CSI: {csi:.1f})")

    def short_stack_score(self, in_range: bool) -> float:
        """Blend the chart verdict with personality offsets of at most 0.2 each.

        Aggression and risk tolerance pull toward getting chips in; patience
        and tightness pull toward folding. The action is taken when the
        score is positive.
        """
        p = self.personality
        score = 0.6 if in_range else -0.6
        score += (p.aggression - 0.5) * 0.4
        score += (p.risk_tolerance - 0.5) * 0.4
        score -= (p.patience - 0.5) * 0.4
        score -= (p.tightness - 0.5) * 0.4
        return score

    def _largest_opponent_csi(self, player: PlayerState, state: GameState) -> float:
        """CSI of the biggest bettor facing us, counting chips already bet."""
        bettors = [p for p in state.players_in_hand if p.id != player.id]
        if not bettors:
            return 0.0
        pusher = max(bettors, key=lambda p: p.current_bet)
        return calculate_csi(pusher.chips + pusher.current_bet,
                             state.small_blind, state.big_blind)

    # Deep stack

    def _deep_stack_decision(self, player: PlayerState, state: GameState,
                             legal: Sequence[ActionType], position: PositionGroup,
                             strength: HandStrength, to_call: int,
                             max_bet: int) -> Decision:
        opponents = len(state.players_in_hand) - 1
        hand_value = self.hand_value(strength, state.stage)
        modifier = self.personality_modifier(strength)
        bluffing = self.should_bluff(position, opponents + 1)
        bluff_value = self.personality.bluff_frequency * 0.3 if bluffing else 0.0

        score = hand_value + position.value_score * 0.2 + modifier * 0.3 + bluff_value

        if to_call > 0:
            pot_odds = state.pot / to_call
            required = self.required_equity(pot_odds, strength.draw_potential)

            if score > 0.8 and ActionType.RAISE in legal:
                amount = self.raise_size(state.pot, max_bet, state.min_raise)
                return self._sized(player, state, ActionType.RAISE, amount, legal,
                                   f"Strong hand raise ({strength.raw_strength:.2f} strength)")
            if score > 0.4 or strength.raw_strength > required:
                return Decision(ActionType.CALL, rationale=(
                    f"Call with decent hand/pot odds ({required:.2f} needed, "
                    f"{strength.raw_strength:.2f} have)"))
            return self._conservative(
                legal, f"Fold weak hand against bet ({strength.raw_strength:.2f} strength)")

        # The big blind's preflop option is unopened but offered as a raise
        opener = ActionType.BET if ActionType.BET in legal else ActionType.RAISE
        if score > 0.7 and opener in legal:
            amount = self.bet_size(state.pot, state.min_raise)
            reason = "Bluff bet with position" if bluffing else "Value bet with strong hand"
            return self._sized(player, state, opener, amount, legal, reason)
        return self._conservative(
            legal, f"Check with marginal hand ({strength.raw_strength:.2f} strength)")

    def _sized(self, player: PlayerState, state: GameState, action: ActionType,
               amount: int, legal: Sequence[ActionType], rationale: str) -> Decision:
        """Return a bet/raise, or an all-in when the size exceeds the stack."""
        required = state.max_bet + amount - player.current_bet
        if required >= player.chips and ActionType.ALL_IN in legal:
            return Decision(ActionType.ALL_IN, rationale=rationale)
        return Decision(action, amount=amount, rationale=rationale)

    def hand_value(self, strength: HandStrength, stage: Stage) -> float:
        value = strength.relative_strength
        if stage != Stage.RIVER:
            value += strength.draw_potential * 0.3
        value += strength.nut_potential * 0.1
        return min(value, 1.0)

    def personality_modifier(self, strength: HandStrength) -> float:
        """Looser and more aggressive players rate a spot higher; patient ones
        give up on weak hands."""
        p = self.personality
        modifier = -(p.tightness - 0.5) * 0.3
        modifier += (p.aggression - 0.5) * 0.2
        if strength.raw_strength < 0.4:
            modifier -= (p.patience - 0.5) * 0.2
        return modifier

    def should_bluff(self, position: PositionGroup, active_players: int) -> bool:
        """Bluff more from late position and against fewer opponents."""
        position_factor = 1.5 if position in (PositionGroup.BUTTON, PositionGroup.LATE) else 1.0
        if active_players <= 3:
            player_factor = 1.5
        elif active_players <= 4:
            player_factor = 1.2
        else:
            player_factor = 0.8
        chance = self.personality.bluff_frequency * position_factor * player_factor
        return self.rng.random() < chance

    @staticmethod
    def required_equity(pot_odds: float, draw_potential: float) -> float:
        if pot_odds <= 0:
            return 0.9
        return max(0.1, 1 / (1 + pot_odds) - draw_potential * 0.1)

    def raise_size(self, pot: int, max_bet: int, min_raise: int) -> int:
        """Raise increment: half-pot to 2x pot depending on aggression."""
        base = max(max_bet * 2, pot * 0.5)
        amount = round(base * (0.5 + self.personality.aggression * 1.5))
        return max(amount, min_raise)

    def bet_size(self, pot: int, min_raise: int) -> int:
        """Opening bet: 30-70% of the pot depending on aggression."""
        amount = round(max(pot * (0.3 + self.personality.aggression * 0.4), MIN_BET))
        return max(amount, min_raise)

    @staticmethod
    def _conservative(legal: Sequence[ActionType], rationale: str) -> Decision:
        """Check if free, otherwise fold."""
        if ActionType.CHECK in legal:
            return Decision(ActionType.CHECK, rationale=rationale)
        if ActionType.FOLD in legal:
            return Decision(ActionType.FOLD, rationale=rationale)
        return Decision(legal[0], rationale=rationale)

    # Hand strength

    def evaluate_hand_strength(self, hole_cards: List[Card], community_cards: List[Card],
                               stage: Stage) -> HandStrength:
        """Estimate strength from the evaluator postflop or a chart preflop."""
        cards = list(hole_cards) + list(community_cards)
        if len(cards) < 5:
            return preflop_strength(hole_cards)

        evaluation = evaluate_hand(cards)
        raw = evaluation.rank / 10
        return HandStrength(
            raw_strength=raw,
            relative_strength=adjust_for_board_texture(raw, community_cards),
            draw_potential=draw_potential(hole_cards, community_cards, stage),
            nut_potential=nut_potential(evaluation.rank),
        )


def preflop_strength(hole_cards: Sequence[Card]) -> HandStrength:
    """Chart strength for two hole cards, keyed by pair, ace, high card and connectedness."""
    if len(hole_cards) != 2:
        return HandStrength(0.0, 0.0, 0.0, 0.0)

    first, second = hole_cards
    high = max(first.value, second.value)
    low = min(first.value, second.value)
    suited = first.suit == second.suit
    pair = high == low
    connected = high - low <= 1

    if pair:
        if high >= 10:
            strength = 0.9
        elif high >= 7:
            strength = 0.7
        elif high >= 5:
            strength = 0.5
        else:
            strength = 0.3
    elif high == 14:
        if low >= 10:
            strength = 0.8 if suited else 0.75
        elif low >= 7:
            strength = 0.6 if suited else 0.5
        else:
            strength = 0.4 if suited else 0.2
    elif high >= 11:
        if low >= 10:
            strength = 0.7 if suited else 0.6
        elif low >= 7:
            strength = 0.5 if suited else 0.3
        else:
            strength = 0.3 if suited else 0.15
    elif connected and suited:
        strength = 0.4
    elif connected:
        strength = 0.25
    else:
        strength = 0.1

    return HandStrength(
        raw_strength=strength,
        relative_strength=strength,
        draw_potential=0.3 if suited or connected else 0.1,
        nut_potential=0.5 if pair or high >= 12 else 0.2,
    )


def adjust_for_board_texture(raw: float, community_cards: Sequence[Card]) -> float:
    """Discount medium hands by 20% when the board allows a flush or straight."""
    if len(community_cards) < 3:
        return raw

    suit_counts = Counter(c.suit for c in community_cards)
    flush_possible = max(suit_counts.values()) >= 3

    ranks = sorted({c.value for c in community_cards}, reverse=True)
    straight_possible = any(ranks[i] - ranks[i + 2] <= 4 for i in range(len(ranks) - 2))

    if (flush_possible or straight_possible) and 0.3 < raw < 0.7:
        return raw * 0.8
    return raw


def draw_potential(hole_cards: Sequence[Card], community_cards: Sequence[Card],
                   stage: Stage) -> float:
    """Heuristic value of flush and straight draws, capped at 0.8."""
    if stage == Stage.PREFLOP or not community_cards:
        return 0.0

    cards = list(hole_cards) + list(community_cards)
    potential = 0.0

    max_suited = max(Counter(c.suit for c in cards).values())
    if max_suited == 4:
        potential += 0.4
    elif max_suited == 3:
        potential += 0.2

    ranks = sorted({c.value for c in cards}, reverse=True)
    longest = run = 1
    for higher, lower in zip(ranks, ranks[1:]):
        run = run + 1 if higher - lower == 1 else 1
        longest = max(longest, run)

    if longest >= 4:
        potential += 0.3
    elif longest >= 3:
        potential += 0.15

    return min(potential, 0.8)


def nut_potential(rank: HandRank) -> float:
    if rank >= HandRank.FOUR_OF_A_KIND:
        return 0.9
    if rank >= HandRank.FLUSH:
        return 0.7
    if rank >= HandRank.THREE_OF_A_KIND:
        return 0.5
    return 0.2
