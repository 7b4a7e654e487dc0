"""Pot odds, outs and equity calculators."""

import random
from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Sequence

from holdem_trainer import config
from holdem_trainer.engine.evaluator import HandRank, compare_hands, evaluate_hand
from holdem_trainer.models.card import Card, remaining_cards

# Unseen cards after hole cards and a flop
UNSEEN_AFTER_FLOP = 47


@dataclass(frozen=True)
class PotOdds:
    """Pot odds for a call.

    ``odds`` is the (pot + bet) to call ratio; ``required_equity_percent`` is
    the share of the final pot the call represents.
    """
    pot_size: float
    bet_size: float
    call_amount: float
    odds: float
    required_equity_percent: float


@dataclass(frozen=True)
class ImpliedOdds:
    pot_odds: PotOdds
    implied_winnings: float
    effective_odds: float


@dataclass(frozen=True)
class OddsCalculation:
    """Chance of hitting one of ``outs`` cards, in percent."""
    outs: int
    equity: float
    one_card_odds: float
    two_card_odds: float


def calculate_pot_odds(pot_size: float, bet_size: float,
                       call_amount: Optional[float] = None) -> PotOdds:
    """Calculate pot odds for calling a bet.

    Args:
        pot_size: The pot before the bet.
        bet_size: The bet being faced.
        call_amount: Chips needed to call. Defaults to ``bet_size``.

    Returns:
        PotOdds with odds = (pot + bet) / call and
        required equity = call / (pot + bet + call) * 100.
    """
    if call_amount is None:
        call_amount = bet_size
    if call_amount <= 0:
        raise ValueError("call_amount must be positive")

    total_pot = pot_size + bet_size
    return PotOdds(
        pot_size=pot_size,
        bet_size=bet_size,
        call_amount=call_amount,
        odds=total_pot / call_amount,
        required_equity_percent=call_amount / (total_pot + call_amount) * 100,
    )


def calculate_implied_odds(pot_odds: PotOdds, implied_winnings: float) -> ImpliedOdds:
    """Add expected future winnings to the pot odds."""
    total = pot_odds.pot_size + pot_odds.bet_size + implied_winnings
    return ImpliedOdds(
        pot_odds=pot_odds,
        implied_winnings=implied_winnings,
        effective_odds=total / pot_odds.call_amount,
    )


def calculate_required_equity(odds: float) -> float:
    """Equity percentage needed to break even at the given odds."""
    return 1 / (odds + 1) * 100


def is_profitable_call(equity: float, pot_odds: PotOdds,
                       implied_odds: Optional[ImpliedOdds] = None) -> bool:
    """Whether ``equity`` (percent) beats the price of the call."""
    odds = implied_odds.effective_odds if implied_odds else pot_odds.odds
    return equity >= calculate_required_equity(odds)


def calculate_equity(hole_cards: Sequence[Card], community_cards: Sequence[Card],
                     opponent_hole_cards: Optional[Sequence[Sequence[Card]]] = None,
                     simulations: Optional[int] = None,
                     num_opponents: int = 3,
                     rng: Optional[random.Random] = None) -> float:
    """Estimate a hand's equity as a percentage.

    On a complete board with known opponent hands the result is exact.
    Otherwise the board is completed at random for each trial, and random
    opponent hands are dealt until there are ``num_opponents`` of them.
    Wins count 1, chops 0.5.

    Args:
        hole_cards: The hero's two cards.
        community_cards: 0 to 5 board cards.
        opponent_hole_cards: Known opponent hands.
        simulations: Monte Carlo trials. Defaults to config.EQUITY_SIMULATIONS.
        num_opponents: Total opponents to simulate against when fewer are known.
        rng: Random source for the simulation.

    Returns:
        Equity in [0, 100].
    """
    opponents = [list(hand) for hand in (opponent_hole_cards or [])]
    if len(hole_cards) != 2:
        raise ValueError(f"Need exactly 2 hole cards, got {len(hole_cards)}")
    if len(community_cards) > 5:
        raise ValueError(f"Too many community cards: {len(community_cards)}")

    used = list(hole_cards) + list(community_cards) + [c for hand in opponents for c in hand]
    if len(set(used)) != len(used):
        raise ValueError("Duplicate cards between hands and board")

    if len(community_cards) == 5:
        return _exact_equity(hole_cards, community_cards, opponents)

    rng = rng or random.Random()
    trials = simulations or config.EQUITY_SIMULATIONS
    available = remaining_cards(used)
    board_needed = 5 - len(community_cards)
    extra_hands = max(0, num_opponents - len(opponents))
    extra_hands = min(extra_hands, (len(available) - board_needed) // 2)

    score = 0.0
    for _ in range(trials):
        drawn = rng.sample(available, board_needed + 2 * extra_hands)
        board = list(community_cards) + drawn[:board_needed]
        field = opponents + [drawn[board_needed + 2 * i:board_needed + 2 * i + 2]
                             for i in range(extra_hands)]
        score += _showdown_score(hole_cards, board, field)

    return score / trials * 100


def _exact_equity(hole_cards: Sequence[Card], board: Sequence[Card],
                  opponents: List[List[Card]]) -> float:
    """Average head-to-head result against each known opponent."""
    if not opponents:
        return 100.0

    hero = evaluate_hand(list(hole_cards) + list(board))
    score = 0.0
    for hand in opponents:
        result = compare_hands(hero, evaluate_hand(hand + list(board)))
        if result > 0:
            score += 1
        elif result == 0:
            score += 0.5
    return score / len(opponents) * 100


def _showdown_score(hole_cards: Sequence[Card], board: List[Card],
                    opponents: List[List[Card]]) -> float:
    """1 for an outright win, 0.5 for a chop, 0 if any opponent is ahead."""
    hero = evaluate_hand(list(hole_cards) + board)
    tied = False
    for hand in opponents:
        result = compare_hands(hero, evaluate_hand(hand + board))
        if result < 0:
            return 0.0
        if result == 0:
            tied = True
    return 0.5 if tied else 1.0


def calculate_outs(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> int:
    """Count unseen cards that would move the hand into a better category.

    A card that lifts the board by itself to the same category (pairing the
    board, say) is not an out. Only meaningful on the flop and turn; returns
    0 otherwise.
    """
    if not 3 <= len(community_cards) <= 4:
        return 0

    known = list(hole_cards) + list(community_cards)
    current = evaluate_hand(known).rank
    outs = 0
    for card in remaining_cards(known):
        improved = evaluate_hand(known + [card]).rank
        if improved > current and improved > _board_rank(list(community_cards) + [card]):
            outs += 1
    return outs


def _board_rank(cards: List[Card]) -> HandRank:
    """Category of the community cards alone; fewer than 5 can only make sets."""
    if len(cards) >= 5:
        return evaluate_hand(cards).rank
    counts = sorted(Counter(c.rank for c in cards).values(), reverse=True)
    if counts[0] == 4:
        return HandRank.FOUR_OF_A_KIND
    if counts[0] == 3:
        return HandRank.THREE_OF_A_KIND
    if counts[0] == 2:
        return HandRank.TWO_PAIR if counts[1] == 2 else HandRank.PAIR
    return HandRank.HIGH_CARD


def calculate_hand_odds(outs: int, cards_to_come: int) -> OddsCalculation:
    """Chance to hit with ``outs`` over one or two cards, assuming 47 unseen cards."""
    unseen = UNSEEN_AFTER_FLOP
    one_card = outs / unseen * 100
    two_card = (1 - (unseen - outs) / unseen * (unseen - 1 - outs) / (unseen - 1)) * 100
    return OddsCalculation(
        outs=outs,
        equity=two_card if cards_to_come == 2 else one_card,
        one_card_odds=one_card,
        two_card_odds=two_card,
    )


def get_preflop_equity(card1: Card, card2: Card) -> float:
    """Rough preflop equity percentage for a starting hand, clamped to [15, 95]."""
    high = max(card1.value, card2.value)
    low = min(card1.value, card2.value)
    suited = card1.suit == card2.suit
    pair = high == low
    connected = high - low == 1

    if pair:
        if high >= 10:
            equity = 70 + (high - 10) * 3
        elif high >= 6:
            equity = 55 + (high - 6) * 3
        else:
            equity = 45 + (high - 2) * 2
    elif high == 14:
        if low >= 10:
            equity = 67 if suited else 63
        elif low >= 7:
            equity = 58 if suited else 52
        else:
            equity = 52 if suited else 45
    elif high == 13:
        if low >= 11:
            equity = 61 if suited else 57
        elif low >= 9:
            equity = 54 if suited else 48
        else:
            equity = 48 if suited else 42
    elif high >= 11:
        if connected:
            equity = 57 if suited else 52
        elif low >= 9:
            equity = 52 if suited else 46
        else:
            equity = 46 if suited else 40
    elif connected and suited:
        equity = 47 + (high - 6) * 2
    elif connected:
        equity = 42 + (high - 6) * 2
    elif suited:
        equity = 40 + (high - 6)
    else:
        equity = 35 + (high - 6)

    return float(min(95, max(15, equity)))
