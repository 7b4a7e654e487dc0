"""Hand evaluation: best 5-card hand out of 5-7 cards."""

from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from functools import cmp_to_key
from itertools import combinations
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar

from holdem_trainer.models.card import Card

T = TypeVar("T")


class HandRank(IntEnum):
    """Hand categories from worst to best."""
    HIGH_CARD = 1
    PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9
    ROYAL_FLUSH = 10

    @property
    def display_name(self) -> str:
        return _RANK_NAMES[self]


_RANK_NAMES = {
    HandRank.HIGH_CARD: "High Card",
    HandRank.PAIR: "Pair",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.STRAIGHT: "Straight",
    HandRank.FLUSH: "Flush",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.ROYAL_FLUSH: "Royal Flush",
}


@dataclass(frozen=True)
class HandEvaluation:
    """The best 5-card hand found for a set of cards.

    ``cards`` is ordered for comparison (made combination first, then
    kickers high to low; a wheel is ordered 5-4-3-2-A). ``tie_break`` holds
    the matching rank values, with the wheel's ace counted as 1.
    """
    rank: HandRank
    cards: Tuple[Card, ...]
    kickers: Tuple[Card, ...]
    tie_break: Tuple[int, ...]

    @property
    def name(self) -> str:
        return self.rank.display_name

    @property
    def key(self) -> Tuple[int, Tuple[int, ...]]:
        return int(self.rank), self.tie_break


def evaluate_hand(cards: Sequence[Card]) -> HandEvaluation:
    """Evaluate 5 to 7 cards and return the best 5-card hand.

    Raises:
        ValueError: If fewer than 5 or more than 7 cards are given, or a card
            is repeated.
    """
    if not 5 <= len(cards) <= 7:
        raise ValueError(f"Need 5 to 7 cards to evaluate a hand, got {len(cards)}")
    if len(set(cards)) != len(cards):
        raise ValueError("Duplicate cards in hand")

    best: Optional[HandEvaluation] = None
    for combo in combinations(cards, 5):
        evaluation = _evaluate_five(combo)
        if best is None or evaluation.key > best.key:
            best = evaluation
    return best


def compare_hands(hand1: HandEvaluation, hand2: HandEvaluation) -> int:
    """Compare two evaluations: 1 if hand1 wins, -1 if hand2 wins, 0 on a chop."""
    if hand1.key > hand2.key:
        return 1
    if hand1.key < hand2.key:
        return -1
    return 0


def rank_hands(entries: Iterable[Tuple[T, HandEvaluation]]) -> List[Tuple[T, HandEvaluation]]:
    """Sort (owner, evaluation) pairs best hand first."""
    return sorted(entries, key=cmp_to_key(lambda a, b: compare_hands(b[1], a[1])))


def _evaluate_five(cards: Sequence[Card]) -> HandEvaluation:
    """Evaluate exactly 5 cards."""
    ordered = sorted(cards, key=lambda c: c.value, reverse=True)
    is_flush = len({c.suit for c in cards}) == 1
    straight = _straight_order(ordered)

    counts = Counter(c.value for c in ordered)
    # Ranks grouped by multiplicity, then by rank: quads/trips/pairs come first
    grouped = sorted(counts, key=lambda v: (counts[v], v), reverse=True)
    shape = sorted(counts.values(), reverse=True)

    if straight and is_flush:
        rank = HandRank.ROYAL_FLUSH if straight[0].value == 14 else HandRank.STRAIGHT_FLUSH
        return _build(rank, straight, 0, wheel=straight[0].value == 5)
    if shape[0] == 4:
        return _build(HandRank.FOUR_OF_A_KIND, _group_cards(ordered, grouped), 4)
    if shape == [3, 2]:
        return _build(HandRank.FULL_HOUSE, _group_cards(ordered, grouped), 5)
    if is_flush:
        return _build(HandRank.FLUSH, ordered, 5)
    if straight:
        return _build(HandRank.STRAIGHT, straight, 5, wheel=straight[0].value == 5)
    if shape[0] == 3:
        return _build(HandRank.THREE_OF_A_KIND, _group_cards(ordered, grouped), 3)
    if shape[:2] == [2, 2]:
        return _build(HandRank.TWO_PAIR, _group_cards(ordered, grouped), 4)
    if shape[0] == 2:
        return _build(HandRank.PAIR, _group_cards(ordered, grouped), 2)
    return _build(HandRank.HIGH_CARD, ordered, 1)


def _build(rank: HandRank, cards: List[Card], made: int,
           wheel: bool = False) -> HandEvaluation:
    """Assemble an evaluation; cards after index ``made`` are kickers."""
    tie_break = tuple(1 if wheel and c.value == 14 else c.value for c in cards)
    return HandEvaluation(
        rank=rank,
        cards=tuple(cards),
        kickers=tuple(cards[made:]),
        tie_break=tie_break,
    )


def _group_cards(ordered: List[Card], grouped: List[int]) -> List[Card]:
    result: List[Card] = []
    for value in grouped:
        result.extend(c for c in ordered if c.value == value)
    return result


def _straight_order(ordered: List[Card]) -> Optional[List[Card]]:
    """Return the cards in straight order, or None if not a straight.

    The ace plays low only in the wheel (A-2-3-4-5); K-A-2 does not wrap.
    """
    values = [c.value for c in ordered]
    if len(set(values)) != 5:
        return None
    if values == [14, 5, 4, 3, 2]:
        return ordered[1:] + ordered[:1]
    if values[0] - values[4] == 4:
        return list(ordered)
    return None


class HandEvaluator:
    """Evaluates and compares poker hands."""

    @staticmethod
    def evaluate(cards: Sequence[Card]) -> HandEvaluation:
        return evaluate_hand(cards)

    @staticmethod
    def compare(cards1: Sequence[Card], cards2: Sequence[Card]) -> int:
        """Compare two card sets.

        Returns:
            1 if cards1 wins, -1 if cards2 wins, 0 if tie.
        """
        return compare_hands(evaluate_hand(cards1), evaluate_hand(cards2))

    @staticmethod
    def get_winners(board: Sequence[Card],
                    player_cards: Dict[T, Sequence[Card]]) -> List[T]:
        """Get the winning key(s) from a group of players.

        Args:
            board: Community cards.
            player_cards: Mapping from player key to hole cards.

        Returns:
            Keys of every player tied for the best hand.
        """
        if not player_cards:
            return []

        ranked = rank_hands(
            (key, evaluate_hand(list(cards) + list(board)))
            for key, cards in player_cards.items()
        )
        best = ranked[0][1]
        return [key for key, evaluation in ranked if compare_hands(evaluation, best) == 0]
