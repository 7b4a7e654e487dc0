"""Chip Stack Index (CSI) calculator and push/fold range charts.

CSI is the stack divided by the cost of one orbit (small blind + big blind +
antes). Below roughly 7 a stack is too short for post-flop play and the
decision collapses to pushing all-in or folding.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from holdem_trainer.models.card import Card, Rank
from holdem_trainer.models.position import PositionGroup

PositionLike = Union[PositionGroup, str]

# Orbit-cost multiplier applied when antes are in play
ANTE_CSI_FACTOR = 1.2


@dataclass(frozen=True)
class CSIInfo:
    """Strategy zone for a CSI value."""
    csi: float
    strategy: str
    description: str
    recommended_action: str


def calculate_csi(chips: float, small_blind: float, big_blind: float,
                  antes: float = 0) -> float:
    """Calculate the Chip Stack Index.

    Args:
        chips: The player's stack.
        small_blind: Small blind amount.
        big_blind: Big blind amount.
        antes: Total antes paid per orbit.

    Returns:
        chips / (small_blind + big_blind + antes).
    """
    orbit = small_blind + big_blind + antes
    if orbit <= 0:
        raise ValueError("Blinds and antes must add up to a positive amount")
    return chips / orbit


def get_csi_info(csi: float) -> CSIInfo:
    """Describe the strategy zone a CSI falls into."""
    if csi <= 2:
        return CSIInfo(
            csi=csi,
            strategy="Push/Fold Only",
            description="Very short stack - push any two cards in most situations",
            recommended_action="Look for any spot to get chips in the middle",
        )
    if csi <= 7:
        return CSIInfo(
            csi=csi,
            strategy="Primarily Push/Fold",
            description="Short stack - use specific push/fold ranges",
            recommended_action="Follow push/fold charts strictly",
        )
    if csi <= 12:
        return CSIInfo(
            csi=csi,
            strategy="Mixed Strategy",
            description="Can start playing some post-flop poker",
            recommended_action="Mix between pushing and standard play",
        )
    return CSIInfo(
        csi=csi,
        strategy="Standard Play",
        description="Deep enough for normal tournament poker",
        recommended_action="Use position and post-flop skills",
    )


def get_push_range(csi: float, position: PositionLike, num_opponents: int = 1,
                   has_antes: bool = False) -> List[str]:
    """Return the pushing range for a stack depth and position."""
    group = PositionGroup(position)
    adjusted = csi * ANTE_CSI_FACTOR if has_antes else csi
    late = group in (PositionGroup.LATE, PositionGroup.BUTTON)

    if adjusted <= 2:
        if group == PositionGroup.BUTTON and num_opponents == 1:
            return ["22+", "A2+", "K2+", "Q2+", "J2+", "T2+", "92+", "82+",
                    "72+", "62+", "52+", "42+", "32+"]
        if group == PositionGroup.SMALL_BLIND:
            return ["22+", "A2+", "K2+", "Q2+", "J4+", "T6+", "96+", "86+", "76", "65"]
        return ["22+", "A5+", "K8+", "Q9+", "JT+"]

    if adjusted <= 5:
        if late:
            return ["22+", "A2+", "K4+", "Q8+", "J9+", "T9+", "98+", "87+",
                    "76+", "65+", "54+"]
        if group == PositionGroup.MIDDLE:
            return ["33+", "A7+", "K9+", "QT+", "JT+"]
        return ["66+", "AT+", "KQ"]

    if adjusted <= 10:
        if late:
            return ["22+", "A5+", "K7+", "Q9+", "JT+", "T9+", "98+", "87+"]
        if group == PositionGroup.MIDDLE:
            return ["55+", "A9+", "KT+", "QJ+"]
        return ["77+", "AJ+", "KQ"]

    if late:
        return ["22+", "A2+", "K5+", "Q8+", "J9+", "T9+", "98+", "87+", "76+", "65+"]
    if group == PositionGroup.MIDDLE:
        return ["44+", "A9+", "KT+", "QJ+", "JT+"]
    return ["88+", "AQ+", "KQ"]


def get_calling_range(csi: float, position: PositionLike, pusher_csi: float) -> List[str]:
    """Return the range for calling an all-in from the blinds.

    Calling ranges are tighter than pushing ranges and keyed off the larger
    of the two stacks.
    """
    big_blind = PositionGroup(position) == PositionGroup.BIG_BLIND
    base = max(csi, pusher_csi) * 0.8

    if base <= 3:
        return ["66+", "AT+", "KJ+"] if big_blind else ["77+", "AJ+", "KQ"]
    if base <= 7:
        return ["44+", "A9+", "KT+", "QJ+"] if big_blind else ["55+", "AT+", "KJ+"]
    if big_blind:
        return ["33+", "A8+", "K9+", "QT+", "JT+"]
    return ["44+", "A9+", "KT+", "QJ+"]


def hand_notation(cards: Sequence[Card]) -> str:
    """Convert two hole cards to range notation: '77', 'AKs', 'T9o'."""
    if len(cards) != 2:
        raise ValueError(f"Hand notation needs exactly 2 cards, got {len(cards)}")
    high, low = sorted(cards, key=lambda c: c.value, reverse=True)
    if high.rank == low.rank:
        return high.rank.value * 2
    suffix = "s" if high.suit == low.suit else "o"
    return f"{high.rank.value}{low.rank.value}{suffix}"


def hand_in_range(notation: str, hand_range: Sequence[str]) -> bool:
    """Check whether a hand in range notation is covered by any range item."""
    return any(_matches(notation, item) for item in hand_range)


def _matches(notation: str, item: str) -> bool:
    plus = item.endswith("+")
    base = item[:-1] if plus else item

    hand_high, hand_low = Rank.from_char(notation[0]), Rank.from_char(notation[1])
    base_high, base_low = Rank.from_char(base[0]), Rank.from_char(base[1])

    # Pairs: '77' or '77+'
    if base_high == base_low:
        if hand_high != hand_low:
            return False
        if plus:
            return hand_high.numeric_value >= base_high.numeric_value
        return hand_high == base_high

    if hand_high == hand_low:
        return False

    # Unsuffixed items cover both suited and offsuit combos
    if len(base) == 3 and base[2] != notation[2]:
        return False

    if hand_high != base_high:
        return False
    if plus:
        return base_low.numeric_value <= hand_low.numeric_value < hand_high.numeric_value
    return hand_low == base_low


def should_push(hole_cards: Sequence[Card], csi: float, position: PositionLike,
                num_opponents: int = 1, has_antes: bool = False) -> bool:
    """Whether the hand is in the pushing range for this spot."""
    hand_range = get_push_range(csi, position, num_opponents, has_antes)
    return hand_in_range(hand_notation(hole_cards), hand_range)


def should_call_push(hole_cards: Sequence[Card], csi: float, position: PositionLike,
                     pusher_csi: float) -> bool:
    """Whether the hand is strong enough to call an all-in."""
    hand_range = get_calling_range(csi, position, pusher_csi)
    return hand_in_range(hand_notation(hole_cards), hand_range)


def get_recommended_action(hole_cards: Sequence[Card], csi: float,
                           position: Optional[PositionLike] = None,
                           facing: str = "none") -> str:
    """Plain-language advice for a spot.

    Args:
        hole_cards: The player's two hole cards.
        csi: The player's CSI.
        position: Position group, or None if unknown.
        facing: One of 'none', 'call', 'raise', 'all-in'.
    """
    if csi <= 2:
        if facing == "none":
            return "Push any two cards from late position, fold marginal hands from early position"
        return "Call very tight - only premium hands"

    if csi <= 7:
        if facing == "none":
            pushing = should_push(hole_cards, csi, position or PositionGroup.BUTTON)
            return "Push (all-in)" if pushing else "Fold"
        if facing == "all-in":
            calling = should_call_push(hole_cards, csi, position or PositionGroup.BIG_BLIND, csi)
            return "Call" if calling else "Fold"

    if csi <= 12:
        return "Mixed strategy - can play some post-flop poker with strong hands"
    return "Standard tournament play - use position and post-flop skills"


def get_csi_strategy_tips(csi: float) -> List[str]:
    """Strategy tips for the current stack depth."""
    if csi <= 2:
        return [
            "Push any two cards from small blind vs big blind",
            "Look for any reasonable spot to get chips in",
            "Don't fold in small blind unless facing a call",
            "Survival mode - need to double up quickly",
        ]
    if csi <= 5:
        return [
            "Push/fold is still primary strategy",
            "Widen pushing ranges from late position",
            "Avoid calling raises without very strong hands",
            "Use detailed push/fold charts",
        ]
    if csi <= 10:
        return [
            "Can occasionally call raises with strong hands",
            "Still primarily push/fold but with tighter ranges",
            "Look for spots to 3-bet shove",
            "Position becomes more important",
        ]
    if csi <= 15:
        return [
            "Can start playing some post-flop poker",
            "Still avoid marginal spots without good odds",
            "Mix between pushing and raising",
            "Use position more aggressively",
        ]
    return [
        "Can play more standard poker",
        "Use position and post-flop skills",
        "Still be aware of CSI for key decisions",
        "Look for accumulation opportunities",
    ]
