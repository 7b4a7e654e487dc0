"""Position model and seat mapping algorithm."""

from enum import Enum
from typing import Dict


class Position(str, Enum):
    UTG = "UTG"
    UTG1 = "UTG+1"
    MP = "MP"
    MP1 = "MP+1"
    HJ = "HJ"
    CO = "CO"
    BTN = "BTN"
    SB = "SB"
    BB = "BB"

    @property
    def is_early(self) -> bool:
        return self in (Position.UTG, Position.UTG1)

    @property
    def is_middle(self) -> bool:
        return self in (Position.MP, Position.MP1)

    @property
    def group(self) -> "PositionGroup":
        if self == Position.BTN:
            return PositionGroup.BUTTON
        if self == Position.SB:
            return PositionGroup.SMALL_BLIND
        if self == Position.BB:
            return PositionGroup.BIG_BLIND
        if self.is_early:
            return PositionGroup.EARLY
        if self.is_middle:
            return PositionGroup.MIDDLE
        return PositionGroup.LATE


class PositionGroup(str, Enum):
    """Coarse position used by push/fold charts and the AI."""
    EARLY = "early"
    MIDDLE = "middle"
    LATE = "late"
    BUTTON = "button"
    SMALL_BLIND = "small_blind"
    BIG_BLIND = "big_blind"

    @property
    def value_score(self) -> float:
        """Positional advantage in [0, 1]; blinds lowest, button highest."""
        return _GROUP_VALUES[self]


_GROUP_VALUES = {
    PositionGroup.SMALL_BLIND: 0.0,
    PositionGroup.BIG_BLIND: 0.05,
    PositionGroup.EARLY: 0.1,
    PositionGroup.MIDDLE: 0.3,
    PositionGroup.LATE: 0.6,
    PositionGroup.BUTTON: 0.8,
}

# Seats clockwise from the button, indexed by table size.
_POSITION_ORDERS = {
    2: [Position.BTN, Position.SB],
    3: [Position.BTN, Position.SB, Position.BB],
    4: [Position.BTN, Position.SB, Position.BB, Position.UTG],
    5: [Position.BTN, Position.SB, Position.BB, Position.UTG, Position.CO],
    6: [Position.BTN, Position.SB, Position.BB, Position.UTG, Position.MP, Position.CO],
    7: [Position.BTN, Position.SB, Position.BB, Position.UTG, Position.MP, Position.HJ, Position.CO],
    8: [Position.BTN, Position.SB, Position.BB, Position.UTG, Position.UTG1, Position.MP,
        Position.HJ, Position.CO],
    9: [Position.BTN, Position.SB, Position.BB, Position.UTG, Position.UTG1, Position.MP,
        Position.MP1, Position.HJ, Position.CO],
    10: [Position.BTN, Position.SB, Position.BB, Position.UTG, Position.UTG1, Position.MP,
         Position.MP1, Position.HJ, Position.HJ, Position.CO],
}


def assign_positions(num_seats: int, dealer_index: int) -> Dict[int, Position]:
    """Assign positions to seat indices 0..num_seats-1 given the button.

    Positions run clockwise from the button: BTN, SB, BB, UTG, ... CO.
    Heads-up the non-button seat is the small blind.

    Args:
        num_seats: Number of seats at the table.
        dealer_index: The seat index holding the dealer button.

    Returns:
        Mapping from seat index to Position.
    """
    if num_seats < 2:
        return {}

    positions = _POSITION_ORDERS[min(num_seats, 10)]
    return {
        (dealer_index + offset) % num_seats: positions[offset]
        for offset in range(num_seats)
    }


def position_group(seat_index: int, num_seats: int, dealer_index: int) -> PositionGroup:
    """Return the coarse position group for a seat."""
    positions = assign_positions(num_seats, dealer_index)
    if seat_index not in positions:
        return PositionGroup.BUTTON
    return positions[seat_index].group
