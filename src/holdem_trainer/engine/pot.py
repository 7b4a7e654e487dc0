"""Pot management for the game engine."""

from typing import Dict, List


class PotManager:
    """Tracks a single main pot and each seat's contribution to it.

    Every hand is played for one pot; an all-in player who is outbet
    remains eligible for all of it.
    """

    def __init__(self):
        """Initialize an empty pot manager."""
        self.total: int = 0
        # Total invested per seat this hand
        self.contributions: Dict[int, int] = {}

    def add(self, seat: int, amount: int):
        """Add chips from a player.

        Args:
            seat: The player's seat index.
            amount: The number of chips moved into the pot.
        """
        if amount < 0:
            raise ValueError(f"Cannot add a negative amount ({amount}) to the pot")
        self.contributions[seat] = self.contributions.get(seat, 0) + amount
        self.total += amount

    def get_total_invested(self, seat: int) -> int:
        return self.contributions.get(seat, 0)

    def reset_hand(self):
        """Reset everything for a new hand."""
        self.total = 0
        self.contributions.clear()

    def distribute(self, winners: List[int], dealer_index: int,
                   num_seats: int) -> Dict[int, int]:
        """Split the pot evenly among winners.

        Odd chips go one at a time to the winners in seat order starting
        left of the dealer, so the whole pot is always paid out.

        Args:
            winners: Seat indices of the winning players.
            dealer_index: Seat index of the button.
            num_seats: Number of seats at the table.

        Returns:
            Mapping from seat to amount won.
        """
        if not winners:
            return {}

        share, remainder = divmod(self.total, len(winners))
        payouts = {seat: share for seat in winners}

        ordered = sorted(winners, key=lambda s: (s - dealer_index - 1) % num_seats)
        for seat in ordered[:remainder]:
            payouts[seat] += 1

        return payouts

    def __repr__(self) -> str:
        return f"PotManager(total={self.total}, contributors={len(self.contributions)})"
