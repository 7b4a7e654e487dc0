"""Deck management for the game engine."""

import random
from typing import List, Optional

from holdem_trainer.models.card import Card, full_deck


class Deck:
    """A standard 52-card deck. Cards are dealt from the top (end of list)."""

    def __init__(self, rng: Optional[random.Random] = None):
        """Initialize a new shuffled deck with all 52 cards.

        Args:
            rng: Random source used for shuffling. Defaults to a fresh
                ``random.Random``.
        """
        self.rng = rng or random.Random()
        self.cards: List[Card] = []
        self.reset()

    def reset(self):
        """Repopulate all 52 cards and shuffle."""
        self.cards = full_deck()
        self.shuffle()

    def shuffle(self):
        """Shuffle the remaining cards in place (Fisher-Yates)."""
        self.rng.shuffle(self.cards)

    def deal(self) -> Optional[Card]:
        """Remove and return the top card, or None if the deck is empty."""
        if not self.cards:
            return None
        return self.cards.pop()

    def deal_many(self, count: int) -> List[Card]:
        """Deal up to ``count`` cards; fewer if the deck runs out."""
        dealt = []
        for _ in range(count):
            card = self.deal()
            if card is None:
                break
            dealt.append(card)
        return dealt

    def burn(self) -> Optional[Card]:
        """Discard the top card."""
        return self.deal()

    def peek(self, index: int) -> Optional[Card]:
        if 0 <= index < len(self.cards):
            return self.cards[index]
        return None

    def size(self) -> int:
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __repr__(self) -> str:
        return f"Deck(remaining={len(self.cards)})"
