"""Card, Rank, and Suit models."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List


class Suit(str, Enum):
    HEARTS = "h"
    DIAMONDS = "d"
    CLUBS = "c"
    SPADES = "s"

    @classmethod
    def from_symbol(cls, s: str) -> "Suit":
        mapping = {
            "h": cls.HEARTS, "hearts": cls.HEARTS, "♥": cls.HEARTS,
            "d": cls.DIAMONDS, "diamonds": cls.DIAMONDS, "♦": cls.DIAMONDS,
            "c": cls.CLUBS, "clubs": cls.CLUBS, "♣": cls.CLUBS,
            "s": cls.SPADES, "spades": cls.SPADES, "♠": cls.SPADES,
        }
        key = s if s in mapping else s.lower()
        if key in mapping:
            return mapping[key]
        raise ValueError(f"Unknown suit: {s}")

    @property
    def symbol(self) -> str:
        return {"h": "♥", "d": "♦", "c": "♣", "s": "♠"}[self.value]


class Rank(str, Enum):
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "T"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    @property
    def numeric_value(self) -> int:
        return _RANK_VALUES[self.value]

    @classmethod
    def from_char(cls, c: str) -> "Rank":
        if c == "10":
            return cls.TEN
        for r in cls:
            if r.value == c.upper():
                return r
        raise ValueError(f"Unknown rank: {c}")


_RANK_VALUES = {
    "2": 2, "3": 3, "4": 4, "5": 5, "6": 6, "7": 7, "8": 8,
    "9": 9, "T": 10, "J": 11, "Q": 12, "K": 13, "A": 14,
}


@dataclass(frozen=True)
class Card:
    """A single playing card. Equality is by (rank, suit)."""
    rank: Rank
    suit: Suit

    @classmethod
    def parse(cls, s: str) -> "Card":
        """Parse a card string like 'Ah', 'Ts', '10c' or 'Q♠'."""
        s = s.strip()
        if len(s) == 2:
            return cls(Rank.from_char(s[0]), Suit.from_symbol(s[1]))
        elif len(s) == 3 and s[:2] == "10":
            return cls(Rank.TEN, Suit.from_symbol(s[2]))
        raise ValueError(f"Cannot parse card: {s}")

    @property
    def value(self) -> int:
        return self.rank.numeric_value

    def __repr__(self) -> str:
        return f"{self.rank.value}{self.suit.value}"

    def __str__(self) -> str:
        return f"{self.rank.value}{self.suit.symbol}"

    def to_short(self) -> str:
        """Return short string like 'Ah'."""
        return f"{self.rank.value}{self.suit.value}"


def parse_cards(text: str) -> List[Card]:
    """Parse a whitespace or comma separated list of cards."""
    return [Card.parse(token) for token in re.split(r"[\s,]+", text) if token]


def full_deck() -> List[Card]:
    """All 52 cards in suit-major order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def remaining_cards(excluded: Iterable[Card]) -> List[Card]:
    """All cards of a fresh deck that are not in ``excluded``."""
    seen = set(excluded)
    return [card for card in full_deck() if card not in seen]


def format_cards(cards: Iterable[Card]) -> str:
    return " ".join(str(c) for c in cards)
