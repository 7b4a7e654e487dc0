"""Tests for cards and the deck."""

import random

import pytest

from holdem_trainer.engine.deck import Deck
from holdem_trainer.models.card import (
    Card, Rank, Suit, format_cards, full_deck, parse_cards, remaining_cards,
)


class TestCard:
    """Tests for Card parsing and display."""

    def test_parse_short_form(self):
        card = Card.parse("Ah")
        assert card.rank == Rank.ACE
        assert card.suit == Suit.HEARTS

    def test_parse_ten_forms(self):
        assert Card.parse("Ts") == Card.parse("10s") == Card(Rank.TEN, Suit.SPADES)

    def test_parse_unicode_suit(self):
        assert Card.parse("Q♠") == Card(Rank.QUEEN, Suit.SPADES)

    def test_parse_lowercase_rank(self):
        assert Card.parse("kd") == Card(Rank.KING, Suit.DIAMONDS)

    def test_parse_invalid(self):
        with pytest.raises(ValueError):
            Card.parse("Xx")
        with pytest.raises(ValueError):
            Card.parse("Ahh")

    def test_value(self):
        assert Card.parse("2c").value == 2
        assert Card.parse("Ac").value == 14

    def test_str_uses_suit_symbol(self):
        assert str(Card.parse("Ah")) == "A♥"
        assert repr(Card.parse("Ah")) == "Ah"
        assert Card.parse("Ah").to_short() == "Ah"

    def test_equality_and_hash(self):
        """Cards with the same rank and suit are interchangeable."""
        assert Card.parse("7d") == Card(Rank.SEVEN, Suit.DIAMONDS)
        assert len({Card.parse("7d"), Card.parse("7d"), Card.parse("7h")}) == 2

    def test_parse_cards_separators(self):
        cards = parse_cards("Ah Kh, Qh")
        assert [c.to_short() for c in cards] == ["Ah", "Kh", "Qh"]
        assert parse_cards("") == []

    def test_format_cards(self):
        assert format_cards(parse_cards("Ah Td")) == "A♥ T♦"


class TestFullDeck:
    """Tests for the helper card sets."""

    def test_full_deck_unique(self):
        deck = full_deck()
        assert len(deck) == 52
        assert len(set(deck)) == 52

    def test_remaining_cards(self):
        used = parse_cards("Ah Kh")
        rest = remaining_cards(used)
        assert len(rest) == 50
        assert not set(used) & set(rest)


class TestDeck:
    """Tests for the Deck class."""

    def test_deck_initialization(self):
        """A new deck holds 52 distinct cards."""
        deck = Deck(random.Random(1))
        assert len(deck) == 52
        assert deck.size() == 52
        assert len(set(deck.cards)) == 52

    def test_shuffle_is_seeded(self):
        """Decks built from the same seed deal the same order."""
        first = Deck(random.Random(42))
        second = Deck(random.Random(42))
        assert first.deal_many(10) == second.deal_many(10)

    def test_deal_one(self):
        deck = Deck(random.Random(3))
        top = deck.cards[-1]
        assert deck.deal() == top
        assert len(deck) == 51

    def test_deal_many(self):
        deck = Deck(random.Random(3))
        dealt = deck.deal_many(5)
        assert len(dealt) == 5
        assert len(deck) == 47
        assert not set(dealt) & set(deck.cards)

    def test_deal_from_empty_deck(self):
        """An exhausted deck deals None instead of raising."""
        deck = Deck(random.Random(3))
        assert len(deck.deal_many(60)) == 52
        assert deck.deal() is None
        assert deck.burn() is None

    def test_burn(self):
        deck = Deck(random.Random(3))
        burned = deck.burn()
        assert burned is not None
        assert burned not in deck.cards
        assert len(deck) == 51

    def test_peek(self):
        deck = Deck(random.Random(3))
        assert deck.peek(0) == deck.cards[0]
        assert deck.peek(52) is None
        assert deck.peek(-1) is None
        assert len(deck) == 52

    def test_reset(self):
        deck = Deck(random.Random(3))
        deck.deal_many(10)
        deck.reset()
        assert len(deck) == 52
        assert len(set(deck.cards)) == 52
