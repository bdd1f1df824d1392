"""
Tests for Card and Deck classes.
"""

import random

import pytest
from holdem.core.card import Card, Deck, Rank, Suit, full_deck, parse_cards


class TestCard:
    """Tests for Card class."""

    def test_card_from_string(self):
        """Rank char plus suit char or symbol, and a two-digit ten."""
        assert Card.from_string("As") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("K♥") == Card(Rank.KING, Suit.HEARTS)
        assert Card.from_string("Td") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("10c") == Card(Rank.TEN, Suit.CLUBS)

    @pytest.mark.parametrize("text", ["", "A", "1s", "Ax", "Zh"])
    def test_card_from_bad_string(self, text):
        """Unknown ranks or suits are rejected."""
        with pytest.raises(ValueError):
            Card.from_string(text)

    def test_card_equality_and_hash(self):
        """Cards compare and hash by rank and suit."""
        card1 = Card(Rank.ACE, Suit.SPADES)
        card2 = Card(Rank.ACE, Suit.SPADES)
        card3 = Card(Rank.ACE, Suit.HEARTS)

        assert card1 == card2
        assert card1 != card3
        assert card2 in {card1}

    def test_card_str(self):
        """Display text prints ten as 10, the short form as T."""
        assert str(Card(Rank.ACE, Suit.SPADES)) == "A♠"
        assert str(Card(Rank.TEN, Suit.HEARTS)) == "10♥"
        assert Card(Rank.TEN, Suit.HEARTS).short_str == "Th"

    def test_card_to_dict(self):
        """Serialized card carries rank, suit, text and color."""
        data = Card(Rank.TEN, Suit.DIAMONDS).to_dict()
        assert data == {"rank": "10", "suit": "♦", "text": "10♦", "color": "red"}
        assert Card(Rank.TWO, Suit.CLUBS).color == "black"


class TestDeck:
    """Tests for Deck class."""

    def test_deck_has_52_unique_cards(self, unshuffled_deck):
        """A new deck holds every card exactly once."""
        assert len(unshuffled_deck) == 52
        cards = unshuffled_deck.deal(52)
        assert len(set(cards)) == 52
        assert set(cards) == set(full_deck())

    def test_deck_deal(self, deck):
        """Dealing removes cards from the deck."""
        cards = deck.deal(5)
        assert len(cards) == 5
        assert deck.remaining == 47
        assert all(c not in deck for c in cards)

    def test_deck_pop_empty(self, unshuffled_deck):
        """Popping an empty deck is an error."""
        unshuffled_deck.deal(52)
        with pytest.raises(ValueError):
            unshuffled_deck.pop()

    def test_deck_deal_too_many(self, deck):
        """Dealing more cards than remain is an error."""
        with pytest.raises(ValueError):
            deck.deal(53)

    def test_deck_burn(self, deck):
        """Burning discards the top card."""
        burned = deck.burn()
        assert isinstance(burned, Card)
        assert deck.remaining == 51
        assert burned not in deck

    def test_same_seed_same_order(self):
        """Shuffles are reproducible from a seed."""
        first = Deck(rng=random.Random(99)).deal(52)
        second = Deck(rng=random.Random(99)).deal(52)
        assert first == second

    def test_shuffle_changes_order(self):
        """A seeded shuffle does not leave the canonical order."""
        shuffled = Deck(rng=random.Random(5)).deal(52)
        unshuffled = Deck(shuffle=False).deal(52)
        assert shuffled != unshuffled

    def test_duplicate_cards_rejected(self):
        """A deck cannot hold the same card twice."""
        with pytest.raises(ValueError):
            Deck(shuffle=False, cards=parse_cards("As As"))

    def test_from_deal_order(self):
        """Listed cards come off the top first, the rest follow."""
        deck = Deck.from_deal_order(parse_cards("As Kd 2c"))
        assert deck.remaining == 52
        assert deck.deal(3) == parse_cards("As Kd 2c")
        assert Card(Rank.ACE, Suit.SPADES) not in deck


class TestParseCards:
    """Tests for parse_cards function."""

    def test_parse_space_separated(self):
        """Space-separated cards, including a two-digit ten."""
        cards = parse_cards("As 10h Qd")
        assert [c.rank for c in cards] == [Rank.ACE, Rank.TEN, Rank.QUEEN]

    def test_parse_no_separator(self):
        """Two characters per card without spaces."""
        assert parse_cards("AsKhQd") == parse_cards("As Kh Qd")

    def test_parse_with_symbols(self):
        """Suit symbols parse like suit chars."""
        assert parse_cards("A♠ K♥ Q♦") == parse_cards("As Kh Qd")

    def test_parse_empty(self):
        """An empty string is no cards."""
        assert parse_cards("") == []
