"""
Card and Deck classes for Texas Hold'em.

Ranks carry their poker value (2-14, Ace high) so the evaluator can compare
them directly. The deck takes its randomness from an injected
``random.Random`` so hands can be replayed from a seed.
"""

from __future__ import annotations
import random
from typing import Iterable, List, Optional
from enum import IntEnum


class Suit(IntEnum):
    """Card suits."""
    SPADES = 0    # ♠
    HEARTS = 1    # ♥
    DIAMONDS = 2  # ♦
    CLUBS = 3     # ♣


class Rank(IntEnum):
    """Card ranks valued 2 (lowest) to 14 (Ace)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


# String mappings
SUIT_SYMBOLS = {
    Suit.SPADES: "♠",
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
}

SUIT_CHARS = {
    Suit.SPADES: "s",
    Suit.HEARTS: "h",
    Suit.DIAMONDS: "d",
    Suit.CLUBS: "c",
}

RANK_CHARS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "T",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

# Reverse mappings
CHAR_TO_RANK = {v: k for k, v in RANK_CHARS.items()}
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {v: k for k, v in SUIT_SYMBOLS.items()}


def rank_label(rank: Rank) -> str:
    """Face label as printed on the card ("10" rather than "T")."""
    return "10" if rank == Rank.TEN else RANK_CHARS[rank]


class Card:
    """
    A playing card represented as (suit, rank).

    Cards can be created from:
    - Rank and Suit enums: Card(Rank.ACE, Suit.SPADES)
    - String notation: Card.from_string("As"), "10h" or "A♠"

    Equality and hashing are structural.
    """

    __slots__ = ("rank", "suit")

    def __init__(self, rank: Rank, suit: Suit):
        self.rank = Rank(rank)
        self.suit = Suit(suit)

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        Accepts formats:
        - "As", "Kh", "Td", "2c" (rank + suit char)
        - "10h" (two-digit ten)
        - "A♠", "K♥", "T♦", "2♣" (rank + suit symbol)
        """
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        if s.startswith("10"):
            rank_part, suit_part = "T", s[2:]
        else:
            rank_part, suit_part = s[0].upper(), s[1:]

        if rank_part not in CHAR_TO_RANK:
            raise ValueError(f"Invalid rank: {rank_part}")
        rank = CHAR_TO_RANK[rank_part]

        # Try suit char first, then symbol
        if suit_part.lower() in CHAR_TO_SUIT:
            suit = CHAR_TO_SUIT[suit_part.lower()]
        elif suit_part in SYMBOL_TO_SUIT:
            suit = SYMBOL_TO_SUIT[suit_part]
        else:
            raise ValueError(f"Invalid suit: {suit_part}")

        return cls(rank, suit)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Card):
            return self.rank == other.rank and self.suit == other.suit
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.suit, self.rank))

    def __repr__(self) -> str:
        return f"Card({self.short_str})"

    def __str__(self) -> str:
        return f"{rank_label(self.rank)}{SUIT_SYMBOLS[self.suit]}"

    @property
    def short_str(self) -> str:
        """Short string like 'As', 'Th'."""
        return f"{RANK_CHARS[self.rank]}{SUIT_CHARS[self.suit]}"

    @property
    def color(self) -> str:
        """Return 'red' for hearts/diamonds, 'black' for clubs/spades."""
        return "red" if self.suit in (Suit.HEARTS, Suit.DIAMONDS) else "black"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "rank": rank_label(self.rank),
            "suit": SUIT_SYMBOLS[self.suit],
            "text": str(self),
            "color": self.color,
        }


def full_deck() -> List[Card]:
    """All 52 cards in canonical order (suit by suit, ranks ascending)."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


class Deck:
    """
    A standard 52-card deck. Cards are dealt from the end of the list.

    Usage:
        deck = Deck(rng=random.Random(7))
        hole_cards = deck.deal(2)
        flop = deck.deal(3)
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        shuffle: bool = True,
        cards: Optional[Iterable[Card]] = None,
    ):
        """
        Args:
            rng: Random source for shuffling (a fresh one if omitted)
            shuffle: Shuffle on construction
            cards: Explicit card order; the last card is the top of the deck
        """
        self._rng = rng if rng is not None else random.Random()
        self._cards: List[Card] = list(cards) if cards is not None else full_deck()
        if len(set(self._cards)) != len(self._cards):
            raise ValueError("Deck contains duplicate cards")
        if shuffle:
            self.shuffle()

    @classmethod
    def from_deal_order(cls, cards: Iterable[Card]) -> Deck:
        """
        Build an unshuffled deck that deals ``cards`` in the given order.

        Any of the 52 cards not listed are placed underneath, so the deck
        stays complete.
        """
        ordered = list(cards)
        listed = set(ordered)
        rest = [c for c in full_deck() if c not in listed]
        return cls(shuffle=False, cards=rest + list(reversed(ordered)))

    def shuffle(self) -> None:
        """Fisher-Yates shuffle of the remaining cards."""
        cards = self._cards
        for i in range(len(cards) - 1, 0, -1):
            j = self._rng.randint(0, i)
            cards[i], cards[j] = cards[j], cards[i]

    def pop(self) -> Card:
        """
        Remove and return the top card.

        Raises:
            ValueError: If the deck is empty.
        """
        if not self._cards:
            raise ValueError("Cannot deal from an empty deck")
        return self._cards.pop()

    def deal(self, n: int = 1) -> List[Card]:
        """
        Deal n cards from the top of the deck.

        Raises:
            ValueError: If not enough cards remain.
        """
        if n > len(self._cards):
            raise ValueError(f"Cannot deal {n} cards, only {len(self._cards)} remain")
        return [self._cards.pop() for _ in range(n)]

    def burn(self) -> Card:
        """Burn (discard) the top card."""
        return self.pop()

    @property
    def remaining(self) -> int:
        """Number of cards remaining in the deck."""
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, card: object) -> bool:
        return card in self._cards

    def __repr__(self) -> str:
        return f"Deck({self.remaining} cards remaining)"


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse multiple cards from a string.

    Accepts formats:
    - "As Kh Td" (space-separated, "10h" allowed)
    - "AsKhTd" (no separator, 2 chars each)
    - "A♠ K♥ T♦" (with symbols)

    Returns:
        List of Card objects
    """
    cards_str = cards_str.strip()
    if not cards_str:
        return []

    # Try space-separated first
    if " " in cards_str:
        return [Card.from_string(s) for s in cards_str.split()]

    # Try 2-char chunks
    result = []
    i = 0
    while i < len(cards_str):
        chunk = cards_str[i:i + 2]
        if len(chunk) == 2 and (chunk[1] in SYMBOL_TO_SUIT or chunk[1].lower() in CHAR_TO_SUIT):
            result.append(Card.from_string(chunk))
            i += 2
        else:
            raise ValueError(f"Cannot parse card at position {i}: {cards_str[i:]}")

    return result
