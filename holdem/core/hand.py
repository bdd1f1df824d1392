"""
Hand Evaluation for Texas Hold'em.

This module evaluates 5-7 cards and returns the best 5-card hand. Results
order by ``(category, score)`` where the category runs from 1 (High Card) to
10 (Royal Flush) and the score is a tuple of the ranks that break ties
inside a category:

    Royal / Straight Flush / Straight   (high,)            wheel high is 5
    Four of a Kind                      (quad, kicker)
    Full House                          (trips, pair)
    Flush / High Card                   five ranks, descending
    Three of a Kind                     (trips, k1, k2)
    Two Pair                            (high pair, low pair, kicker)
    One Pair                            (pair, k1, k2, k3)

Fewer than five cards yields a sentinel result with category 0.
"""

from __future__ import annotations
from typing import List, Tuple, Optional, Sequence
from itertools import combinations
from enum import IntEnum
from collections import Counter
from dataclasses import dataclass, field

from holdem.core.card import Card, Rank


class HandRank(IntEnum):
    """Hand categories from best (highest value) to worst (lowest value)."""
    ROYAL_FLUSH = 10
    STRAIGHT_FLUSH = 9
    FOUR_OF_A_KIND = 8
    FULL_HOUSE = 7
    FLUSH = 6
    STRAIGHT = 5
    THREE_OF_A_KIND = 4
    TWO_PAIR = 3
    ONE_PAIR = 2
    HIGH_CARD = 1


# Hand rank names for display
HAND_RANK_NAMES = {
    HandRank.ROYAL_FLUSH: "Royal Flush",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FLUSH: "Flush",
    HandRank.STRAIGHT: "Straight",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.ONE_PAIR: "One Pair",
    HandRank.HIGH_CARD: "High Card",
}

INSUFFICIENT_NAME = "insufficient"

WHEEL = [Rank.ACE, Rank.FIVE, Rank.FOUR, Rank.THREE, Rank.TWO]


@dataclass(frozen=True)
class HandResult:
    """
    Evaluated hand.

    Attributes:
        rank: Category 1-10, or 0 for the insufficient-cards sentinel
        score: Tie-breaking ranks within the category
        name: Category name
        best_cards: The five cards that make the hand
    """
    rank: int
    score: Tuple[int, ...] = ()
    name: str = INSUFFICIENT_NAME
    best_cards: Tuple[Card, ...] = field(default=(), compare=False)

    @property
    def key(self) -> Tuple[int, Tuple[int, ...]]:
        """Total ordering key."""
        return (self.rank, self.score)

    @property
    def value(self) -> int:
        """
        Single scalar tiebreaker: the primary rank of the category, or
        ``high_pair * 100 + low_pair`` for two pair. Ignores kickers.
        """
        if not self.score:
            return 0
        if self.rank == HandRank.TWO_PAIR:
            return self.score[0] * 100 + self.score[1]
        return self.score[0]

    @property
    def is_valid(self) -> bool:
        return self.rank > 0

    def __lt__(self, other: HandResult) -> bool:
        return self.key < other.key

    def __le__(self, other: HandResult) -> bool:
        return self.key <= other.key

    def __gt__(self, other: HandResult) -> bool:
        return self.key > other.key

    def __ge__(self, other: HandResult) -> bool:
        return self.key >= other.key

    def to_dict(self) -> dict:
        return {
            "rank": int(self.rank),
            "name": self.name,
            "score": list(self.score),
            "cards": [c.to_dict() for c in self.best_cards],
        }


INSUFFICIENT = HandResult(rank=0)


def evaluate_hand(cards: Sequence[Card]) -> HandResult:
    """
    Evaluate a poker hand (5-7 cards).

    Args:
        cards: Sequence of up to 7 distinct Card objects

    Returns:
        The best HandResult over every 5-card subset, or the sentinel
        (rank 0, name "insufficient") for fewer than 5 cards.

    Raises:
        ValueError: If more than 7 cards or duplicate cards are given
    """
    if len(cards) < 5:
        return INSUFFICIENT
    if len(cards) > 7:
        raise ValueError(f"Need 5-7 cards, got {len(cards)}")
    if len(set(cards)) != len(cards):
        raise ValueError("Duplicate cards in hand")

    best: Optional[HandResult] = None
    for combo in combinations(cards, 5):
        result = _evaluate_5_cards(list(combo))
        if best is None or result > best:
            best = result
    return best


def _evaluate_5_cards(cards: List[Card]) -> HandResult:
    """Evaluate exactly 5 cards."""
    # Sort by rank descending
    sorted_cards = sorted(cards, key=lambda c: c.rank, reverse=True)
    ranks = [c.rank for c in sorted_cards]

    is_flush = len({c.suit for c in cards}) == 1
    straight_high = _straight_high(ranks)

    # Count rank occurrences
    rank_counts = Counter(ranks)
    counts = sorted(rank_counts.values(), reverse=True)
    # Ranks ordered by (count, rank) descending: pairs/trips before kickers
    grouped = sorted(rank_counts, key=lambda r: (rank_counts[r], r), reverse=True)

    if straight_high and is_flush:
        hand_type = HandRank.ROYAL_FLUSH if straight_high == Rank.ACE else HandRank.STRAIGHT_FLUSH
        return _result(hand_type, (straight_high,), _straight_order(sorted_cards, straight_high))

    if counts == [4, 1]:
        return _result(HandRank.FOUR_OF_A_KIND, tuple(grouped), _sort_by_count(sorted_cards, rank_counts))

    if counts == [3, 2]:
        return _result(HandRank.FULL_HOUSE, tuple(grouped), _sort_by_count(sorted_cards, rank_counts))

    if is_flush:
        return _result(HandRank.FLUSH, tuple(ranks), sorted_cards)

    if straight_high:
        return _result(HandRank.STRAIGHT, (straight_high,), _straight_order(sorted_cards, straight_high))

    if counts == [3, 1, 1]:
        return _result(HandRank.THREE_OF_A_KIND, tuple(grouped), _sort_by_count(sorted_cards, rank_counts))

    if counts == [2, 2, 1]:
        return _result(HandRank.TWO_PAIR, tuple(grouped), _sort_by_count(sorted_cards, rank_counts))

    if counts == [2, 1, 1, 1]:
        return _result(HandRank.ONE_PAIR, tuple(grouped), _sort_by_count(sorted_cards, rank_counts))

    return _result(HandRank.HIGH_CARD, tuple(ranks), sorted_cards)


def _result(hand_type: HandRank, score: Tuple[int, ...], cards: List[Card]) -> HandResult:
    return HandResult(
        rank=int(hand_type),
        score=tuple(int(r) for r in score),
        name=HAND_RANK_NAMES[hand_type],
        best_cards=tuple(cards),
    )


def _straight_high(ranks: List[Rank]) -> int:
    """
    High card of the straight formed by five descending ranks, 0 if none.
    The wheel (A-2-3-4-5) is five high.
    """
    unique_ranks = sorted(set(ranks), reverse=True)
    if len(unique_ranks) != 5:
        return 0

    if unique_ranks[0] - unique_ranks[4] == 4:
        return int(unique_ranks[0])

    if unique_ranks == WHEEL:
        return int(Rank.FIVE)

    return 0


def _sort_by_count(cards: List[Card], rank_counts: Counter) -> List[Card]:
    """Sort cards by count (descending), then by rank (descending)."""
    return sorted(cards, key=lambda c: (rank_counts[c.rank], c.rank), reverse=True)


def _straight_order(cards: List[Card], straight_high: int) -> List[Card]:
    """Wheel straights put the Ace last (5-4-3-2-A)."""
    if straight_high != Rank.FIVE:
        return cards
    ace = [c for c in cards if c.rank == Rank.ACE]
    return [c for c in cards if c.rank != Rank.ACE] + ace


def compare_hands(cards1: Sequence[Card], cards2: Sequence[Card]) -> int:
    """
    Compare two hands.

    Returns:
        1 if cards1 wins, -1 if cards2 wins, 0 if tie
    """
    result1 = evaluate_hand(cards1)
    result2 = evaluate_hand(cards2)

    if result1 > result2:
        return 1
    if result1 < result2:
        return -1
    return 0


def get_hand_description(cards: Sequence[Card]) -> str:
    """Get a human-readable description of the hand."""
    result = evaluate_hand(cards)
    if not result.is_valid:
        return "Incomplete hand"

    hand_type = HandRank(result.rank)
    score = result.score

    if hand_type == HandRank.ROYAL_FLUSH:
        return "Royal Flush"
    elif hand_type == HandRank.STRAIGHT_FLUSH:
        return f"Straight Flush, {_rank_name(score[0])} high"
    elif hand_type == HandRank.FOUR_OF_A_KIND:
        return f"Four of a Kind, {_plural(score[0])}"
    elif hand_type == HandRank.FULL_HOUSE:
        return f"Full House, {_plural(score[0])} full of {_plural(score[1])}"
    elif hand_type == HandRank.FLUSH:
        return f"Flush, {_rank_name(score[0])} high"
    elif hand_type == HandRank.STRAIGHT:
        if score[0] == Rank.FIVE:
            return "Straight, Five high (Wheel)"
        return f"Straight, {_rank_name(score[0])} high"
    elif hand_type == HandRank.THREE_OF_A_KIND:
        return f"Three of a Kind, {_plural(score[0])}"
    elif hand_type == HandRank.TWO_PAIR:
        return f"Two Pair, {_plural(score[0])} and {_plural(score[1])}"
    elif hand_type == HandRank.ONE_PAIR:
        return f"Pair of {_plural(score[0])}"
    else:
        return f"High Card, {_rank_name(score[0])}"


_RANK_NAMES = {
    Rank.TWO: "Two", Rank.THREE: "Three", Rank.FOUR: "Four",
    Rank.FIVE: "Five", Rank.SIX: "Six", Rank.SEVEN: "Seven",
    Rank.EIGHT: "Eight", Rank.NINE: "Nine", Rank.TEN: "Ten",
    Rank.JACK: "Jack", Rank.QUEEN: "Queen", Rank.KING: "King",
    Rank.ACE: "Ace",
}


def _rank_name(rank: int) -> str:
    """Get the name of a rank."""
    return _RANK_NAMES[Rank(rank)]


def _plural(rank: int) -> str:
    name = _rank_name(rank)
    return f"{name}es" if name == "Six" else f"{name}s"
